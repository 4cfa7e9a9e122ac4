"""Shared fixtures for the orderdocs test suite."""

from datetime import datetime, timezone

import numpy as np
import pytest

from orderdocs.canvas import Canvas
from orderdocs.config import CompanyDetails
from orderdocs.layout_engine import PageFrame
from orderdocs.models import Customer, Order, Product
from orderdocs.samples import make_png
from orderdocs.styles import DocumentType, get_document_style
from orderdocs.text_metrics import TextMeasurer


class FixedMeasurer(TextMeasurer):
    """Every line is 4mm tall and every character 1mm wide, so layout math is exact."""

    LINE_HEIGHT = 4.0

    def measure(self, text, font):
        return self.LINE_HEIGHT

    def width(self, text, font):
        return float(len(text))


@pytest.fixture
def fixed_measurer():
    return FixedMeasurer()


@pytest.fixture
def company():
    return CompanyDetails(
        name="Acme Supply Co",
        address_line1="100 Main Street",
        address_line2="Fresno, CA 93721",
        phone="(559) 555-0100",
        email="orders@acme.test",
        website="www.acme.test",
        phone_24h="(559) 555-0199",
    )


@pytest.fixture
def customer():
    return Customer(
        id="CUS-1",
        name="Valley Medical Center",
        email="facilities@valley.test",
        phone="(559) 555-0142",
        address1="2500 Orchard Ave",
        city="Clovis",
        state="CA",
        zip="93611",
    )


def make_product(index=0, **overrides):
    values = dict(
        id=f"prod-{index}",
        brand="Acme",
        name="Industrial Cleaner",
        sku=f"ACM-CLN-{100 + index}",
        size=1.0,
        size_unit="GAL",
        pack_of=4,
        price=50.0,
        quantity=2,
        hazardous=False,
        purchase_price=30.0,
    )
    values.update(overrides)
    return Product(**values)


@pytest.fixture
def order(customer):
    return Order(
        id="ORD123",
        customer=customer,
        items=[
            make_product(0),
            make_product(1, name="Glass Cleaner", size=32.0, size_unit="OZ", price=25.25, quantity=4),
            make_product(2, name="Floor Stripper", hazardous=True, price=120.0, quantity=1, purchase_price=80.0),
        ],
        tax_rate=0.0825,
        created_at=datetime(2025, 3, 1, 17, 30, tzinfo=timezone.utc),
        updated_at=datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc),
        special_instructions="Deliver to the loading dock.",
        time_zone="UTC",
    )


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def png_bytes():
    return make_png(80, 40, (200, 30, 30))


@pytest.fixture
def invoice_canvas():
    """A canvas on the standard frame with the invoice style."""
    def factory(measurer=None, image_loader=None, frame=None):
        return Canvas(
            frame or PageFrame.standard(),
            get_document_style(DocumentType.INVOICE),
            image_loader=image_loader,
            measurer=measurer,
        )
    return factory
