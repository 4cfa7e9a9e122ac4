"""Tests for the business value objects."""

from datetime import datetime, timezone

import pytest

from orderdocs.models import Order, format_gallons, format_money, format_rate

from conftest import make_product


class TestFormatters:
    """Test suite for money, rate and weight formatting."""

    @pytest.mark.parametrize("amount,expected", [
        (0, "$0.00"),
        (5, "$5.00"),
        (1234.5, "$1,234.50"),
        (-12.25, "-$12.25"),
    ])
    def test_format_money(self, amount, expected):
        assert format_money(amount) == expected

    def test_format_rate(self):
        assert format_rate(0.0825) == "8.25%"
        assert format_rate(0.1) == "10.00%"

    def test_format_gallons(self):
        assert format_gallons(2) == "2.00 gal"
        assert format_gallons(1.5, "GAL") == "1.50 GAL"


class TestProduct:
    """Test suite for Product."""

    @pytest.mark.parametrize("size,unit,quantity,gallons", [
        (1.0, "GAL", 3, 3.0),
        (32.0, "OZ", 4, 1.0),
        (2.0, "QT", 2, 1.0),
        (8.0, "LB", 1, 1.0),
        (240.0, "SHEETS", 128, 0.15),
        (3.0, "CASE", 2, 6.0),
    ])
    def test_weight_in_gallons(self, size, unit, quantity, gallons):
        product = make_product(size=size, size_unit=unit, quantity=quantity)
        assert product.weight_in_gallons == pytest.approx(gallons)

    def test_formatted_fields(self):
        product = make_product(price=12.5, quantity=3, purchase_price=7.5)
        assert product.formatted_description() == "Acme - Industrial Cleaner 1.00 GAL (Pack of 4)"
        assert product.short_description() == "Industrial Cleaner 1 GAL x4"
        assert product.formatted_total_price() == "$37.50"
        assert product.formatted_total_revenue() == "$15.00"

    def test_hazardous_weights(self):
        safe = make_product(quantity=2)
        risky = make_product(quantity=2, hazardous=True)
        assert (safe.formatted_hazardous(), safe.formatted_hazardous_weight()) == ("No", "N/A")
        assert safe.formatted_non_hazardous_weight() == "2.00 gal"
        assert (risky.formatted_hazardous(), risky.formatted_non_hazardous_weight()) == ("Yes", "N/A")


class TestOrder:
    """Test suite for Order."""

    def test_items_stored_as_tuple(self, order):
        assert isinstance(order.items, tuple)

    def test_money_totals(self, order):
        assert order.subtotal == pytest.approx(321.0)
        assert order.tax_amount == pytest.approx(26.4825)
        assert order.cost_of_goods == pytest.approx(260.0)
        assert order.total_revenue == pytest.approx(61.0)
        assert order.formatted_total() == "$347.48"

    def test_shipping_totals(self, order):
        assert order.total_units == 7
        assert order.formatted_net_weight() == "4.00 GAL"
        assert order.formatted_hazardous_weight() == "1.00 GAL"
        assert order.formatted_non_hazardous_weight() == "3.00 GAL"

    def test_to_local(self, order):
        moment = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)
        local = order.to_local(moment)
        assert local == moment

    def test_to_local_treats_naive_as_utc(self, customer):
        order = Order(
            id="ORD1",
            customer=customer,
            items=[],
            tax_rate=0.0,
            created_at=datetime(2025, 7, 1, 12, 0),
            time_zone="America/Los_Angeles",
        )
        assert order.local_created_at.hour == 5
        assert order.local_updated_at == order.local_created_at


class TestCustomer:
    """Test suite for Customer."""

    def test_display_name_and_address(self, customer):
        assert customer.address_line2 == "Clovis, CA 93611"
        assert customer.display_name == "Valley Medical Center"
