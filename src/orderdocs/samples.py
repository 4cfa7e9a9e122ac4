"""Generate realistic sample customers, orders and deliveries for demos and tests."""

import io
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple
import numpy as np
from faker import Faker
from PIL import Image, ImageDraw

from .config import CompanyDetails
from .models import Customer, Delivery, Order, Product


# brand, name, size, size unit, pack of, hazardous, category, (min price, max price)
PRODUCT_CATALOG: List[Tuple[str, str, float, str, int, bool, str, Tuple[float, float]]] = [
    ("Acme", "Industrial Cleaner", 1.0, "GAL", 4, True, "Chemicals", (40.0, 90.0)),
    ("Acme", "Glass Cleaner", 32.0, "OZ", 12, False, "Chemicals", (20.0, 45.0)),
    ("Brightline", "Floor Stripper", 5.0, "GAL", 1, True, "Floor Care", (70.0, 140.0)),
    ("Brightline", "Neutral Floor Cleaner", 1.0, "GAL", 4, False, "Floor Care", (30.0, 60.0)),
    ("Clorox", "Germicidal Bleach", 121.0, "OZ", 3, True, "Disinfectants", (18.0, 35.0)),
    ("PureSan", "Hand Soap Refill", 1.0, "QT", 6, False, "Hand Care", (25.0, 50.0)),
    ("PureSan", "Foaming Sanitizer", 2.0, "QT", 4, True, "Hand Care", (35.0, 70.0)),
    ("Fresh&Co", "Dryer Sheets", 240.0, "SHEETS", 6, False, "Laundry", (15.0, 30.0)),
    ("Fresh&Co", "Laundry Detergent Powder", 25.0, "LB", 1, False, "Laundry", (30.0, 55.0)),
    ("Titan", "Degreaser Concentrate", 5.0, "GAL", 1, True, "Chemicals", (60.0, 120.0)),
    ("Titan", "Stainless Steel Polish", 17.0, "OZ", 12, False, "Specialty", (40.0, 75.0)),
    ("Kleen", "Trash Can Liners 55 Gallon Extra Heavy Duty", 1.0, "CASE", 1, False, "Paper & Liners", (28.0, 48.0)),
]

TIME_ZONES = ("America/Los_Angeles", "America/Denver", "America/Chicago", "America/New_York")
TAX_RATES = (0.0725, 0.0775, 0.0825, 0.0875, 0.095)

SPECIAL_INSTRUCTIONS = (
    "",
    "Deliver to the loading dock behind the building.",
    "Call ahead 30 minutes before arrival.",
    "Leave with front desk if no one is available at receiving.",
    "Hazardous items must be signed for by the facilities manager. "
    "Do not leave hazardous materials unattended at any entrance.",
)


def make_faker(rng: np.random.Generator) -> Faker:
    """Faker instance seeded from the numpy generator."""
    fake = Faker("en_US")
    fake.seed_instance(int(rng.integers(0, 2**31)))
    return fake


def sample_company(rng: Optional[np.random.Generator] = None) -> CompanyDetails:
    """A plausible supplier used when no company configuration is given."""
    fake = make_faker(rng if rng is not None else np.random.default_rng(0))
    name = f"{fake.last_name()} Janitorial Supply"
    domain = name.split()[0].lower() + "supply.com"
    return CompanyDetails(
        name=name,
        address_line1=fake.street_address(),
        address_line2=f"{fake.city()}, {fake.state_abbr()} {fake.zipcode()}",
        phone=fake.numerify("(###) ###-####"),
        phone_24h=fake.numerify("(###) ###-####"),
        email=f"orders@{domain}",
        website=f"www.{domain}",
    )


def generate_customer(fake: Faker, rng: np.random.Generator) -> Customer:
    return Customer(
        id=f"CUS-{rng.integers(10000, 99999)}",
        name=fake.company(),
        email=fake.company_email(),
        phone=fake.numerify("(###) ###-####"),
        address1=fake.street_address(),
        city=fake.city(),
        state=fake.state_abbr(),
        zip=fake.zipcode(),
    )


def generate_product(rng: np.random.Generator) -> Product:
    """Pick a catalogue product and give it a price, cost and quantity."""
    brand, name, size, unit, pack_of, hazardous, category, (low, high) = PRODUCT_CATALOG[
        int(rng.integers(0, len(PRODUCT_CATALOG)))
    ]
    price = round(float(rng.uniform(low, high)), 2)
    # Margins between 20% and 45%
    purchase_price = round(price * float(rng.uniform(0.55, 0.8)), 2)
    sku = f"{brand[:3].upper()}-{name.split()[0][:3].upper()}-{rng.integers(100, 999)}"
    return Product(
        id=f"prod-{rng.integers(1000, 9999)}",
        brand=brand,
        name=name,
        sku=sku,
        size=size,
        size_unit=unit,
        pack_of=pack_of,
        price=price,
        quantity=int(rng.integers(1, 40)),
        hazardous=hazardous,
        purchase_price=purchase_price,
        category=category,
    )


def generate_order(
    fake: Faker,
    rng: np.random.Generator,
    n_items: int = 5,
    customer: Optional[Customer] = None,
    status: str = "DELIVERED",
) -> Order:
    """Generate an order with n_items product lines placed some time in 2025."""
    created_at = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(
        days=int(rng.integers(0, 330)), minutes=int(rng.integers(0, 24 * 60))
    )
    updated_at = created_at + timedelta(days=int(rng.integers(0, 10)), hours=int(rng.integers(0, 12)))
    return Order(
        id=fake.bothify("??#?##??#??##?", letters="ABCDEFGHJKLMNPQRSTUVWXYZ"),
        customer=customer or generate_customer(fake, rng),
        items=[generate_product(rng) for _ in range(n_items)],
        tax_rate=float(TAX_RATES[int(rng.integers(0, len(TAX_RATES)))]),
        created_at=created_at,
        updated_at=updated_at,
        special_instructions=SPECIAL_INSTRUCTIONS[int(rng.integers(0, len(SPECIAL_INSTRUCTIONS)))],
        status=status,
        time_zone=TIME_ZONES[int(rng.integers(0, len(TIME_ZONES)))],
    )


def generate_orders(fake: Faker, rng: np.random.Generator, n_orders: int, n_items: int = 3) -> List[Order]:
    return [
        generate_order(fake, rng, n_items=int(rng.integers(1, n_items + 1)), status="CANCELLED")
        for _ in range(n_orders)
    ]


def make_png(width: int, height: int, color: Tuple[int, int, int], label: str = "") -> bytes:
    """Solid-color PNG with an optional label, used for placeholder photos."""
    image = Image.new("RGB", (width, height), color)
    if label:
        draw = ImageDraw.Draw(image)
        draw.text((10, 10), label, fill=(255, 255, 255))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def make_signature_png(rng: np.random.Generator, width: int = 400, height: int = 150) -> bytes:
    """White PNG with a random scribble standing in for a customer signature."""
    image = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(image)
    xs = np.linspace(20, width - 20, 24)
    ys = height / 2 + rng.normal(0, height / 6, size=len(xs))
    ys = np.clip(ys, 10, height - 10)
    draw.line(list(zip(xs.tolist(), ys.tolist())), fill=(10, 10, 60), width=3)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def generate_delivery(
    fake: Faker,
    rng: np.random.Generator,
    order: Order,
    n_images: int = 2,
) -> Delivery:
    """Proof of delivery for an order with a signature and n_images photos."""
    delivered_at = (order.updated_at or order.created_at) + timedelta(days=int(rng.integers(1, 5)))
    images = []
    for i in range(n_images):
        # Alternate landscape and portrait photos
        size = (640, 480) if i % 2 == 0 else (480, 640)
        color = tuple(int(c) for c in rng.integers(40, 200, size=3))
        images.append(make_png(size[0], size[1], color, label=f"Delivery photo {i + 1}"))
    return Delivery(
        order=order,
        received_by=fake.name(),
        delivered_by=fake.first_name(),
        delivered_at=delivered_at,
        signature=make_signature_png(rng),
        images=images,
    )
