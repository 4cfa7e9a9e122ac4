"""Immutable business value objects consumed by the document builders."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo


def format_money(amount: float) -> str:
    """Format a dollar amount as $1,234.56."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def format_rate(rate: float) -> str:
    """Format a fractional tax rate (0.0825) as 8.25%."""
    return f"{rate * 100:.2f}%"


def format_gallons(gallons: float, unit: str = "gal") -> str:
    return f"{gallons:,.2f} {unit}"


@dataclass(frozen=True)
class Customer:
    """Billing / shipping party of an order."""
    id: str
    name: str
    email: str = ""
    phone: str = ""
    address1: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = "US"

    @property
    def address_line2(self) -> str:
        """City, State Zip"""
        return f"{self.city}, {self.state} {self.zip}"

    @property
    def display_name(self) -> str:
        return self.name.strip().title()


@dataclass(frozen=True)
class Product:
    """A catalogue product together with the quantity ordered."""
    id: str
    brand: str
    name: str
    sku: str
    size: float
    size_unit: str
    pack_of: int
    price: float  # Selling price per unit
    quantity: int
    hazardous: bool = False
    purchase_price: float = 0.0  # Our cost per unit
    category: str = ""
    desc: str = ""

    # Totals

    @property
    def total_price(self) -> float:
        return self.price * self.quantity

    @property
    def total_purchase_price(self) -> float:
        return self.purchase_price * self.quantity

    @property
    def total_revenue(self) -> float:
        return self.total_price - self.total_purchase_price

    @property
    def weight_in_gallons(self) -> float:
        """Shipping weight of the whole line, normalized to gallons."""
        unit = self.size_unit.upper()
        if unit in ("OZ", "OUNCE", "OUNCES"):
            return (self.size / 128) * self.quantity
        if unit in ("LB", "LBS", "POUND", "POUNDS"):
            return (self.size * 0.125) * self.quantity
        if unit in ("QT", "QUART", "QUARTS"):
            return (self.size * 0.25) * self.quantity
        if unit in ("GAL", "GALLON", "GALLONS"):
            return self.size * self.quantity
        if unit == "SHEETS":
            # Fabric softener sheets, rough estimate
            return self.quantity * 0.15 / 128
        return self.size * self.quantity

    # Formatting

    def formatted_description(self) -> str:
        return f"{self.brand} - {self.name} {self.size:.2f} {self.size_unit} (Pack of {self.pack_of})"

    def short_description(self) -> str:
        return f"{self.name} {self.size:g} {self.size_unit} x{self.pack_of}"

    def formatted_quantity(self) -> str:
        return str(self.quantity)

    def formatted_unit_price(self) -> str:
        return format_money(self.price)

    def formatted_total_price(self) -> str:
        return format_money(self.total_price)

    def formatted_purchase_price(self) -> str:
        return format_money(self.purchase_price)

    def formatted_total_purchase_price(self) -> str:
        return format_money(self.total_purchase_price)

    def formatted_total_revenue(self) -> str:
        return format_money(self.total_revenue)

    def formatted_hazardous(self) -> str:
        return "Yes" if self.hazardous else "No"

    def formatted_net_weight(self) -> str:
        return format_gallons(self.weight_in_gallons)

    def formatted_hazardous_weight(self) -> str:
        if self.hazardous:
            return format_gallons(self.weight_in_gallons)
        return "N/A"

    def formatted_non_hazardous_weight(self) -> str:
        if not self.hazardous:
            return format_gallons(self.weight_in_gallons)
        return "N/A"


@dataclass(frozen=True)
class Order:
    """An order with its resolved customer and full product lines."""
    id: str
    customer: Customer
    items: Tuple[Product, ...]
    tax_rate: float  # Fraction, e.g. 0.0825
    created_at: datetime
    updated_at: Optional[datetime] = None
    special_instructions: str = ""
    status: str = "PENDING"
    time_zone: str = "UTC"

    def __post_init__(self):
        # Accept any iterable of products but store an immutable tuple
        object.__setattr__(self, "items", tuple(self.items))

    # Money

    @property
    def subtotal(self) -> float:
        return sum(item.total_price for item in self.items)

    @property
    def tax_amount(self) -> float:
        return self.tax_rate * self.subtotal

    @property
    def total(self) -> float:
        return self.subtotal + self.tax_amount

    @property
    def cost_of_goods(self) -> float:
        return sum(item.total_purchase_price for item in self.items)

    @property
    def total_revenue(self) -> float:
        return self.subtotal - self.cost_of_goods

    # Shipping

    @property
    def total_units(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def net_weight(self) -> float:
        return sum(item.weight_in_gallons for item in self.items)

    @property
    def hazardous_weight(self) -> float:
        return sum(item.weight_in_gallons for item in self.items if item.hazardous)

    @property
    def non_hazardous_weight(self) -> float:
        return sum(item.weight_in_gallons for item in self.items if not item.hazardous)

    # Time

    def to_local(self, moment: datetime) -> datetime:
        """Convert a timestamp to the order's time zone (naive values are treated as UTC)."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(ZoneInfo(self.time_zone))

    @property
    def local_created_at(self) -> datetime:
        return self.to_local(self.created_at)

    @property
    def local_updated_at(self) -> datetime:
        return self.to_local(self.updated_at or self.created_at)

    # Formatting

    def formatted_subtotal(self) -> str:
        return format_money(self.subtotal)

    def formatted_tax_amount(self) -> str:
        return format_money(self.tax_amount)

    def formatted_tax_rate(self) -> str:
        return format_rate(self.tax_rate)

    def formatted_total(self) -> str:
        return format_money(self.total)

    def formatted_cost_of_goods(self) -> str:
        return format_money(self.cost_of_goods)

    def formatted_total_revenue(self) -> str:
        return format_money(self.total_revenue)

    def formatted_total_units(self) -> str:
        return str(self.total_units)

    def formatted_net_weight(self) -> str:
        return format_gallons(self.net_weight, "GAL")

    def formatted_hazardous_weight(self) -> str:
        return format_gallons(self.hazardous_weight, "GAL")

    def formatted_non_hazardous_weight(self) -> str:
        return format_gallons(self.non_hazardous_weight, "GAL")


@dataclass(frozen=True)
class Delivery:
    """Proof of delivery captured by the driver."""
    order: Order
    received_by: str
    delivered_by: str
    delivered_at: datetime
    signature: Optional[bytes] = None
    images: Tuple[bytes, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "images", tuple(self.images))

    @property
    def local_delivered_at(self) -> datetime:
        return self.order.to_local(self.delivered_at)
