"""Table column geometry for every document type.

Header labels and column widths (mm) are data reproduced from the source
system. Each template's widths sum to its declared table width.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .exceptions import TableSpecError


ALIGNMENTS = ("left", "center", "right")


@dataclass(frozen=True)
class Column:
    """Specification for a table column."""
    name: str  # Header label
    width: float  # mm
    alignment: str = "center"  # "left", "center", "right"

    def __post_init__(self):
        if self.alignment not in ALIGNMENTS:
            raise TableSpecError("Unknown column alignment", f"{self.name!r}: {self.alignment!r}")
        if self.width <= 0:
            raise TableSpecError("Column width must be positive", f"{self.name!r}: {self.width}")


class TableKind(Enum):
    """Tables drawn by the document builders."""
    PO_SHIPPING = "po_shipping"
    PO_PRODUCTS = "po_products"
    INVOICE_ITEMS = "invoice_items"
    SHIPPING_MANIFEST = "shipping_manifest"
    REVENUE_REPORT = "revenue_report"
    CANCELLATION_ORDERS = "cancellation_orders"
    CANCELLATION_TOTALS = "cancellation_totals"


@dataclass(frozen=True)
class TableTemplate:
    """Fixed column layout for one table kind."""
    kind: TableKind
    columns: Tuple[Column, ...]

    @property
    def headers(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def widths(self) -> Tuple[float, ...]:
        return tuple(c.width for c in self.columns)

    @property
    def width(self) -> float:
        return sum(self.widths)


def make_columns(headers, widths, alignment: str = "center") -> Tuple[Column, ...]:
    """Zip parallel header and width arrays into columns."""
    if len(headers) != len(widths):
        raise TableSpecError(
            "Column width array does not match header array",
            f"{len(widths)} widths for {len(headers)} headers",
        )
    return tuple(Column(name, width, alignment) for name, width in zip(headers, widths))


# Purchase order: shipping terms table
PO_SHIPPING_HEADERS = ("REQUISITIONER", "SHIP VIA", "F.O.B", "SHIPPING TERMS")
PO_SHIPPING_WIDTHS = (60, 40, 30, 50)
PO_SHIPPING_VALUES = (("N/A", "In House", "Factory", "N/A"),)

# Purchase order: products table
PO_PRODUCT_HEADERS = ("SKU", "DESCRIPTION", "QTY", "PRICE", "TOTAL")
PO_PRODUCT_WIDTHS = (30, 65, 25, 30, 30)

# Invoice line items
INVOICE_HEADERS = ("ITEM", "QUANTITY", "PRICE PER UNIT", "AMOUNT")
INVOICE_WIDTHS = (75, 25, 40, 40)

# Shipping manifest
SHIPPING_MANIFEST_HEADERS = (
    "UNITS", "HM", "TYPE CONTAINER", "DESCRIPTION AND CLASSIFICATION", "CLASS",
    "SKU", "NET WEIGHT", "GROSS WEIGHT NHM", "GROSS WEIGHT HM",
)
SHIPPING_MANIFEST_WIDTHS = (13, 10, 21, 40, 14, 30, 20.6, 20.6, 20.6)
MANIFEST_CONTAINER_TYPE = "Carton"
MANIFEST_CLASS = "55.0"

# Revenue report
REVENUE_REPORT_HEADERS = (
    "SKU", "DESCRIPTION", "QTY", "SELLING PRICE", "PURCHASE PRICE",
    "TOTAL SELLING PRICE", "TOTAL PURCHASE PRICE", "TOTAL REVENUE",
)
REVENUE_REPORT_WIDTHS = (25, 35, 10, 22, 22, 22, 22, 22)

# Cancellation summary (landscape)
CANCELLATION_HEADERS = ("ORDER ID", "CUSTOMER", "DATE", "ITEMS", "QTY", "PRICE PER UNIT", "TOTAL")
CANCELLATION_WIDTHS = (30, 50, 30, 92, 20, 30, 30)
CANCELLATION_TOTALS_HEADERS = ("CUSTOMER", "TAX RATE", "TAX AMOUNT", "SUBTOTAL", "TOTAL")
CANCELLATION_TOTALS_WIDTHS = (60, 20, 40, 40, 40)


TEMPLATES: Dict[TableKind, TableTemplate] = {
    TableKind.PO_SHIPPING: TableTemplate(
        TableKind.PO_SHIPPING, make_columns(PO_SHIPPING_HEADERS, PO_SHIPPING_WIDTHS)
    ),
    TableKind.PO_PRODUCTS: TableTemplate(
        TableKind.PO_PRODUCTS, make_columns(PO_PRODUCT_HEADERS, PO_PRODUCT_WIDTHS)
    ),
    TableKind.INVOICE_ITEMS: TableTemplate(
        TableKind.INVOICE_ITEMS, make_columns(INVOICE_HEADERS, INVOICE_WIDTHS)
    ),
    TableKind.SHIPPING_MANIFEST: TableTemplate(
        TableKind.SHIPPING_MANIFEST, make_columns(SHIPPING_MANIFEST_HEADERS, SHIPPING_MANIFEST_WIDTHS)
    ),
    TableKind.REVENUE_REPORT: TableTemplate(
        TableKind.REVENUE_REPORT, make_columns(REVENUE_REPORT_HEADERS, REVENUE_REPORT_WIDTHS)
    ),
    TableKind.CANCELLATION_ORDERS: TableTemplate(
        TableKind.CANCELLATION_ORDERS,
        # ITEMS stacks one left-aligned line per product
        tuple(
            Column(name, width, "left" if name == "ITEMS" else "center")
            for name, width in zip(CANCELLATION_HEADERS, CANCELLATION_WIDTHS)
        ),
    ),
    TableKind.CANCELLATION_TOTALS: TableTemplate(
        TableKind.CANCELLATION_TOTALS, make_columns(CANCELLATION_TOTALS_HEADERS, CANCELLATION_TOTALS_WIDTHS)
    ),
}


def get_template(kind: TableKind) -> TableTemplate:
    """Get the column layout for a table kind."""
    return TEMPLATES[kind]
