"""Command-line interface: render sample documents to PDF files."""

import argparse
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional
import numpy as np

from .cancellation_summary import CancellationSummaryBuilder
from .config import ENV_KEYS, CompanyDetails, load_company_details
from .invoice import InvoiceBuilder
from .purchase_order import PurchaseOrderBuilder
from .revenue_report import RevenueReportBuilder
from .samples import generate_delivery, generate_order, generate_orders, make_faker, sample_company
from .shipping_manifest import ShippingManifestBuilder

logger = logging.getLogger(__name__)

DOCUMENTS = ("purchase-order", "invoice", "shipping-manifest", "revenue-report", "cancellation-summary")


def load_local_image(reference: str) -> Optional[bytes]:
    """Image loader that reads file paths. Remote references are not fetched."""
    if reference.startswith(("http://", "https://")):
        logger.warning("Remote image %s not fetched; only local files are supported", reference)
        return None
    try:
        return Path(reference).expanduser().read_bytes()
    except OSError as exc:
        logger.warning("Could not read image %s: %s", reference, exc)
        return None


def resolve_company(path: Optional[Path]) -> CompanyDetails:
    """YAML file if given, else environment variables if any are set, else a sample company."""
    if path is not None:
        return load_company_details(path)
    if any(os.environ.get(key) for key in ENV_KEYS.values()):
        return load_company_details()
    return sample_company()


def render_documents(
    documents: List[str],
    company: CompanyDetails,
    out_dir: Path,
    seed: int = 42,
    n_items: int = 8,
    n_orders: int = 4,
    invoice_number: Optional[str] = None,
) -> Dict[str, Path]:
    """Render each named document from seeded sample data. Returns the written paths."""
    rng = np.random.default_rng(seed)
    fake = make_faker(rng)

    order = generate_order(fake, rng, n_items=n_items)
    invoice_number = invoice_number or f"INV-{rng.integers(10000, 99999)}"
    loader = load_local_image

    renderers: Dict[str, Callable[[], bytes]] = {
        "purchase-order": lambda: PurchaseOrderBuilder(company, loader).build(order),
        "invoice": lambda: InvoiceBuilder(company, loader).build(order, invoice_number),
        "shipping-manifest": lambda: ShippingManifestBuilder(company, loader).build(
            generate_delivery(fake, rng, order)
        ),
        "revenue-report": lambda: RevenueReportBuilder(company, loader).build(order, invoice_number),
        "cancellation-summary": lambda: CancellationSummaryBuilder(company, loader).build(
            generate_orders(fake, rng, n_orders)
        ),
    }

    out_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    for name in documents:
        data = renderers[name]()
        path = out_dir / f"{name.replace('-', '_')}_{order.id}.pdf"
        path.write_bytes(data)
        written[name] = path
        print(f"  {name}: {path} ({len(data):,} bytes)")
    return written


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Render purchase orders, invoices, shipping manifests and reports as PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "document",
        choices=DOCUMENTS + ("all",),
        help="Document type to render",
    )
    parser.add_argument(
        "--company",
        type=Path,
        help="Path to YAML company details (defaults to COMPANY* environment variables)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("out"),
        help="Output directory for PDFs",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for sample data",
    )
    parser.add_argument(
        "--items",
        type=int,
        default=8,
        help="Number of product lines in the sample order",
    )
    parser.add_argument(
        "--orders",
        type=int,
        default=4,
        help="Number of orders in the cancellation summary",
    )
    parser.add_argument(
        "--invoice-number",
        help="Invoice number for invoices and revenue reports",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    company = resolve_company(args.company)
    documents = list(DOCUMENTS) if args.document == "all" else [args.document]

    print(f"Rendering {len(documents)} document(s) for {company.name}...")
    print(f"Output directory: {args.out_dir}")
    written = render_documents(
        documents,
        company,
        args.out_dir,
        seed=args.seed,
        n_items=args.items,
        n_orders=args.orders,
        invoice_number=args.invoice_number,
    )
    print(f"\nDone! {len(written)} PDF(s) written.")


if __name__ == "__main__":
    main()
