"""Command-line interface for paged-export."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from paged_export.config import ExportConfig
from paged_export.document_exporter import DocumentExporter
from paged_export.exporter import plan_slices
from schemas.document import Invoice, Quote, Recipient
from schemas.export import ExportPage
from schemas.geometry import PAGE_SIZES, PageGeometry

DEFAULT_OUTPUT_DIR = Path("./exports")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def load_config(args: argparse.Namespace) -> ExportConfig:
    """Build the export config from --config and command-line overrides."""
    config = ExportConfig()
    if getattr(args, "config", None) is not None:
        config = ExportConfig.from_file(args.config)

    overrides: dict = {}
    if getattr(args, "page_size", None):
        overrides["page_size"] = args.page_size
    if getattr(args, "scale", None) is not None:
        overrides["scale"] = args.scale
    if getattr(args, "manifest", False):
        overrides["write_manifest"] = True

    if not overrides:
        return config
    return ExportConfig.model_validate({**config.model_dump(), **overrides})


def plan(args: argparse.Namespace) -> int:
    """Execute the plan command.

    Prints the slice plan for a raster of the given size as JSON.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if args.page_width is not None or args.page_height is not None:
            if args.page_width is None or args.page_height is None:
                logger.error("Must specify both --page-width and --page-height")
                return 1
            geometry = PageGeometry(args.page_width, args.page_height, args.unit)
        else:
            geometry = PageGeometry.from_name(args.page_size)

        slices = plan_slices(args.width, args.height, geometry)
    except Exception as e:
        logger.error(f"Failed to plan slices: {e}")
        return 1

    pages = [ExportPage.from_slice(spec).model_dump() for spec in slices]
    print(json.dumps({"pages": pages}, indent=2))
    return 0


def _load_document(path: Path, model):
    data = json.loads(path.read_text())
    return model.model_validate(data)


def export_quote(args: argparse.Namespace) -> int:
    """Execute the export-quote command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.document.exists():
        logger.error(f"Document not found: {args.document}")
        return 1

    try:
        quote = _load_document(args.document, Quote)
        exporter = DocumentExporter(load_config(args))
        output_path = exporter.export_quote(quote, args.output, on=args.date)

        logger.info(f"Exported quote {quote.number or 'DRAFT'}")
        logger.info(f"  Output: {output_path}")
        return 0

    except ValidationError as e:
        logger.error(f"Invalid quote document: {e}")
        return 1
    except Exception as e:
        logger.error(f"Failed to export quote: {e}")
        return 1


def export_invoice(args: argparse.Namespace) -> int:
    """Execute the export-invoice command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.document.exists():
        logger.error(f"Document not found: {args.document}")
        return 1

    try:
        invoice = _load_document(args.document, Invoice)
        exporter = DocumentExporter(load_config(args))
        output_path = exporter.export_invoice(invoice, args.output)

        logger.info(f"Exported invoice {invoice.number or 'DRAFT'}")
        logger.info(f"  Output: {output_path}")
        return 0

    except ValidationError as e:
        logger.error(f"Invalid invoice document: {e}")
        return 1
    except Exception as e:
        logger.error(f"Failed to export invoice: {e}")
        return 1


def _export_file(args: argparse.Namespace, source: Path, kind: str) -> int:
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not source.exists():
        logger.error(f"{kind.upper()} file not found: {source}")
        return 1

    try:
        exporter = DocumentExporter(load_config(args))
        method = getattr(exporter, f"export_{kind}")
        output_path = method(source, args.output)

        logger.info(f"Exported {source.name}")
        logger.info(f"  Output: {output_path}")
        return 0

    except Exception as e:
        logger.error(f"Failed to export {kind}: {e}")
        return 1


def export_html(args: argparse.Namespace) -> int:
    """Execute the export-html command."""
    return _export_file(args, args.html, "html")


def export_image(args: argparse.Namespace) -> int:
    """Execute the export-image command."""
    return _export_file(args, args.image, "image")


def export_pdf(args: argparse.Namespace) -> int:
    """Execute the export-pdf command."""
    return _export_file(args, args.pdf, "pdf")


def export_flyer(args: argparse.Namespace) -> int:
    """Execute the export-flyer command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.image.exists():
        logger.error(f"IMAGE file not found: {args.image}")
        return 1

    try:
        exporter = DocumentExporter(load_config(args))
        recipient = Recipient(name=args.recipient) if args.recipient else None
        output_path = exporter.export_flyer(args.image, args.output, recipient=recipient)

        logger.info("Exported flyer")
        logger.info(f"  Output: {output_path}")
        return 0

    except Exception as e:
        logger.error(f"Failed to export flyer: {e}")
        return 1


def export_pages(args: argparse.Namespace) -> int:
    """Execute the export-pages command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.source.exists():
        logger.error(f"Source file not found: {args.source}")
        return 1

    try:
        exporter = DocumentExporter(load_config(args))
        paths = exporter.export_page_images(args.source, args.output)

        logger.info(f"Exported {len(paths)} page images from {args.source.name}")
        logger.info(f"  Output: {args.output}")
        return 0

    except Exception as e:
        logger.error(f"Failed to export page images: {e}")
        return 1


def export_png(args: argparse.Namespace) -> int:
    """Execute the export-png command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.document.exists():
        logger.error(f"Document not found: {args.document}")
        return 1

    try:
        data = json.loads(args.document.read_text())
        model = Invoice if data.get("kind") == "invoice" else Quote
        document = model.model_validate(data)
        exporter = DocumentExporter(load_config(args))
        output_path = exporter.export_png(document, args.output)

        logger.info(f"  Output: {output_path}")
        return 0

    except Exception as e:
        logger.error(f"Failed to export PNG: {e}")
        return 1


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON export config file",
    )
    parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        default=None,
        help="Output page size (default: a4, or the config file's value)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Device pixels per CSS pixel when rasterizing HTML (default: 2)",
    )
    parser.add_argument(
        "--manifest",
        action="store_true",
        help="Write an export manifest next to the output",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="paged-export",
        description="Export quotes, invoices and rendered documents to paged PDFs",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    plan_parser = subparsers.add_parser(
        "plan",
        help="Print the page slice plan for a raster size",
        description="Compute how a raster of the given pixel size is sliced onto output pages and print the plan as JSON.",
    )
    plan_parser.add_argument("--width", type=int, required=True, help="Raster width in pixels")
    plan_parser.add_argument("--height", type=int, required=True, help="Raster height in pixels")
    plan_parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        default="a4",
        help="Output page size (default: a4)",
    )
    plan_parser.add_argument("--page-width", type=float, default=None, help="Custom page width")
    plan_parser.add_argument("--page-height", type=float, default=None, help="Custom page height")
    plan_parser.add_argument(
        "--unit",
        choices=["mm", "pt", "px", "in"],
        default="mm",
        help="Unit of --page-width/--page-height (default: mm)",
    )
    plan_parser.set_defaults(func=plan)

    quote_parser = subparsers.add_parser(
        "export-quote",
        help="Export a quote JSON document to PDF",
        description="Render a quote to HTML, rasterize it and write a paged PDF named quote-<number>-<date>.pdf.",
    )
    quote_parser.add_argument("--document", type=Path, required=True, help="Path to the quote JSON")
    quote_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    quote_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Date used in the filename (ISO format: YYYY-MM-DD, default: today)",
    )
    _add_config_arguments(quote_parser)
    quote_parser.set_defaults(func=export_quote)

    invoice_parser = subparsers.add_parser(
        "export-invoice",
        help="Export an invoice JSON document to PDF",
        description="Render an invoice to HTML, rasterize it and write a paged PDF named Invoice-<number>.pdf.",
    )
    invoice_parser.add_argument("--document", type=Path, required=True, help="Path to the invoice JSON")
    invoice_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    _add_config_arguments(invoice_parser)
    invoice_parser.set_defaults(func=export_invoice)

    html_parser = subparsers.add_parser(
        "export-html",
        help="Export an HTML file to a paged PDF",
        description="Rasterize an HTML file with WeasyPrint and PyMuPDF and slice it onto fixed-size PDF pages.",
    )
    html_parser.add_argument("--html", type=Path, required=True, help="Path to the HTML file")
    html_parser.add_argument("--output", type=Path, required=True, help="Output PDF path")
    _add_config_arguments(html_parser)
    html_parser.set_defaults(func=export_html)

    image_parser = subparsers.add_parser(
        "export-image",
        help="Slice a tall image onto PDF pages",
        description="Slice a tall PNG or JPEG onto fixed-size PDF pages, top to bottom.",
    )
    image_parser.add_argument("--image", type=Path, required=True, help="Path to the image")
    image_parser.add_argument("--output", type=Path, required=True, help="Output PDF path")
    _add_config_arguments(image_parser)
    image_parser.set_defaults(func=export_image)

    pdf_parser = subparsers.add_parser(
        "export-pdf",
        help="Re-paginate an existing PDF",
        description="Rasterize every page of a PDF, stack them and slice the result onto the configured page size.",
    )
    pdf_parser.add_argument("--pdf", type=Path, required=True, help="Path to the source PDF")
    pdf_parser.add_argument("--output", type=Path, required=True, help="Output PDF path")
    _add_config_arguments(pdf_parser)
    pdf_parser.set_defaults(func=export_pdf)

    flyer_parser = subparsers.add_parser(
        "export-flyer",
        help="Fit an image onto a single PDF page",
        description="Scale an image to fit one page, centred horizontally, and write <company>-Flyer-<recipient>.pdf.",
    )
    flyer_parser.add_argument("--image", type=Path, required=True, help="Path to the flyer image")
    flyer_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    flyer_parser.add_argument("--recipient", type=str, default=None, help="Recipient name for the filename")
    _add_config_arguments(flyer_parser)
    flyer_parser.set_defaults(func=export_flyer)

    pages_parser = subparsers.add_parser(
        "export-pages",
        help="Slice an HTML, PDF or image file into page images",
        description="Slice a source file onto the configured page size and write one image per page as <stem>-NNN.png.",
    )
    pages_parser.add_argument("--source", type=Path, required=True, help="HTML, PDF or image file")
    pages_parser.add_argument("--output", type=Path, required=True, help="Output directory")
    _add_config_arguments(pages_parser)
    pages_parser.set_defaults(func=export_pages)

    png_parser = subparsers.add_parser(
        "export-png",
        help="Render a quote or invoice to a single PNG",
        description="Render a quote or invoice JSON document to one unpaginated PNG image.",
    )
    png_parser.add_argument("--document", type=Path, required=True, help="Path to the document JSON")
    png_parser.add_argument("--output", type=Path, required=True, help="Output PNG path")
    _add_config_arguments(png_parser)
    png_parser.set_defaults(func=export_png)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
