"""Document exporter.

Ties the stages together for whole documents:

    Quote/Invoice -> HTML -> SourceRaster -> export_paged -> PDF file

A failed export never leaves a partial PDF behind. When manifests are
enabled, the manifest is written with status "failed" and the error is
re-raised to the caller.
"""

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from schemas.document import Invoice, Quote, Recipient
from schemas.export import ExportManifest, ExportPage

from .config import ExportConfig
from .documents import DocumentRenderer, flyer_filename, invoice_filename, quote_filename
from .exporter import export_paged, fit_to_page, plan_slices
from .raster import SourceRaster
from .rasterizers import HTMLRasterizer, ImageRasterizer, PDFRasterizer
from .writers import ImagePageWriter, PDFPageWriter

logger = logging.getLogger(__name__)


class DocumentExporter:
    """Export business documents and rendered sources to paged PDFs.

    Attributes:
        config: Export settings
        renderer: Renders quotes and invoices to HTML
        html_rasterizer: Renders HTML to a raster
        pdf_rasterizer: Renders existing PDFs to a raster
        image_rasterizer: Loads image files as a raster
    """

    def __init__(
        self,
        config: ExportConfig | None = None,
        renderer: DocumentRenderer | None = None,
        html_rasterizer: HTMLRasterizer | None = None,
        pdf_rasterizer: PDFRasterizer | None = None,
        image_rasterizer: ImageRasterizer | None = None,
    ):
        self.config = config or ExportConfig()
        self.geometry = self.config.geometry
        self.renderer = renderer or DocumentRenderer(company=self.config.company)
        self.html_rasterizer = html_rasterizer or HTMLRasterizer(
            geometry=self.geometry,
            scale=self.config.scale,
            background=self.config.background,
            trim_whitespace=self.config.trim_whitespace,
            white_threshold=self.config.white_threshold,
        )
        self.pdf_rasterizer = pdf_rasterizer or PDFRasterizer(
            dpi=self.config.dpi, background=self.config.background
        )
        self.image_rasterizer = image_rasterizer or ImageRasterizer()

    def export_quote(self, quote: Quote, output_dir: Path, on: date | None = None) -> Path:
        """Export a quote as ``quote-{number}-{date}.pdf`` in *output_dir*."""
        output_path = output_dir / quote_filename(quote.number, on)
        return self._export(
            "quote",
            output_path,
            lambda: self.html_rasterizer.rasterize(self.renderer.render(quote)),
        )

    def export_invoice(self, invoice: Invoice, output_dir: Path) -> Path:
        """Export an invoice as ``Invoice-{number}.pdf`` in *output_dir*."""
        output_path = output_dir / invoice_filename(invoice.number)
        return self._export(
            "invoice",
            output_path,
            lambda: self.html_rasterizer.rasterize(self.renderer.render(invoice)),
        )

    def export_html(self, html_path: Path, output_path: Path) -> Path:
        return self._export("html", output_path, lambda: self.html_rasterizer.rasterize(html_path))

    def export_image(self, image_path: Path, output_path: Path) -> Path:
        return self._export("image", output_path, lambda: self.image_rasterizer.rasterize(image_path))

    def export_pdf(self, pdf_path: Path, output_path: Path) -> Path:
        """Re-paginate an existing PDF onto the configured page size."""
        return self._export("pdf", output_path, lambda: self.pdf_rasterizer.rasterize(pdf_path))

    def export_flyer(
        self,
        image_path: Path,
        output_dir: Path,
        recipient: Recipient | None = None,
    ) -> Path:
        """Export an image as one page, scaled to fit and centred horizontally."""
        name = recipient.display_name if recipient else None
        output_path = output_dir / flyer_filename(self.config.company.name, name)

        raster = self.image_rasterizer.rasterize(image_path)
        placement = fit_to_page(raster.width, raster.height, self.geometry)
        with PDFPageWriter(self.geometry, image_format=self.config.image_format) as writer:
            writer.write_fitted(raster, placement)
            writer.save(output_path)
        logger.info(f"Exported flyer to {output_path} (scale {placement.scale:.4f})")
        return output_path

    def export_page_images(self, source: Path, output_dir: Path) -> list[Path]:
        """Slice an HTML, PDF or image file into one image file per page.

        Pages are written as ``{source stem}-{page:03d}.{ext}`` in the
        configured image format.
        """
        suffix = source.suffix.lower()
        if suffix in (".html", ".htm"):
            raster = self.html_rasterizer.rasterize(source)
        elif suffix == ".pdf":
            raster = self.pdf_rasterizer.rasterize(source)
        else:
            raster = self.image_rasterizer.rasterize(source)

        writer = ImagePageWriter(output_dir, stem=source.stem, image_format=self.config.image_format)
        export_paged(raster, self.geometry, writer)
        logger.info(f"Wrote {len(writer.paths)} page images to {output_dir}")
        return writer.paths

    def export_png(self, document: Quote | Invoice, output_path: Path) -> Path:
        """Save the rendered document as one unpaginated PNG."""
        raster = self.html_rasterizer.rasterize(self.renderer.render(document))
        raster.save(output_path, format="PNG")
        logger.info(f"Saved {raster!r} to {output_path}")
        return output_path

    def _export(
        self,
        kind: str,
        output_path: Path,
        rasterize: Callable[[], SourceRaster],
    ) -> Path:
        """Rasterize, paginate and save, discarding partial output on failure."""
        manifest = ExportManifest.start(output_path.stem, kind, self.geometry)
        logger.info(f"Exporting {kind} to {output_path}")

        try:
            raster = rasterize()
            manifest.source_width = raster.width
            manifest.source_height = raster.height

            with PDFPageWriter(self.geometry, image_format=self.config.image_format) as writer:
                export_paged(raster, self.geometry, writer)
                writer.save(output_path)

            manifest.pages = [
                ExportPage.from_slice(spec)
                for spec in plan_slices(raster.width, raster.height, self.geometry)
            ]
            manifest.output_path = str(output_path)
            manifest.status = "complete"
        except Exception as e:
            logger.error(f"Failed to export {kind} to {output_path}: {e}")
            manifest.status = "failed"
            manifest.errors.append(f"{type(e).__name__}: {e}")
            try:
                self._write_manifest(output_path, manifest)
            except OSError as manifest_error:
                logger.error(f"Failed to write export manifest for {output_path}: {manifest_error}")
            raise

        self._write_manifest(output_path, manifest)
        logger.info(f"Exported {len(manifest.pages)}-page {kind} to {output_path}")
        return output_path

    def _write_manifest(self, output_path: Path, manifest: ExportManifest) -> None:
        """Write the export manifest next to the output, if enabled."""
        if not self.config.write_manifest:
            return
        manifest_path = output_path.with_suffix(".manifest.json")
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text(manifest.model_dump_json(indent=2, exclude_none=True))
        logger.debug(f"Wrote export manifest to {manifest_path}")
