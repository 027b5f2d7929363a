"""HTML rasterizer.

Renders HTML with WeasyPrint onto one very tall page of the output page
width, rasterizes it with PyMuPDF, and trims the blank space below the
content so the raster is exactly as tall as the document.
"""

import logging
from pathlib import Path

import fitz  # PyMuPDF
from weasyprint import CSS, HTML

from schemas.geometry import A4, PageGeometry

from ..exceptions import RasterizationError
from ..raster import WHITE_THRESHOLD, SourceRaster
from .base import CSS_PX_PER_INCH, POINTS_PER_INCH, Rasterizer

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 2.0
DEFAULT_BACKGROUND = "#ffffff"
TALL_PAGE_FACTOR = 16


class HTMLRasterizer(Rasterizer):
    """Render HTML documents to a single tall raster.

    The HTMLRasterizer:
    1. Lays the HTML out with WeasyPrint on a page as wide as the output
       page and TALL_PAGE_FACTOR output pages high, with no margins
    2. Rasterizes every resulting PDF page with PyMuPDF at ``scale`` device
       pixels per CSS pixel
    3. Stacks the page rasters and trims trailing blank rows

    Attributes:
        geometry: Output page geometry; its width sets the layout width
        scale: Device pixels per CSS pixel (2 renders at 192 DPI)
        background: Page background colour
        trim_whitespace: Whether to drop blank rows below the content
        white_threshold: Pixels within 255 - white_threshold of the background are blank
        stylesheets: Extra WeasyPrint stylesheets applied after the page rule
    """

    def __init__(
        self,
        geometry: PageGeometry = A4,
        scale: float = DEFAULT_SCALE,
        background: str = DEFAULT_BACKGROUND,
        trim_whitespace: bool = True,
        white_threshold: int = WHITE_THRESHOLD,
        stylesheets: list[CSS] | None = None,
    ):
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.geometry = geometry
        self.scale = scale
        self.background = background
        self.trim_whitespace = trim_whitespace
        self.white_threshold = white_threshold
        self.stylesheets = stylesheets or []

    def _page_css(self) -> CSS:
        unit = self.geometry.unit
        width = self.geometry.page_width_units
        height = self.geometry.page_height_units * TALL_PAGE_FACTOR
        return CSS(
            string=(
                f"@page {{ size: {width}{unit} {height}{unit}; margin: 0 }}\n"
                f"html {{ background: {self.background} }}"
            )
        )

    def rasterize(self, source: str | Path, base_url: str | None = None) -> SourceRaster:
        """Render HTML to a raster.

        Args:
            source: HTML markup, or a Path to an HTML file
            base_url: Base URL for resolving relative links (defaults to the
                file's directory when *source* is a Path)

        Returns:
            One SourceRaster covering the whole document

        Raises:
            RasterizationError: If WeasyPrint or PyMuPDF fails
        """
        try:
            if isinstance(source, Path):
                base_url = base_url or source.resolve().parent.as_uri() + "/"
                html_doc = HTML(filename=str(source), base_url=base_url)
            else:
                html_doc = HTML(string=source, base_url=base_url)

            pdf_bytes = html_doc.write_pdf(stylesheets=[self._page_css(), *self.stylesheets])
        except Exception as e:
            raise RasterizationError(f"HTML layout failed: {e}") from e

        raster = self._rasterize_pdf(pdf_bytes)
        if self.trim_whitespace:
            raster = raster.trim_bottom(self.white_threshold, background=self.background)

        logger.debug(f"Rasterized HTML to {raster!r}")
        return raster

    def _rasterize_pdf(self, pdf_bytes: bytes) -> SourceRaster:
        zoom = self.scale * CSS_PX_PER_INCH / POINTS_PER_INCH
        matrix = fitz.Matrix(zoom, zoom)
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            raise RasterizationError(f"Cannot open rendered PDF: {e}") from e

        try:
            rasters = [
                SourceRaster.from_pixmap(page.get_pixmap(matrix=matrix, alpha=False))
                for page in doc
            ]
        except Exception as e:
            raise RasterizationError(f"PDF rasterization failed: {e}") from e
        finally:
            doc.close()

        if not rasters:
            raise RasterizationError("Rendered document has no pages")
        return SourceRaster.stack(rasters, background=self.background)
