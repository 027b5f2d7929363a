"""Rasterizers for existing PDF and image files."""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from ..exceptions import RasterizationError
from ..raster import SourceRaster
from .base import POINTS_PER_INCH, Rasterizer

logger = logging.getLogger(__name__)


class PDFRasterizer(Rasterizer):
    """Render every page of a PDF and stack them into one tall raster.

    Used to re-paginate an existing PDF onto a different page size.
    """

    def __init__(self, dpi: int = 150, background: str = "#ffffff") -> None:
        """Initialize the PDF rasterizer.

        Args:
            dpi: Resolution for page rasterization (default: 150).
            background: Fill colour for pages narrower than the widest page
        """
        self.dpi = dpi
        self.background = background

    def rasterize(self, source: Path) -> SourceRaster:
        try:
            doc = fitz.open(str(source))
        except Exception as e:
            raise RasterizationError(f"Cannot open PDF {source}: {e}") from e

        try:
            scale = self.dpi / POINTS_PER_INCH
            mat = fitz.Matrix(scale, scale)
            rasters = [
                SourceRaster.from_pixmap(page.get_pixmap(matrix=mat, alpha=False))
                for page in doc
            ]
        except Exception as e:
            raise RasterizationError(f"Failed to rasterize {source}: {e}") from e
        finally:
            doc.close()

        if not rasters:
            raise RasterizationError(f"PDF {source} has no pages")

        logger.debug(f"Rasterized {len(rasters)} page(s) from {source}")
        return SourceRaster.stack(rasters, background=self.background)


class ImageRasterizer(Rasterizer):
    """Load an already-rendered image file as a raster."""

    def rasterize(self, source: Path) -> SourceRaster:
        return SourceRaster.open(source)
