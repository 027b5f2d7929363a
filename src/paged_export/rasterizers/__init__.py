"""Rasterizers that render documents to a single tall raster."""

from .base import Rasterizer
from .html_rasterizer import HTMLRasterizer
from .pdf_rasterizer import ImageRasterizer, PDFRasterizer

__all__ = [
    "Rasterizer",
    "HTMLRasterizer",
    "PDFRasterizer",
    "ImageRasterizer",
]
