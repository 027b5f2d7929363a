"""Page writers for assembling exported pages into documents."""

from .base import PageWriter
from .image_writer import ImagePageWriter
from .pdf_writer import PDFPageWriter

__all__ = [
    "PageWriter",
    "PDFPageWriter",
    "ImagePageWriter",
]
