"""PDF page writer backed by PyMuPDF.

Places each page image at the top-left of a fixed-size PDF page,
stretched to the page width, with its height taken from the slice.
"""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from schemas.geometry import PageGeometry, Placement

from ..exceptions import WriterError
from ..raster import PageImage, SourceRaster, encode_image
from .base import PageWriter

logger = logging.getLogger(__name__)


class PDFPageWriter(PageWriter):
    """Assemble page images into a PDF document.

    The PDFPageWriter:
    1. Opens an empty PyMuPDF document
    2. For each page image:
       a. Starts a new page of the configured geometry
       b. Inserts the image at (0, 0, page width, slice height)
    3. Saves the document on request

    Attributes:
        geometry: Output page geometry
        image_format: Encoding used to embed page images ("PNG" or "JPEG")
    """

    def __init__(self, geometry: PageGeometry, image_format: str = "PNG"):
        self.geometry = geometry
        self.image_format = image_format
        self._doc: fitz.Document | None = fitz.open()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def page_count(self) -> int:
        return len(self._doc) if self._doc is not None else 0

    @property
    def document(self) -> fitz.Document:
        if self._doc is None:
            raise WriterError("PDF writer is closed")
        return self._doc

    def write_page(self, page: PageImage, is_first_page: bool) -> None:
        doc = self.document
        if is_first_page and len(doc) > 0:
            raise WriterError("First page already written")
        if not is_first_page and len(doc) == 0:
            raise WriterError("Document has no first page")

        pdf_page = doc.new_page(
            width=self.geometry.width_points,
            height=self.geometry.height_points,
        )
        rect = fitz.Rect(
            0,
            0,
            self.geometry.width_points,
            self.geometry.to_points(page.spec.height_units),
        )
        pdf_page.insert_image(rect, stream=page.to_bytes(self.image_format), keep_proportion=False)
        logger.debug(
            f"Wrote page {page.spec.page_index + 1} "
            f"(rows {page.spec.source_y_offset}-{page.spec.source_y_end})"
        )

    def write_fitted(self, source: SourceRaster, placement: Placement) -> None:
        """Write *source* as the single page of the document at *placement*."""
        doc = self.document
        if len(doc) > 0:
            raise WriterError("Fitted page must be the only page")

        pdf_page = doc.new_page(
            width=self.geometry.width_points,
            height=self.geometry.height_points,
        )
        to_pt = self.geometry.to_points
        rect = fitz.Rect(
            to_pt(placement.x),
            to_pt(placement.y),
            to_pt(placement.x + placement.width),
            to_pt(placement.y + placement.height),
        )
        pdf_page.insert_image(rect, stream=encode_image(source.image, self.image_format))

    def to_bytes(self) -> bytes:
        """Serialize the document to PDF bytes.

        Raises:
            WriterError: If no page has been written
        """
        doc = self.document
        if len(doc) == 0:
            raise WriterError("Cannot save a PDF with no pages")
        return doc.tobytes(garbage=3, deflate=True)

    def save(self, path: Path) -> Path:
        """Write the document to *path* and return it."""
        data = self.to_bytes()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info(f"Saved {self.page_count}-page PDF to {path}")
        return path

    def close(self) -> None:
        """Release the underlying document, discarding anything unsaved."""
        if self._doc is not None:
            self._doc.close()
            self._doc = None
