"""Page writer that writes each page as an image file."""

import logging
from pathlib import Path

from ..exceptions import WriterError
from ..raster import PageImage
from .base import PageWriter

logger = logging.getLogger(__name__)

EXTENSIONS = {"PNG": "png", "JPEG": "jpg"}


class ImagePageWriter(PageWriter):
    """Write page images to ``{output_dir}/{stem}-{page:03d}.{ext}``.

    Attributes:
        output_dir: Directory page images are written to
        stem: Filename prefix for every page
        image_format: "PNG" or "JPEG"
        paths: Files written so far, in page order
    """

    def __init__(self, output_dir: Path, stem: str = "page", image_format: str = "PNG") -> None:
        fmt = "JPEG" if image_format.upper() in ("JPEG", "JPG") else image_format.upper()
        if fmt not in EXTENSIONS:
            raise ValueError(f"Unsupported image format: {image_format}")
        self.output_dir = output_dir
        self.stem = stem
        self.image_format = fmt
        self.paths: list[Path] = []

    def write_page(self, page: PageImage, is_first_page: bool) -> None:
        if is_first_page != (not self.paths):
            raise WriterError(
                f"Page {page.spec.page_index + 1} out of order "
                f"(is_first_page={is_first_page}, written={len(self.paths)})"
            )

        page_number = len(self.paths) + 1
        path = self.output_dir / f"{self.stem}-{page_number:03d}.{EXTENSIONS[self.image_format]}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(page.to_bytes(self.image_format))
        self.paths.append(path)
        logger.debug(f"Wrote page image {path}")
