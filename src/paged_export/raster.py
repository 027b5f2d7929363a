"""Raster value types used by the paged exporter.

SourceRaster wraps one tall Pillow image produced by a rasterizer.
PageImage is one cropped band of it, sized to a single output page.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import fitz  # PyMuPDF
from PIL import Image, ImageChops, UnidentifiedImageError

from schemas.geometry import SliceSpec

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

WHITE_THRESHOLD = 250


def encode_image(image: Image.Image, format: str = "PNG") -> bytes:
    """Encode a Pillow image, converting to RGB for JPEG."""
    format = "JPEG" if format.upper() in ("JPEG", "JPG") else format.upper()
    if format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")
    buffer = BytesIO()
    image.save(buffer, format=format)
    return buffer.getvalue()


@dataclass
class PageImage:
    """A bitmap cropped from a SourceRaster for one output page.

    Attributes:
        image: Pillow image of size (source width, slice height)
        spec: The slice this image was cropped from
    """

    image: Image.Image
    spec: SliceSpec

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def to_bytes(self, format: str = "PNG") -> bytes:
        """Encode the page image (PNG by default)."""
        return encode_image(self.image, format)


class SourceRaster:
    """An immutable bitmap with pixel access by row band.

    Attributes:
        image: The underlying Pillow image
    """

    def __init__(self, image: Image.Image | None):
        self._image = image

    def __repr__(self) -> str:
        return f"SourceRaster({self.width}x{self.height})"

    @property
    def image(self) -> Image.Image | None:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width if self._image is not None else 0

    @property
    def height(self) -> int:
        return self._image.height if self._image is not None else 0

    def ensure_readable(self) -> None:
        """Force pixel data to load.

        Raises:
            InvalidInputError: If there is no image or its pixels cannot be decoded
        """
        if self._image is None:
            raise InvalidInputError("Source raster has no pixel data", field="image")
        try:
            self._image.load()
        except (OSError, ValueError) as e:
            raise InvalidInputError(
                f"Source raster pixel data is unreadable: {e}", field="image"
            ) from e

    def crop(self, spec: SliceSpec) -> PageImage:
        """Crop the full-width band of rows described by *spec*."""
        box = (0, spec.source_y_offset, self.width, spec.source_y_end)
        return PageImage(image=self._image.crop(box), spec=spec)

    def trim_bottom(
        self, threshold: int = WHITE_THRESHOLD, background: str = "#ffffff"
    ) -> "SourceRaster":
        """Drop trailing rows that match the page background.

        A pixel is blank when its grayscale distance from *background* is
        at most ``255 - threshold``, so on white pixels at or above
        *threshold* are blank. An entirely blank raster is returned unchanged.
        """
        image = self._image.convert("RGB")
        blank = Image.new("RGB", image.size, background)
        distance = ImageChops.difference(image, blank).convert("L")
        tolerance = 255 - threshold
        ink = distance.point(lambda v: 255 if v > tolerance else 0)
        bbox = ink.getbbox()
        if not bbox or bbox[3] >= self.height:
            return self
        logger.debug(f"Trimmed {self.height - bbox[3]} blank rows from raster")
        return SourceRaster(self._image.crop((0, 0, self.width, bbox[3])))

    def save(self, path: Path, format: str | None = None) -> None:
        """Write the whole raster to an image file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self._image.save(str(path), format=format)

    @classmethod
    def open(cls, path: Path) -> "SourceRaster":
        """Load a raster from an image file.

        Raises:
            InvalidInputError: If the file is missing or not a readable image
        """
        try:
            image = Image.open(str(path))
            image.load()
        except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
            raise InvalidInputError(f"Cannot read image {path}: {e}", field="image") from e
        return cls(image)

    @classmethod
    def from_pixmap(cls, pix: fitz.Pixmap) -> "SourceRaster":
        """Build a raster from a PyMuPDF pixmap."""
        mode = "RGBA" if pix.alpha else "RGB"
        if pix.n - int(pix.alpha) == 1:
            mode = "L"
        image = Image.frombytes(mode, (pix.width, pix.height), pix.samples)
        return cls(image)

    @classmethod
    def stack(cls, rasters: list["SourceRaster"], background: str = "#ffffff") -> "SourceRaster":
        """Stack rasters top to bottom into one tall raster.

        Narrower rasters are left-aligned on *background*.
        """
        if not rasters:
            raise InvalidInputError("Nothing to stack", field="image")
        if len(rasters) == 1:
            return rasters[0]

        width = max(r.width for r in rasters)
        height = sum(r.height for r in rasters)
        canvas = Image.new("RGB", (width, height), background)
        y = 0
        for raster in rasters:
            canvas.paste(raster.image.convert("RGB"), (0, y))
            y += raster.height
        return cls(canvas)
