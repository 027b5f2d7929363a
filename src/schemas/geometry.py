"""Page geometry and slice domain objects.

A PageGeometry describes the fixed size of one output page in document
units. A SliceSpec describes the band of source pixel rows that fills one
output page.
"""

from dataclasses import dataclass
from typing import Literal

Unit = Literal["mm", "pt", "px", "in"]

# PDF points per document unit. "px" follows the CSS reference pixel (96/in).
POINTS_PER_UNIT: dict[str, float] = {
    "mm": 72 / 25.4,
    "pt": 1.0,
    "px": 72 / 96,
    "in": 72.0,
}


@dataclass(frozen=True)
class PageGeometry:
    """Target output page dimensions.

    Attributes:
        page_width_units: Page width in document units
        page_height_units: Page height in document units
        unit: Document unit the dimensions are expressed in
    """

    page_width_units: float
    page_height_units: float
    unit: Unit = "mm"

    @property
    def width_points(self) -> float:
        return self.to_points(self.page_width_units)

    @property
    def height_points(self) -> float:
        return self.to_points(self.page_height_units)

    def to_points(self, value: float) -> float:
        """Convert a length in this geometry's unit to PDF points."""
        return value * POINTS_PER_UNIT[self.unit]

    @classmethod
    def from_name(cls, name: str) -> "PageGeometry":
        """Look up a named page size preset.

        Args:
            name: Preset name, case-insensitive (e.g. "a4", "letter")

        Returns:
            The matching PageGeometry

        Raises:
            KeyError: If no preset has that name
        """
        key = name.strip().lower()
        if key not in PAGE_SIZES:
            raise KeyError(
                f"Unknown page size '{name}' (choose from {', '.join(sorted(PAGE_SIZES))})"
            )
        return PAGE_SIZES[key]


A4 = PageGeometry(page_width_units=210, page_height_units=297, unit="mm")
LETTER = PageGeometry(page_width_units=215.9, page_height_units=279.4, unit="mm")
LETTER_PX = PageGeometry(page_width_units=816, page_height_units=1056, unit="px")

PAGE_SIZES: dict[str, PageGeometry] = {
    "a4": A4,
    "letter": LETTER,
    "letter-px": LETTER_PX,
}


@dataclass(frozen=True)
class SliceSpec:
    """One page's worth of source pixel rows.

    Attributes:
        source_y_offset: First source row of the slice
        source_height: Number of source rows in the slice
        page_index: 0-based output page index
        height_units: Height of the slice on the output page, in document units
    """

    source_y_offset: int
    source_height: int
    page_index: int
    height_units: float

    @property
    def source_y_end(self) -> int:
        return self.source_y_offset + self.source_height

    @property
    def is_first(self) -> bool:
        return self.page_index == 0


@dataclass(frozen=True)
class Placement:
    """Where a single scaled raster sits on a page, in document units."""

    x: float
    y: float
    width: float
    height: float
    scale: float
