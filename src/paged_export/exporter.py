"""Paged raster export.

Splits one tall source raster into page-height bands and hands each band
to a page writer, top to bottom:

    ratio = source.width / page_width_units        (pixels per unit)
    ideal = ceil(page_height_units * ratio)        (rows per full page)

Every page but the last holds exactly ``ideal`` rows; the last holds the
remainder and is not padded. Width is never sliced. The bands partition
``[0, source.height)`` with no gaps and no overlaps.
"""

import logging
import math
from collections.abc import Callable

from schemas.geometry import PageGeometry, Placement, SliceSpec

from .exceptions import InvalidInputError
from .raster import PageImage, SourceRaster
from .writers.base import PageWriter

logger = logging.getLogger(__name__)

WritePage = Callable[[PageImage, bool], None]


def _validate_geometry(geometry: PageGeometry) -> None:
    for field in ("page_width_units", "page_height_units"):
        value = getattr(geometry, field)
        if isinstance(value, bool) or not (
            isinstance(value, (int, float)) and math.isfinite(value) and value > 0
        ):
            raise InvalidInputError(
                f"Page geometry {field} must be a positive number, got {value!r}",
                field=field,
            )


def _validate_size(width: int, height: int) -> None:
    for field, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidInputError(
                f"Source raster {field} must be a positive integer, got {value!r}",
                field=field,
            )


def ideal_slice_height(width: int, geometry: PageGeometry) -> int:
    """Number of source rows that exactly fill one page at the source's density."""
    return math.ceil(geometry.page_height_units * width / geometry.page_width_units)


def plan_slices(width: int, height: int, geometry: PageGeometry) -> list[SliceSpec]:
    """Compute the slice plan for a raster of the given size.

    Args:
        width: Source raster width in pixels
        height: Source raster height in pixels
        geometry: Output page geometry

    Returns:
        One SliceSpec per output page, in top-to-bottom order

    Raises:
        InvalidInputError: If either size or geometry is not positive
    """
    _validate_size(width, height)
    _validate_geometry(geometry)

    ratio = width / geometry.page_width_units
    ideal = ideal_slice_height(width, geometry)

    slices: list[SliceSpec] = []
    position = 0
    while position < height:
        slice_height = min(ideal, height - position)
        slices.append(
            SliceSpec(
                source_y_offset=position,
                source_height=slice_height,
                page_index=len(slices),
                height_units=slice_height / ratio,
            )
        )
        position += slice_height
    return slices


def export_paged(
    source: SourceRaster,
    geometry: PageGeometry,
    write_page: PageWriter | WritePage,
) -> None:
    """Split *source* into pages and write them in order.

    Each page image is cropped, passed to the writer and released before
    the next one is cropped. Exceptions raised by the writer propagate
    unchanged and abort the remaining pages.

    Args:
        source: The tall raster to paginate
        geometry: Output page geometry
        write_page: A PageWriter, or a callable taking (page_image, is_first_page)

    Raises:
        InvalidInputError: Before any page is written, if the raster or
            geometry is unusable
    """
    _validate_size(source.width, source.height)
    _validate_geometry(geometry)
    source.ensure_readable()

    if isinstance(write_page, PageWriter):
        write_page = write_page.write_page

    slices = plan_slices(source.width, source.height, geometry)
    logger.debug(
        f"Exporting {source!r} onto {len(slices)} page(s) of "
        f"{geometry.page_width_units}x{geometry.page_height_units}{geometry.unit}"
    )

    for spec in slices:
        page = source.crop(spec)
        write_page(page, spec.source_y_offset == 0)


def fit_to_page(width: int, height: int, geometry: PageGeometry) -> Placement:
    """Scale a raster to fit on a single page.

    The raster keeps its aspect ratio, is scaled to the largest size that
    fits within the page, and sits at the top of the page, centred
    horizontally.

    Raises:
        InvalidInputError: If either size or geometry is not positive
    """
    _validate_size(width, height)
    _validate_geometry(geometry)

    scale = min(geometry.page_width_units / width, geometry.page_height_units / height)
    placed_width = width * scale
    placed_height = height * scale
    return Placement(
        x=(geometry.page_width_units - placed_width) / 2,
        y=0.0,
        width=placed_width,
        height=placed_height,
        scale=scale,
    )
