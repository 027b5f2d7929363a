"""Export manifest schemas.

An export manifest is an optional JSON sidecar written next to an exported
PDF. It records the source raster size, the page geometry and the slice
plan so an export can be audited or reproduced.

Directory structure:
    exports/
    ├── quote-Q-1001-2026-01-15.pdf
    └── quote-Q-1001-2026-01-15.manifest.json     # ExportManifest
"""

from typing import Literal

from pydantic import BaseModel

from .geometry import PageGeometry, SliceSpec


class ExportPage(BaseModel):
    """A page within an export.

    Attributes:
        page_number: 1-based page number
        source_y_offset: First source raster row on this page
        source_height: Number of source raster rows on this page
        height_units: Height of the page image in document units
    """

    page_number: int
    source_y_offset: int
    source_height: int
    height_units: float

    @classmethod
    def from_slice(cls, spec: SliceSpec) -> "ExportPage":
        return cls(
            page_number=spec.page_index + 1,
            source_y_offset=spec.source_y_offset,
            source_height=spec.source_height,
            height_units=spec.height_units,
        )


class ExportManifest(BaseModel):
    """Manifest describing one paged export.

    Attributes:
        id: Export identifier (usually the output file stem)
        version: Manifest schema version
        kind: What was exported ("quote", "invoice", "html", ...)
        source_width: Source raster width in pixels
        source_height: Source raster height in pixels
        page_width_units: Output page width
        page_height_units: Output page height
        unit: Document unit of the page dimensions
        pages: Slice plan, one entry per output page
        output_path: Path of the written document
        status: "building" while exporting, "complete" or "failed" when done
        errors: Any errors encountered
    """

    id: str
    version: str = "1.0"
    kind: str
    source_width: int | None = None
    source_height: int | None = None
    page_width_units: float
    page_height_units: float
    unit: str = "mm"
    pages: list[ExportPage] = []
    output_path: str | None = None
    status: Literal["building", "complete", "failed"] = "building"
    errors: list[str] = []

    model_config = {"extra": "allow"}

    @classmethod
    def start(cls, export_id: str, kind: str, geometry: PageGeometry) -> "ExportManifest":
        return cls(
            id=export_id,
            kind=kind,
            page_width_units=geometry.page_width_units,
            page_height_units=geometry.page_height_units,
            unit=geometry.unit,
        )
