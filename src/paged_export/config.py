"""Export configuration.

Settings are read from an optional JSON file; command-line flags override
individual values.

Example config.json:
    {
        "page_size": "letter",
        "scale": 2,
        "company": {"name": "FibreUS", "phone": "555-0100"}
    }
"""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from schemas.document import CompanyProfile
from schemas.geometry import PAGE_SIZES, PageGeometry

from .raster import WHITE_THRESHOLD

DEFAULT_PAGE_SIZE = "a4"
DEFAULT_SCALE = 2.0
DEFAULT_DPI = 150


class ExportConfig(BaseModel):
    """Settings shared by every export.

    Attributes:
        page_size: Named page size preset ("a4", "letter", "letter-px")
        scale: Device pixels per CSS pixel when rasterizing HTML
        dpi: Resolution used when rasterizing existing PDFs
        background: Page background colour
        trim_whitespace: Drop blank rows below rendered HTML content
        white_threshold: Pixels within 255 - white_threshold of the background are blank
        image_format: Encoding for page images embedded in the PDF
        write_manifest: Write an export manifest next to each PDF
        company: Issuing company shown in document headers
    """

    page_size: str = DEFAULT_PAGE_SIZE
    scale: float = Field(default=DEFAULT_SCALE, gt=0)
    dpi: int = Field(default=DEFAULT_DPI, gt=0)
    background: str = "#ffffff"
    trim_whitespace: bool = True
    white_threshold: int = Field(default=WHITE_THRESHOLD, ge=0, le=255)
    image_format: Literal["PNG", "JPEG"] = "PNG"
    write_manifest: bool = False
    company: CompanyProfile = CompanyProfile()

    @field_validator("page_size")
    @classmethod
    def _known_page_size(cls, value: str) -> str:
        key = value.strip().lower()
        if key not in PAGE_SIZES:
            raise ValueError(f"Unknown page size '{value}' (choose from {', '.join(sorted(PAGE_SIZES))})")
        return key

    @property
    def geometry(self) -> PageGeometry:
        return PageGeometry.from_name(self.page_size)

    @classmethod
    def from_file(cls, path: Path) -> "ExportConfig":
        """Load and validate a JSON config file."""
        data = json.loads(path.read_text())
        return cls.model_validate(data)
