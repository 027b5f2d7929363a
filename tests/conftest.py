"""Pytest fixtures for paged-export tests."""

from decimal import Decimal
from pathlib import Path

import fitz  # PyMuPDF
import pytest
from PIL import Image, ImageDraw

from paged_export.raster import PageImage, SourceRaster
from schemas.document import CompanyProfile, Invoice, LineItem, Quote, Recipient


class RecordingWriter:
    """Page writer stub that records every call."""

    def __init__(self):
        self.calls: list[tuple[int, int, int, int, bool]] = []

    def __call__(self, page: PageImage, is_first_page: bool) -> None:
        self.calls.append(
            (
                page.spec.source_y_offset,
                page.spec.source_height,
                page.width,
                page.height,
                is_first_page,
            )
        )

    @property
    def slices(self) -> list[tuple[int, int]]:
        return [(offset, height) for offset, height, _, _, _ in self.calls]

    @property
    def first_flags(self) -> list[bool]:
        return [flag for *_, flag in self.calls]


def make_raster(width: int, height: int, mode: str = "L", color=255) -> SourceRaster:
    """A solid raster of the given size."""
    return SourceRaster(Image.new(mode, (width, height), color))


def make_striped_raster(width: int, height: int) -> SourceRaster:
    """A grayscale raster whose row y has value y % 256."""
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    for y in range(height):
        draw.line([(0, y), (width - 1, y)], fill=y % 256)
    return SourceRaster(image)


def make_pdf(path: Path, pages: int = 1, width: float = 595, height: float = 842) -> None:
    """Write a minimal PDF with *pages* pages to *path*."""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page(width=width, height=height)
        page.insert_text((50, 100), f"Page {i + 1} content")
    doc.save(str(path))
    doc.close()


@pytest.fixture
def recording_writer():
    return RecordingWriter()


@pytest.fixture
def tall_png(tmp_path) -> Path:
    """A 1000x2500 PNG with a black band at the top."""
    image = Image.new("RGB", (1000, 2500), "white")
    ImageDraw.Draw(image).rectangle([0, 0, 999, 99], fill="black")
    path = tmp_path / "tall.png"
    image.save(path)
    return path


@pytest.fixture
def sample_company():
    return CompanyProfile(
        name="FibreUS",
        phone="555-0100",
        email="office@fibreus.example",
        website="fibreus.example",
        address="1 Main Street, Springfield",
    )


@pytest.fixture
def sample_quote():
    """A quote with two line items."""
    return Quote(
        number="Q-1001",
        recipient=Recipient(
            name="Jane Smith",
            email="jane@example.com",
            phone="555-0199",
            address="42 Elm Road",
        ),
        items=[
            LineItem(
                item_name="Fiber splice",
                description="Fusion splice, single mode",
                unit="each",
                unit_price=Decimal("45.00"),
                quantity=Decimal("12"),
            ),
            LineItem(
                item_name="Camera install",
                description="IP camera, outdoor mount",
                unit="each",
                unit_price=Decimal("1250.00"),
                quantity=Decimal("2"),
                total=Decimal("2500.00"),
            ),
        ],
        subtotal=Decimal("3040.00"),
        tax_rate=Decimal("8.25"),
        tax_amount=Decimal("250.80"),
        total=Decimal("3290.80"),
        notes="Work scheduled within two weeks of acceptance.",
    )


@pytest.fixture
def sample_invoice():
    """A partially paid invoice."""
    return Invoice(
        number="INV-2001",
        recipient=Recipient(name="Acme Security", company="Acme Holdings"),
        items=[
            LineItem(
                item_name="Monitoring",
                description="Monthly alarm monitoring",
                unit="month",
                unit_price=Decimal("99.00"),
                quantity=Decimal("3"),
            ),
        ],
        subtotal=Decimal("297.00"),
        tax_rate=Decimal("0"),
        tax_amount=Decimal("0"),
        total=Decimal("297.00"),
        amount_paid=Decimal("100.00"),
        payment_status="partial",
    )
