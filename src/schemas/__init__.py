"""Schema definitions for paged-export."""

from .document import BusinessDocument, CompanyProfile, Invoice, LineItem, Quote, Recipient
from .export import ExportManifest, ExportPage
from .geometry import A4, LETTER, LETTER_PX, PAGE_SIZES, PageGeometry, Placement, SliceSpec

__all__ = [
    "A4",
    "LETTER",
    "LETTER_PX",
    "PAGE_SIZES",
    "BusinessDocument",
    "CompanyProfile",
    "ExportManifest",
    "ExportPage",
    "Invoice",
    "LineItem",
    "PageGeometry",
    "Placement",
    "Quote",
    "Recipient",
    "SliceSpec",
]
