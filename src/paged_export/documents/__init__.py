"""Business document rendering."""

from .filters import FILTERS
from .naming import flyer_filename, invoice_filename, quote_filename
from .renderer import DocumentRenderer

__all__ = [
    "FILTERS",
    "DocumentRenderer",
    "flyer_filename",
    "invoice_filename",
    "quote_filename",
]
