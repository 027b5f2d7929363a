"""Output filename conventions for exported documents."""

import re
from datetime import date

WHITESPACE = re.compile(r"\s+")


def quote_filename(number: str | None, on: date | None = None) -> str:
    """``quote-{number}-{YYYY-MM-DD}.pdf``; unnumbered quotes are ``DRAFT``."""
    on = on or date.today()
    return f"quote-{number or 'DRAFT'}-{on.isoformat()}.pdf"


def invoice_filename(number: str | None) -> str:
    """``Invoice-{number}.pdf``; unnumbered invoices are ``DRAFT``."""
    return f"Invoice-{number or 'DRAFT'}.pdf"


def flyer_filename(company: str | None, recipient: str | None, extension: str = "pdf") -> str:
    """``{company}-Flyer-{recipient}.{ext}`` with whitespace runs replaced by ``-``."""
    company = company or "FibreUS"
    recipient = WHITESPACE.sub("-", (recipient or "Client").strip())
    return f"{company}-Flyer-{recipient}.{extension}"
