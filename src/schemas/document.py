"""Business document schemas.

Quotes and invoices as rendered into HTML before export. Monetary values
are Decimals; totals are supplied by the caller and rendered as given.
"""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class CompanyProfile(BaseModel):
    """The issuing company shown in document headers.

    Attributes:
        name: Company name
        phone: Contact phone number
        email: Contact email address
        website: Company website
        address: Postal address
    """

    name: str = "FibreUS"
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    address: str | None = None


class Recipient(BaseModel):
    """The lead or client a document is prepared for."""

    name: str
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.company or "Client"


class LineItem(BaseModel):
    """A single billable line.

    Attributes:
        item_name: Short item name
        description: Longer description
        unit: Unit of measure (e.g. "each", "hour", "ft")
        unit_price: Price per unit
        quantity: Number of units
        total: Line total (defaults to unit_price * quantity)
    """

    item_name: str
    description: str = ""
    unit: str = "each"
    unit_price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("1")
    total: Decimal | None = None

    @property
    def line_total(self) -> Decimal:
        if self.total is not None:
            return self.total
        return self.unit_price * self.quantity


class BusinessDocument(BaseModel):
    """Fields shared by quotes and invoices."""

    number: str | None = None
    issued_on: date | None = None
    recipient: Recipient | None = None
    items: list[LineItem] = []
    subtotal: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    notes: str | None = None
    terms_and_conditions: str | None = None


class Quote(BusinessDocument):
    """A quote prepared for a lead or client."""

    kind: Literal["quote"] = "quote"
    valid_until: date | None = None


class Invoice(BusinessDocument):
    """An invoice issued to a client."""

    kind: Literal["invoice"] = "invoice"
    amount_paid: Decimal = Decimal("0")
    balance_due: Decimal | None = None
    payment_status: str | None = None
    due_date: date | None = None
    quote_id: str | None = Field(default=None, description="Quote this invoice was raised from")

    @property
    def outstanding(self) -> Decimal:
        if self.balance_due is not None:
            return self.balance_due
        return self.total - self.amount_paid
