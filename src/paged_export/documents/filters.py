"""Jinja2 filters for quote and invoice templates."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation


def format_currency(value, symbol: str = "$") -> str:
    """Format a monetary amount with two decimals and thousands separators.

    Examples:
        >>> format_currency(Decimal("1234.5"))
        '$1,234.50'
        >>> format_currency("-12")
        '-$12.00'
    """
    if value is None or value == "":
        value = 0
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percent(value, places: int = 1) -> str:
    """Format a tax rate given in percent.

    Examples:
        >>> format_percent(Decimal("8.25"))
        '8.2%'
        >>> format_percent(7)
        '7.0%'
    """
    if value is None or value == "":
        value = 0
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    return f"{rate:.{places}f}%"


def format_date(value) -> str:
    """Format a date as a human-readable string.

    Accepts date/datetime objects or ISO strings; anything unparseable is
    returned unchanged.

    Examples:
        >>> format_date("2026-01-29")
        'January 29, 2026'
    """
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, (date, datetime)):
        return value.strftime("%B %d, %Y").replace(" 0", " ")
    return str(value)


def format_quantity(value) -> str:
    """Drop a trailing ``.0`` from whole quantities.

    Examples:
        >>> format_quantity(Decimal("3.00"))
        '3'
        >>> format_quantity(Decimal("2.5"))
        '2.5'
    """
    try:
        quantity = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    if quantity == quantity.to_integral_value():
        return str(quantity.to_integral_value())
    return str(quantity.normalize())


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "format_currency": format_currency,
    "format_percent": format_percent,
    "format_date": format_date,
    "format_quantity": format_quantity,
}
