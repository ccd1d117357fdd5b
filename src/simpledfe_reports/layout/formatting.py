"""pt-BR display formatting shared by every report level.

All money values (rows, company subtotals, grand total) go through
`format_currency` so that rounding never differs between levels.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from simpledfe_reports.models.report import MONEY_FIELDS

CURRENCY_SYMBOL = "R$"
ELLIPSIS = "..."

_CENTS = Decimal("0.01")
_CNPJ_DIGITS = 14


def format_currency(value: Decimal | float | int | None) -> str:
    """Format a value as Brazilian reais, e.g. ``R$ 1.234,56``.

    Rounds half-up to cents. Negative values get a leading minus
    (``-R$ 10,00``); ``None`` renders as zero.
    """

    if value is None:
        amount = Decimal("0")
    elif isinstance(value, Decimal):
        amount = value
    else:
        amount = Decimal(str(value))
    with localcontext() as ctx:
        # Enough digits for every integer place plus the cents.
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        grouped = f"{abs(amount):,.2f}"
    sign = "-" if amount < 0 else ""
    # Swap the en-US separators for pt-BR ones.
    body = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {body}"


def format_tax_id(value: str | None) -> str:
    """Format a 14-digit CNPJ as ``##.###.###/####-##``.

    Any other digit count is returned unchanged.
    """

    if not value:
        return ""
    digits = re.sub(r"\D", "", value)
    if len(digits) != _CNPJ_DIGITS:
        return value
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def format_date(value: date | str | None) -> str:
    """Format a date as ``DD/MM/YYYY``; unparseable strings are shown verbatim."""

    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    text = str(value).strip()
    if not text:
        return ""
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return str(value)
    return parsed.strftime("%d/%m/%Y")


def format_timestamp(value: datetime) -> str:
    return value.strftime("%d/%m/%Y %H:%M")


def truncate(text: str, max_chars: int | None) -> str:
    """Cut text to `max_chars` characters, the last three being ``...``."""

    if max_chars is None or len(text) <= max_chars:
        return text
    return text[: max_chars - len(ELLIPSIS)] + ELLIPSIS


def format_cell(field: str, value: Any) -> str:
    """Display text of one document field inside a table cell."""

    if field in MONEY_FIELDS:
        return format_currency(value)
    if field == "issue_date":
        return format_date(value)
    if field == "supplier_tax_id":
        return format_tax_id(value)
    return "" if value is None else str(value)
