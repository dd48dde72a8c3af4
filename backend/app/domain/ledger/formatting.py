"""Display helpers for amounts and timestamps."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from .models import Entry

CENT = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def format_money(amount: Decimal, symbol: str = "$") -> str:
    """Render ``-5`` as ``-$5.00``; no thousands separators."""

    value = Decimal(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{format_amount(value.copy_abs())}"


def format_signed_amount(entry: Entry, symbol: str = "$") -> str:
    sign = "+" if entry.is_income else "-"
    return f"{sign}{symbol}{format_amount(entry.amount)}"


def format_timestamp(value: datetime) -> str:
    """e.g. ``Nov 28, 2025, 9:05 AM`` (day and hour not zero-padded)."""

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value:%b} {value.day}, {value.year}, {hour}:{value.minute:02d} {meridiem}"
