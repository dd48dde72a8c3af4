"""Draft normalization applied at the store-client boundary."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

from ..errors import EntryValidationError
from .models import EntryDraft, EntryType

__all__ = ["MAX_AMOUNT", "REQUIRED_FIELDS", "normalize_amount", "normalize_draft"]

REQUIRED_FIELDS: tuple[str, ...] = ("type", "amount", "description", "category")
CENT = Decimal("0.01")
# Largest value a NUMERIC(12, 2) column holds.
MAX_AMOUNT = Decimal("9999999999.99")


class _InvalidAmount(ValueError):
    pass


def normalize_amount(value: Any) -> Decimal:
    """Coerce a user-supplied amount into a non-negative Decimal in cents.

    Accepts ints, floats, Decimals and numeric strings (surrounding
    whitespace ignored). Raises ``ValueError`` for anything else.
    """

    if isinstance(value, bool):
        raise _InvalidAmount("must be a number")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise _InvalidAmount("is required")
        try:
            amount = Decimal(text)
        except InvalidOperation as exc:
            raise _InvalidAmount("must be a number") from exc
    else:
        raise _InvalidAmount("must be a number")
    if not amount.is_finite():
        raise _InvalidAmount("must be a finite number")
    if amount < 0:
        raise _InvalidAmount("must not be negative")
    if amount > MAX_AMOUNT:
        raise _InvalidAmount("is too large")
    # copy_abs folds "-0" into "0"; the bound above keeps quantize in context precision.
    quantized = amount.copy_abs().quantize(CENT, rounding=ROUND_HALF_UP)
    if quantized > MAX_AMOUNT:
        raise _InvalidAmount("is too large")
    return quantized


def _normalize_text(
    fields: Mapping[str, Any], name: str, errors: dict[str, str]
) -> str | None:
    value = fields.get(name)
    if value is not None and not isinstance(value, str):
        errors[name] = "must be text"
        return None
    text = (value or "").strip()
    if not text:
        errors[name] = "is required"
        return None
    return text


def normalize_draft(fields: Mapping[str, Any]) -> EntryDraft:
    """Validate a loosely-typed field mapping into an :class:`EntryDraft`.

    Every problem is collected so callers can report all offending fields
    at once.
    """

    errors: dict[str, str] = {}

    raw_type = fields.get("type")
    entry_type: EntryType | None = None
    if raw_type is None or (isinstance(raw_type, str) and not raw_type.strip()):
        errors["type"] = "is required"
    else:
        try:
            entry_type = EntryType(
                raw_type.strip().lower() if isinstance(raw_type, str) else raw_type
            )
        except ValueError:
            errors["type"] = "must be 'income' or 'expense'"

    amount: Decimal | None = None
    raw_amount = fields.get("amount")
    if raw_amount is None:
        errors["amount"] = "is required"
    else:
        try:
            amount = normalize_amount(raw_amount)
        except _InvalidAmount as exc:
            errors["amount"] = str(exc)

    description = _normalize_text(fields, "description", errors)
    category = _normalize_text(fields, "category", errors)

    if errors:
        raise EntryValidationError(errors)

    return EntryDraft(
        type=entry_type,  # type: ignore[arg-type]
        amount=amount,  # type: ignore[arg-type]
        description=description,  # type: ignore[arg-type]
        category=category,  # type: ignore[arg-type]
    )
