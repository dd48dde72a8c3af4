"""Recipe read model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..ledger.models import as_utc


@dataclass(frozen=True)
class Recipe:
    id: int
    name: str
    description: Optional[str] = None
    date_created: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Recipe":
        created = row.get("date_created")
        description = row.get("description")
        return cls(
            id=int(row["id"]),
            name=row["name"],
            description=description or None,
            date_created=as_utc(created) if created is not None else None,
        )
