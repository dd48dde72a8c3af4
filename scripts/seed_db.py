"""Seed script for the budget ledger `entries` table.

Creates a handful of sample entries so local UIs and API calls have data to
read. Rows go through the Entry Store client, so they are validated exactly
like user input and the store assigns ids and timestamps.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from backend.app.config import load_settings
from backend.app.domain.ledger import EntryStoreClient, build_entry_table_gateway


def build_seed_entries() -> List[dict[str, object]]:
    """Return static seed drafts for the entries table."""

    return [
        {
            "type": "income",
            "amount": "5000.00",
            "description": "Monthly Salary",
            "category": "Salary",
        },
        {
            "type": "expense",
            "amount": "1200.00",
            "description": "Rent Payment",
            "category": "Housing",
        },
        {
            "type": "income",
            "amount": "850.00",
            "description": "Logo design contract",
            "category": "Freelance",
        },
        {
            "type": "expense",
            "amount": "142.37",
            "description": "Weekly groceries",
            "category": "Food",
        },
        {
            "type": "expense",
            "amount": "64.50",
            "description": "Electricity bill",
            "category": "Utilities",
        },
    ]


def _default_client() -> EntryStoreClient:
    settings = load_settings()
    gateway = build_entry_table_gateway(
        table_name=settings.store.entries_table,
        prefer_postgres=True,
        fallback_to_memory=False,
    )
    return EntryStoreClient(gateway)


async def _create_all(client: EntryStoreClient) -> int:
    created = 0
    for draft in build_seed_entries():
        await client.create(draft)
        created += 1
    return created


def seed_entries(client: Optional[EntryStoreClient] = None) -> int:
    return asyncio.run(_create_all(client or _default_client()))


def main() -> None:
    inserted = seed_entries()
    print(f"Seeded {inserted} entries into the ledger.")


if __name__ == "__main__":
    main()
