"""
Pytest fixtures for txshield tests: a poisoned transaction history and ledgers.
"""

from __future__ import annotations

from typing import Any

import pytest

from txshield.ledger import InMemoryResolutionLedger, SqlResolutionLedger


@pytest.fixture
def poisoned_history() -> list[dict[str, Any]]:
    """
    Owner 0xOWNER paid 0xaaaa...889999; a lookalike 0xAAAA...880000 then sent
    a zero-value transfer to the owner.
    """
    return [
        {
            "id": "1",
            "status": "confirmed",
            "txParams": {
                "from": "0xOWNER",
                "to": "0xaaaa111122223333444455556666777788889999",
                "value": "0xde0b6b3a7640000",
            },
        },
        {
            "id": "2",
            "status": "confirmed",
            "txParams": {
                "from": "0xAAAA111122223333444455556666777788880000",
                "to": "0xOWNER",
                "value": "0x0",
            },
        },
    ]


@pytest.fixture
def memory_ledger() -> InMemoryResolutionLedger:
    return InMemoryResolutionLedger()


@pytest.fixture
def sql_ledger(tmp_path) -> SqlResolutionLedger:
    """SQLite-backed ledger in a temporary file."""
    return SqlResolutionLedger(f"sqlite:///{tmp_path / 'ledger.db'}")
