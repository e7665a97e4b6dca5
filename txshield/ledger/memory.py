"""
In-memory resolution ledger. Process-local; used for tests and for callers
that keep their own persistence.
"""

from __future__ import annotations

import time

from txshield.ledger.base import DomainResolutionLedger, normalize_key
from txshield.ledger.models import ResolvedDomainEntry
from txshield.shield_logging import get_logger

logger = get_logger(__name__)


class InMemoryResolutionLedger(DomainResolutionLedger):
    """Dict-backed ledger keyed by lowercased domain."""

    def __init__(self, entries: dict[str, str] | None = None, chain_id: str = "") -> None:
        self._entries: dict[str, ResolvedDomainEntry] = {}
        for domain, address in (entries or {}).items():
            self.save(domain, address, chain_id)

    def get_all(self) -> dict[str, str]:
        return {domain: entry.address for domain, entry in self._entries.items()}

    def get_entry(self, domain: str) -> ResolvedDomainEntry | None:
        return self._entries.get(normalize_key(domain))

    def save(self, domain: str, address: str, chain_id: str) -> None:
        key = normalize_key(domain)
        if not key:
            return
        self._entries[key] = ResolvedDomainEntry(
            domain=key,
            address=normalize_key(address),
            chain_id=chain_id,
            timestamp=int(time.time()),
        )
        logger.debug("ledger_saved", domain=key, chain_id=chain_id)

    def clear(self) -> None:
        self._entries.clear()
