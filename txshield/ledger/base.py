"""
Abstract domain resolution ledger.

Implementations persist domain -> address mappings. Keys and addresses are
lowercased on write and lookups are case-insensitive. Callers must tolerate
eventual consistency: a read right after a write may or may not reflect it.
Implementations raise LedgerError on storage failure; the lookup flow treats
that as "no history".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from txshield.ledger.models import ResolvedDomainEntry


def normalize_key(value: str | None) -> str:
    return (value or "").strip().lower()


class DomainResolutionLedger(ABC):
    """Key-value contract for domain resolution history."""

    @abstractmethod
    def get_all(self) -> dict[str, str]:
        """Return every known domain mapped to its last resolved address."""
        ...

    @abstractmethod
    def get_entry(self, domain: str) -> ResolvedDomainEntry | None:
        """Return the full entry for a domain, or None."""
        ...

    @abstractmethod
    def save(self, domain: str, address: str, chain_id: str) -> None:
        """Insert or replace the resolution for a domain."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries. Exposed for maintenance; the engine never calls it."""
        ...

    def get_previous(self, domain: str) -> str | None:
        """Previously resolved address for a domain, or None."""
        entry = self.get_entry(domain)
        return entry.address if entry else None

    def domain_names(self) -> list[str]:
        return list(self.get_all().keys())

    def is_resolved(self, domain: str) -> bool:
        return normalize_key(domain) in self.get_all()
