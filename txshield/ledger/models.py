"""
Data model for a domain's last known resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResolvedDomainEntry:
    """
    Last known resolution of a domain.

    domain and address are stored lowercased. Created or replaced by save();
    the engine never deletes entries.
    """

    domain: str
    address: str
    chain_id: str
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "address": self.address,
            "chain_id": self.chain_id,
            "timestamp": self.timestamp,
        }
