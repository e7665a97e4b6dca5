"""
Data models for wallet transaction history.

Transactions are owned by the transaction-history collaborator; the engine
only reads them. Relation sets are derived per evaluation and discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

STATUS_CONFIRMED = "confirmed"


@dataclass(frozen=True)
class TxParams:
    """Parameter block of a transaction: sender, recipient, hex-encoded value."""

    from_address: str | None = None
    to_address: str | None = None
    value: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TxParams:
        return cls(
            from_address=data.get("from"),
            to_address=data.get("to"),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class Transaction:
    """
    A wallet transaction record.

    Only status == "confirmed" transactions with a parameter block count
    toward the relation index.
    """

    id: str
    status: str
    tx_params: TxParams | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Transaction:
        """Build from the collaborator shape {"id", "status", "txParams": {"from", "to", "value"}}."""
        raw_params = data.get("txParams")
        if raw_params is None:
            raw_params = data.get("tx_params")
        params = TxParams.from_dict(raw_params) if isinstance(raw_params, Mapping) else None
        return cls(
            id=str(data.get("id") or ""),
            status=str(data.get("status") or ""),
            tx_params=params,
        )

    @property
    def is_confirmed(self) -> bool:
        return self.status == STATUS_CONFIRMED


@dataclass
class AddressRelationSets:
    """
    Addresses the owner sent funds to and addresses that sent funds to the owner.

    Evaluation-scoped: built fresh from the transaction list on every policy
    call, since the list can grow between calls.
    """

    sent_to: set[str] = field(default_factory=set)
    received_from: set[str] = field(default_factory=set)
    received_value: dict[str, int] = field(default_factory=dict)
    """Sum of parsed inbound values per sender (wei); diagnostic only."""
    skipped: int = 0
    """Transactions ignored (not confirmed or no parameter block)."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "sent_to": sorted(self.sent_to),
            "received_from": sorted(self.received_from),
            "received_value": dict(self.received_value),
            "skipped": self.skipped,
        }
