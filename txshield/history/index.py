"""
Transaction history index: derive sent-to / received-from sets for the owner.

Single pass over the transaction list. Only confirmed transactions count;
pending and failed transfers are not reliable signal. Accepts Transaction
objects or the collaborator's raw mappings.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from txshield.history.models import AddressRelationSets, Transaction

HEX_PREFIX = "0x"
_HEX_DIGITS = re.compile(r"[0-9a-f]+")


def parse_hex_value(value: Any) -> int:
    """Parse a hex-encoded integer ("0x1bc16d674ec80000"). Anything unparseable is 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    raw = str(value).strip().lower()
    if raw.startswith(HEX_PREFIX):
        raw = raw[len(HEX_PREFIX) :]
    # int(..., 16) would also accept signs and underscores
    if not _HEX_DIGITS.fullmatch(raw):
        return 0
    return int(raw, 16)


def normalize_addresses(addresses: Iterable[str | None]) -> set[str]:
    """Lowercase and strip; empty entries dropped."""
    return {a.strip().lower() for a in addresses if a and a.strip()}


def _as_transaction(tx: Any) -> Transaction | None:
    if isinstance(tx, Transaction):
        return tx
    if isinstance(tx, Mapping):
        return Transaction.from_dict(tx)
    return None


def build_relation_sets(
    transactions: Iterable[Any] | None,
    owned_addresses: Iterable[str | None],
) -> AddressRelationSets:
    """
    Build AddressRelationSets from a transaction list and the owner's addresses.

    For each confirmed transaction with a parameter block:
    - from is owned and to is present -> to goes into sent_to;
    - to is owned and from is present -> from goes into received_from,
      and its parsed value is added to received_value.
    Malformed values count as 0 and never abort the pass.
    """
    owned = normalize_addresses(owned_addresses)
    relations = AddressRelationSets()
    for raw in transactions or ():
        tx = _as_transaction(raw)
        if tx is None or tx.tx_params is None or not tx.is_confirmed:
            relations.skipped += 1
            continue
        params = tx.tx_params
        from_lower = (params.from_address or "").strip().lower()
        to_lower = (params.to_address or "").strip().lower()

        if from_lower and from_lower in owned and to_lower:
            relations.sent_to.add(to_lower)

        if to_lower and to_lower in owned and from_lower:
            relations.received_from.add(from_lower)
            relations.received_value[from_lower] = (
                relations.received_value.get(from_lower, 0) + parse_hex_value(params.value)
            )
    return relations
