"""
Address poisoning policy.

Decides whether a transfer recipient is a lookalike planted in the owner's
history. Decision sequence, each step short-circuiting to "no warning":

1. empty recipient;
2. recipient is one of the owner's addresses (self-transfer);
3. build sent-to / received-from sets from confirmed transactions;
4. owner has sent to the recipient before (established trust);
5. recipient has never sent funds to the owner. A poisoning attacker must
   leave a footprint in the history, so a never-seen lookalike is not
   actionable;
6. first sent-to address similar to the recipient -> high-severity warning.

Advisory only; never blocks the transfer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from txshield.config.settings import DetectionConfig
from txshield.history.index import build_relation_sets, normalize_addresses
from txshield.policies.models import DetectionWarning, Severity, WarningKind
from txshield.shield_logging import get_logger
from txshield.similarity.address import classify, truncate_address

logger = get_logger(__name__)

TITLE = "Possible Address Poisoning"
MESSAGE_TEMPLATE = (
    "The address you're sending to ({recipient}) looks very similar to an address "
    "you've sent funds to before ({similar}). This could be an address poisoning attack. "
    "Please verify the full address carefully."
)
ALERT_DETAILS = (
    "Attackers send small or zero-value transfers from lookalike addresses so they appear in your history.",
    "Compare every character of the address with the one you intended to use.",
)


def evaluate(
    recipient: str | None,
    transactions: Iterable[Any] | None,
    owned_addresses: Iterable[str | None],
    config: DetectionConfig | None = None,
    log: Any = None,
) -> DetectionWarning | None:
    """
    Return an address-poisoning warning for recipient, or None.

    transactions: Transaction objects or raw collaborator mappings.
    owned_addresses: the wallet's own addresses, any case.
    """
    log = log or logger
    if not recipient or not recipient.strip():
        return None

    recipient_lower = recipient.strip().lower()
    owned = normalize_addresses(owned_addresses)
    short_recipient = truncate_address(recipient_lower)

    if recipient_lower in owned:
        log.debug("address_poisoning_self_transfer", recipient=short_recipient)
        return None

    relations = build_relation_sets(transactions, owned)
    log.debug(
        "address_poisoning_relations",
        recipient=short_recipient,
        sent_to=len(relations.sent_to),
        received_from=len(relations.received_from),
        skipped=relations.skipped,
    )

    if recipient_lower in relations.sent_to:
        log.debug("address_poisoning_known_recipient", recipient=short_recipient)
        return None

    if recipient_lower not in relations.received_from:
        log.debug("address_poisoning_no_inbound_history", recipient=short_recipient)
        return None

    for candidate in sorted(relations.sent_to):
        result = classify(recipient_lower, candidate, config)
        if not result.is_similar:
            continue
        tx_value = relations.received_value.get(recipient_lower, 0)
        log.warning(
            "address_poisoning_detected",
            recipient=short_recipient,
            similar_to=truncate_address(candidate),
            method=result.method,
        )
        return DetectionWarning(
            kind=WarningKind.ADDRESS_POISONING,
            severity=Severity.HIGH,
            title=TITLE,
            message=MESSAGE_TEMPLATE.format(
                recipient=truncate_address(recipient.strip()),
                similar=truncate_address(candidate),
            ),
            details={
                "recipient_address": recipient,
                "similar_address": candidate,
                "method": result.method,
                "tx_value": str(tx_value),
            },
            alert_details=ALERT_DETAILS,
        )

    log.debug("address_poisoning_clear", recipient=short_recipient)
    return None
