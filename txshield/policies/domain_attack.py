"""
Domain name attack checks.

- Typosquatting: the entered domain is one edit away from a domain the user
  has transacted with before.
- Drop-catching: a previously used domain now resolves to a different address.

Both are pure given their inputs; reading and writing the resolution ledger
is the caller's job.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from txshield.config.settings import DetectionConfig
from txshield.policies.models import DetectionWarning, Severity, WarningKind
from txshield.shield_logging import get_logger
from txshield.similarity.domain import find_similar_domains, normalize_domain

logger = get_logger(__name__)

_DEFAULT_CONFIG = DetectionConfig()

TYPOSQUATTING_TITLE = "Possible domain typo detected"
TYPOSQUATTING_MESSAGE = 'This domain is similar to "{suggested}" you\'ve interacted with before.'
TYPOSQUATTING_ALERT_DETAILS = (
    "Please double-check that you are sending to the correct domain.",
)

DROP_CATCHING_TITLE = "Domain resolution has changed"
DROP_CATCHING_MESSAGE = 'The resolved address for "{domain}" has changed since your last transaction.'
DROP_CATCHING_ALERT_DETAILS = (
    "The resolved address for this domain has changed since your last transaction.",
    "Please confirm with the domain owner that they still own it and have changed the address.",
)


def check_typosquatting(
    domain: str | None,
    known_domains: Iterable[str] | Mapping[str, str] | None,
    config: DetectionConfig | None = None,
    log: Any = None,
) -> DetectionWarning | None:
    """
    Warn when domain is a single-edit variant of a known domain.

    known_domains may be a list of names or the ledger's domain -> address
    mapping. The first match (in input order) is reported as suggested_domain.
    """
    log = log or logger
    cfg = config or _DEFAULT_CONFIG
    if not normalize_domain(domain) or not known_domains:
        return None

    names = list(known_domains.keys()) if isinstance(known_domains, Mapping) else list(known_domains)
    similar = find_similar_domains(domain, names, cfg.domain_edit_distance)
    if not similar:
        log.debug("typosquatting_clear", domain=normalize_domain(domain), known=len(names))
        return None

    suggested = similar[0]
    log.warning("typosquatting_detected", domain=normalize_domain(domain), suggested_domain=suggested)
    return DetectionWarning(
        kind=WarningKind.TYPOSQUATTING,
        severity=Severity.HIGH,
        title=TYPOSQUATTING_TITLE,
        message=TYPOSQUATTING_MESSAGE.format(suggested=suggested),
        details={
            "domain": domain.strip(),
            "suggested_domain": suggested,
            "similar_domains": tuple(similar),
            "method": f"edit-distance({cfg.domain_edit_distance})",
        },
        alert_details=TYPOSQUATTING_ALERT_DETAILS,
    )


def check_drop_catching(
    domain: str | None,
    current_address: str | None,
    previous_address: str | None,
    log: Any = None,
) -> DetectionWarning | None:
    """Warn when domain now resolves to a different address than last time (case-insensitive)."""
    log = log or logger
    if not domain or not domain.strip() or not current_address or not previous_address:
        return None

    current = current_address.strip().lower()
    previous = previous_address.strip().lower()
    if not current or not previous or current == previous:
        return None

    log.warning("drop_catching_detected", domain=normalize_domain(domain))
    return DetectionWarning(
        kind=WarningKind.DROP_CATCHING,
        severity=Severity.HIGH,
        title=DROP_CATCHING_TITLE,
        message=DROP_CATCHING_MESSAGE.format(domain=domain.strip()),
        details={
            "domain": domain.strip(),
            "previous_address": previous,
            "current_address": current,
            "method": "resolution-changed",
        },
        alert_details=DROP_CATCHING_ALERT_DETAILS,
    )
