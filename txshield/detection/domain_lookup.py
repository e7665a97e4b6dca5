"""
Domain lookup flow: ledger-aware typosquatting and drop-catching around a
domain resolution performed by the name-resolution collaborator.

Resolution is asynchronous on the caller's side, and the user may keep
typing while it runs. begin() hands out a request token carrying the
originating domain; complete() applies results only if that domain is still
the current input, and otherwise drops them silently.

Ledger failures (LedgerError from the shipped ledgers, or any error from a
custom store) only degrade detection, so they are logged and treated as
"no history"; they never fail the lookup.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from txshield.config.settings import DetectionConfig
from txshield.ledger.base import DomainResolutionLedger
from txshield.policies.domain_attack import check_drop_catching, check_typosquatting
from txshield.policies.models import DetectionWarning
from txshield.shield_logging import get_logger

logger = get_logger(__name__)

BURN_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_X_ERROR_ADDRESS = "0x"
NO_RESOLUTION_FOR_DOMAIN = "noDomainResolution"


@dataclass(frozen=True)
class Resolution:
    """One resolved address for a domain, as returned by a resolver."""

    resolved_address: str
    protocol: str | None = None
    resolving_snap: str | None = None
    address_book_entry_name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resolution:
        return cls(
            resolved_address=str(data.get("resolvedAddress") or data.get("resolved_address") or ""),
            protocol=data.get("protocol"),
            resolving_snap=data.get("resolvingSnap") or data.get("resolving_snap"),
            address_book_entry_name=data.get("addressBookEntryName") or data.get("address_book_entry_name"),
        )

    @property
    def is_usable(self) -> bool:
        address = self.resolved_address.strip().lower()
        return bool(address) and address not in (BURN_ADDRESS, ZERO_X_ERROR_ADDRESS)


@dataclass(frozen=True)
class LookupRequest:
    """Token for an in-flight lookup; compared against the current input on completion."""

    domain: str
    chain_id: str | None
    sequence: int


@dataclass
class DomainLookupResult:
    domain: str
    chain_id: str | None
    resolutions: list[Resolution] = field(default_factory=list)
    typosquatting_warning: DetectionWarning | None = None
    drop_catching_warning: DetectionWarning | None = None
    error: str | None = None

    @property
    def warnings(self) -> list[DetectionWarning]:
        return [w for w in (self.typosquatting_warning, self.drop_catching_warning) if w is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "chain_id": self.chain_id,
            "resolutions": [r.resolved_address for r in self.resolutions],
            "typosquatting_warning": self.typosquatting_warning.to_dict() if self.typosquatting_warning else None,
            "drop_catching_warning": self.drop_catching_warning.to_dict() if self.drop_catching_warning else None,
            "error": self.error,
        }


def _as_resolution(item: Any) -> Resolution | None:
    if isinstance(item, Resolution):
        return item
    if isinstance(item, Mapping):
        return Resolution.from_dict(item)
    if isinstance(item, str):
        return Resolution(resolved_address=item)
    return None


class DomainLookupFlow:
    """Caller-side orchestration of ledger reads and writes for domain checks."""

    def __init__(
        self,
        ledger: DomainResolutionLedger,
        config: DetectionConfig | None = None,
        log: Any = None,
        enabled: bool = True,
    ) -> None:
        self._ledger = ledger
        self._config = config or DetectionConfig()
        self._log = log or logger
        self.enabled = enabled
        self._current_domain: str | None = None
        self._sequence = itertools.count(1)

    @property
    def current_domain(self) -> str | None:
        return self._current_domain

    def begin(self, domain: str, chain_id: str | None = None) -> LookupRequest:
        """Record domain as the current input and return its request token."""
        trimmed = (domain or "").strip()
        self._current_domain = trimmed
        request = LookupRequest(domain=trimmed, chain_id=chain_id, sequence=next(self._sequence))
        self._log.info("domain_lookup_started", domain=trimmed, sequence=request.sequence)
        return request

    def reset(self) -> None:
        """Clear the current input; in-flight requests become stale."""
        self._current_domain = None

    def is_stale(self, request: LookupRequest) -> bool:
        return request.domain != self._current_domain

    def _known_domains(self) -> dict[str, str]:
        try:
            return self._ledger.get_all()
        except Exception as e:
            self._log.warning(
                "domain_lookup_ledger_read_failed", operation="get_all", error=str(e), exc_info=True
            )
            return {}

    def _previous_address(self, domain: str) -> str | None:
        try:
            return self._ledger.get_previous(domain)
        except Exception as e:
            self._log.warning(
                "domain_lookup_ledger_read_failed", operation="get_previous", error=str(e), exc_info=True
            )
            return None

    def complete(
        self,
        request: LookupRequest,
        resolutions: Iterable[Any] | None,
    ) -> DomainLookupResult | None:
        """
        Apply a finished resolution. Returns None if the request is stale.

        resolutions: Resolution objects, resolver mappings ({"resolvedAddress": ...})
        or bare address strings. Burn and "0x" addresses are dropped.
        """
        if self.is_stale(request):
            self._log.debug(
                "domain_lookup_stale_result_dropped",
                domain=request.domain,
                current_domain=self._current_domain,
                sequence=request.sequence,
            )
            return None

        parsed = [_as_resolution(item) for item in resolutions or ()]
        usable = [r for r in parsed if r is not None and r.is_usable]
        result = DomainLookupResult(domain=request.domain, chain_id=request.chain_id)
        if not usable:
            if request.domain:
                result.error = NO_RESOLUTION_FOR_DOMAIN
            self._log.info("domain_lookup_no_resolution", domain=request.domain)
            return result
        result.resolutions = usable

        if not self.enabled:
            return result

        known = self._known_domains()
        self._log.info("domain_lookup_typosquatting_check", domain=request.domain, known=len(known))
        result.typosquatting_warning = check_typosquatting(
            request.domain, known, config=self._config, log=self._log
        )

        previous = self._previous_address(request.domain)
        if previous:
            result.drop_catching_warning = check_drop_catching(
                request.domain, usable[0].resolved_address, previous, log=self._log
            )
        else:
            self._log.debug("domain_lookup_no_previous_resolution", domain=request.domain)
        return result

    def record_confirmed(self, domain: str, address: str, chain_id: str) -> bool:
        """
        Save domain -> address after a transaction to it is confirmed.
        Returns False (after logging) if the ledger write fails.
        """
        if not domain or not domain.strip() or not address:
            return False
        try:
            self._ledger.save(domain.strip(), address, chain_id)
        except Exception as e:
            self._log.warning(
                "domain_lookup_ledger_write_failed", domain=domain.strip(), error=str(e), exc_info=True
            )
            return False
        self._log.info("domain_resolution_recorded", domain=domain.strip().lower(), chain_id=chain_id)
        return True
