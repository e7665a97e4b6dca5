"""
Detection facade: single entry point for the confirmation flow.

Reads the enablement flag from the caller's state snapshot and keeps a
one-slot cache per check keyed by the last input, so repeated calls with an
unchanged recipient or domain (UI re-renders) skip recomputation. The cache
is an optimization only and can be dropped at any time with invalidate().
No I/O: transactions, owned accounts and ledger contents come in the snapshot.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

from txshield.config.settings import DetectionConfig, Settings, get_settings
from txshield.policies.address_poisoning import evaluate as evaluate_address_poisoning
from txshield.policies.domain_attack import check_drop_catching, check_typosquatting
from txshield.policies.models import DetectionWarning
from txshield.shield_logging import configure_structlog, get_logger
from txshield.similarity.domain import normalize_domain

logger = get_logger(__name__)


def _account_addresses(accounts: Any) -> list[str]:
    """Addresses from internalAccounts.accounts (mapping of id -> account, or a list of accounts)."""
    if isinstance(accounts, Mapping):
        accounts = list(accounts.values())
    out: list[str] = []
    for account in accounts or []:
        if isinstance(account, str):
            out.append(account)
        elif isinstance(account, Mapping) and account.get("address"):
            out.append(str(account["address"]))
    return out


@dataclass
class WalletStateSnapshot:
    """Caller-supplied state for one evaluation."""

    transactions: list[Any] = field(default_factory=list)
    owned_addresses: list[str] = field(default_factory=list)
    resolved_domains: dict[str, str] = field(default_factory=dict)
    """Ledger contents: domain -> last resolved address."""
    detection_enabled: bool = True

    @classmethod
    def from_dict(cls, state: Mapping[str, Any]) -> WalletStateSnapshot:
        """
        Build from the wallet state mapping (optionally wrapped in "metamask"):
        transactions, internalAccounts.accounts, resolvedDomains,
        useAddressPoisoningDetect (absent means enabled).
        """
        data = state.get("metamask", state) if isinstance(state, Mapping) else {}
        accounts = (data.get("internalAccounts") or {}).get("accounts")
        enabled = data.get("useAddressPoisoningDetect")
        resolved = data.get("resolvedDomains") or {}
        return cls(
            transactions=list(data.get("transactions") or []),
            owned_addresses=_account_addresses(accounts),
            resolved_domains={str(k).lower(): str(v).lower() for k, v in resolved.items()},
            detection_enabled=True if enabled is None else bool(enabled),
        )


_MISSING = object()


class _CacheSlot:
    """Holds the result for the most recent input only."""

    def __init__(self) -> None:
        self.key: Hashable = _MISSING
        self.value: DetectionWarning | None = None

    def get(self, key: Hashable) -> Any:
        return self.value if key == self.key else _MISSING

    def put(self, key: Hashable, value: DetectionWarning | None) -> None:
        self.key = key
        self.value = value

    def clear(self) -> None:
        self.key = _MISSING
        self.value = None


class DetectionFacade:
    """
    Address poisoning, typosquatting and drop-catching checks behind one object.

    enabled is a process-level master switch (see Settings.detection_enabled);
    the snapshot's detection_enabled flag gates each call as well.
    """

    def __init__(
        self,
        config: DetectionConfig | None = None,
        log: Any = None,
        enabled: bool = True,
    ) -> None:
        self._config = config or DetectionConfig()
        self._log = log or logger
        self._enabled = enabled
        self._address_slot = _CacheSlot()
        self._typo_slot = _CacheSlot()
        self._drop_slot = _CacheSlot()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, log: Any = None) -> DetectionFacade:
        """Build from Settings; applies its log level and format to structlog first."""
        settings = settings or get_settings()
        configure_structlog(settings.log_level, settings.log_format)
        return cls(
            config=settings.detection,
            log=log or get_logger(__name__),
            enabled=settings.detection_enabled,
        )

    @property
    def config(self) -> DetectionConfig:
        return self._config

    def _is_enabled(self, state: WalletStateSnapshot) -> bool:
        return self._enabled and bool(state.detection_enabled)

    def check_address_poisoning(
        self,
        recipient: str | None,
        state: WalletStateSnapshot,
    ) -> DetectionWarning | None:
        """Address poisoning check for recipient; None when disabled or clean."""
        if not self._is_enabled(state):
            self._log.debug("address_poisoning_disabled")
            return None
        if not recipient or not recipient.strip():
            return None
        key = recipient.strip().lower()
        cached = self._address_slot.get(key)
        if cached is not _MISSING:
            return cached
        warning = evaluate_address_poisoning(
            recipient,
            state.transactions,
            state.owned_addresses,
            config=self._config,
            log=self._log,
        )
        self._address_slot.put(key, warning)
        return warning

    def check_typosquatting(
        self,
        domain: str | None,
        state: WalletStateSnapshot,
    ) -> DetectionWarning | None:
        """Typosquatting check of domain against the snapshot's resolved domains."""
        if not self._is_enabled(state):
            self._log.debug("typosquatting_disabled")
            return None
        key = normalize_domain(domain)
        if not key:
            return None
        cached = self._typo_slot.get(key)
        if cached is not _MISSING:
            return cached
        warning = check_typosquatting(domain, state.resolved_domains, config=self._config, log=self._log)
        self._typo_slot.put(key, warning)
        return warning

    def check_drop_catching(
        self,
        domain: str | None,
        current_address: str | None,
        state: WalletStateSnapshot,
    ) -> DetectionWarning | None:
        """Drop-catching check: current resolution vs the snapshot's previous one."""
        if not self._is_enabled(state):
            self._log.debug("drop_catching_disabled")
            return None
        key = (normalize_domain(domain), (current_address or "").strip().lower())
        if not key[0] or not key[1]:
            return None
        cached = self._drop_slot.get(key)
        if cached is not _MISSING:
            return cached
        previous = state.resolved_domains.get(key[0])
        warning = check_drop_catching(domain, current_address, previous, log=self._log)
        self._drop_slot.put(key, warning)
        return warning

    def invalidate(self) -> None:
        """Drop every cached result."""
        self._address_slot.clear()
        self._typo_slot.clear()
        self._drop_slot.clear()
