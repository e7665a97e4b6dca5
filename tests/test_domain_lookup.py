"""
Tests for DomainLookupFlow: staleness, ledger-backed domain checks, recording.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from txshield.core.exceptions import LedgerError
from txshield.detection.domain_lookup import (
    BURN_ADDRESS,
    NO_RESOLUTION_FOR_DOMAIN,
    DomainLookupFlow,
    Resolution,
)
from txshield.ledger import InMemoryResolutionLedger
from txshield.ledger.base import DomainResolutionLedger
from txshield.policies.models import WarningKind

ADDR_A = "0x1111111111111111111111111111111111111111"
ADDR_B = "0x2222222222222222222222222222222222222222"


def test_stale_result_dropped(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    first = flow.begin("vitalik.et")
    flow.begin("vitalik.eth")
    assert flow.is_stale(first)
    assert flow.complete(first, [ADDR_A]) is None


def test_reset_makes_in_flight_request_stale(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth")
    flow.reset()
    assert flow.current_domain is None
    assert flow.complete(request, [ADDR_A]) is None


def test_same_domain_retyped_still_current(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    first = flow.begin("vitalik.eth")
    second = flow.begin(" vitalik.eth ")
    assert second.sequence > first.sequence
    assert flow.complete(first, [ADDR_A]) is not None


def test_clean_lookup_has_no_warnings(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth", chain_id="0x1")
    result = flow.complete(request, [{"resolvedAddress": ADDR_A, "protocol": "ENS"}])
    assert result.error is None
    assert result.warnings == []
    assert result.resolutions == [Resolution(resolved_address=ADDR_A, protocol="ENS")]
    assert result.to_dict()["resolutions"] == [ADDR_A]


def test_typosquatting_against_ledger(memory_ledger):
    memory_ledger.save("uniswap.eth", ADDR_A, "0x1")
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("uniswaap.eth")
    result = flow.complete(request, [ADDR_B])
    assert result.typosquatting_warning is not None
    assert result.typosquatting_warning.details["suggested_domain"] == "uniswap.eth"
    assert result.drop_catching_warning is None


def test_drop_catching_against_ledger(memory_ledger):
    memory_ledger.save("vitalik.eth", ADDR_A, "0x1")
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [ADDR_B])
    assert result.typosquatting_warning is None
    assert result.drop_catching_warning.kind is WarningKind.DROP_CATCHING
    assert result.drop_catching_warning.details["previous_address"] == ADDR_A


def test_unchanged_resolution_no_drop_catching(memory_ledger):
    memory_ledger.save("vitalik.eth", ADDR_A, "0x1")
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth")
    assert flow.complete(request, [ADDR_A.upper().replace("0X", "0x")]).warnings == []


def test_burn_and_error_addresses_filtered(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [BURN_ADDRESS, "0x", ""])
    assert result.resolutions == []
    assert result.error == NO_RESOLUTION_FOR_DOMAIN


def test_first_usable_resolution_drives_drop_catching(memory_ledger):
    memory_ledger.save("vitalik.eth", ADDR_A, "0x1")
    flow = DomainLookupFlow(memory_ledger)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [BURN_ADDRESS, ADDR_A, ADDR_B])
    assert result.resolutions[0].resolved_address == ADDR_A
    assert result.drop_catching_warning is None


def test_disabled_flow_skips_checks(memory_ledger):
    memory_ledger.save("vitalik.eth", ADDR_A, "0x1")
    flow = DomainLookupFlow(memory_ledger, enabled=False)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [ADDR_B])
    assert len(result.resolutions) == 1
    assert result.warnings == []


def test_ledger_read_failure_treated_as_no_history():
    ledger = MagicMock(spec=DomainResolutionLedger)
    ledger.get_all.side_effect = LedgerError("get_all", "boom")
    ledger.get_previous.side_effect = LedgerError("get_entry", "boom")
    log = MagicMock()
    flow = DomainLookupFlow(ledger, log=log)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [ADDR_A])
    assert result.error is None
    assert result.warnings == []
    events = [c.args[0] for c in log.warning.call_args_list]
    assert events.count("domain_lookup_ledger_read_failed") == 2


def test_record_confirmed_feeds_next_lookup(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    assert flow.record_confirmed("Vitalik.eth", ADDR_A, "0x1") is True
    assert memory_ledger.get_previous("vitalik.eth") == ADDR_A

    request = flow.begin("vitalik.eth")
    assert flow.complete(request, [ADDR_B]).drop_catching_warning is not None


def test_record_confirmed_requires_domain_and_address(memory_ledger):
    flow = DomainLookupFlow(memory_ledger)
    assert flow.record_confirmed("", ADDR_A, "0x1") is False
    assert flow.record_confirmed("vitalik.eth", "", "0x1") is False
    assert memory_ledger.get_all() == {}


def test_record_confirmed_write_failure_returns_false():
    ledger = MagicMock(spec=DomainResolutionLedger)
    ledger.save.side_effect = LedgerError("save", "disk full")
    flow = DomainLookupFlow(ledger, log=MagicMock())
    assert flow.record_confirmed("vitalik.eth", ADDR_A, "0x1") is False


def test_record_confirmed_with_sql_ledger(sql_ledger):
    flow = DomainLookupFlow(sql_ledger)
    assert flow.record_confirmed("uniswap.eth", ADDR_A, "0x1") is True
    request = flow.begin("uniswaap.eth")
    result = flow.complete(request, [ADDR_B])
    assert result.typosquatting_warning.details["suggested_domain"] == "uniswap.eth"


class _UnreachableStoreLedger(InMemoryResolutionLedger):
    """Store-backed ledger whose backend raises its own errors, not LedgerError."""

    def get_all(self):
        raise ConnectionError("store offline")

    def get_entry(self, domain):
        raise ConnectionError("store offline")

    def save(self, domain, address, chain_id):
        raise OSError("disk full")


def test_non_ledger_error_on_read_treated_as_no_history():
    log = MagicMock()
    flow = DomainLookupFlow(_UnreachableStoreLedger(), log=log)
    request = flow.begin("vitalik.eth")
    result = flow.complete(request, [ADDR_A])
    assert result.error is None
    assert result.resolutions[0].resolved_address == ADDR_A
    assert result.warnings == []
    calls = [c for c in log.warning.call_args_list if c.args[0] == "domain_lookup_ledger_read_failed"]
    assert len(calls) == 2
    assert all(c.kwargs["exc_info"] is True for c in calls)


def test_non_ledger_error_on_write_returns_false():
    log = MagicMock()
    flow = DomainLookupFlow(_UnreachableStoreLedger(), log=log)
    assert flow.record_confirmed("vitalik.eth", ADDR_A, "0x1") is False
    events = [c.args[0] for c in log.warning.call_args_list]
    assert "domain_lookup_ledger_write_failed" in events


def test_mock_ledger_connection_and_os_errors():
    ledger = MagicMock(spec=DomainResolutionLedger)
    ledger.get_all.side_effect = ConnectionError("store offline")
    ledger.get_previous.side_effect = ConnectionError("store offline")
    ledger.save.side_effect = OSError("disk full")
    flow = DomainLookupFlow(ledger, log=MagicMock())
    request = flow.begin("uniswaap.eth")
    assert flow.complete(request, [ADDR_B]).warnings == []
    assert flow.record_confirmed("uniswap.eth", ADDR_A, "0x1") is False
