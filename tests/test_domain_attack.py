"""
Tests for typosquatting and drop-catching checks (policies.domain_attack).
"""

from __future__ import annotations

import pytest

from txshield.config.settings import DetectionConfig
from txshield.policies.domain_attack import check_drop_catching, check_typosquatting
from txshield.policies.models import DetectionWarning, Severity, WarningKind

ADDR_A = "0x1111111111111111111111111111111111111111"
ADDR_B = "0x2222222222222222222222222222222222222222"
MIXED_A = "0xAbCd111111111111111111111111111111111111"


def test_typosquatting_detected_from_list():
    warning = check_typosquatting("uniswaap.eth", ["opensea.eth", "uniswap.eth"])
    assert warning is not None
    assert warning.kind is WarningKind.TYPOSQUATTING
    assert warning.severity is Severity.HIGH
    assert warning.details["suggested_domain"] == "uniswap.eth"
    assert '"uniswap.eth"' in warning.message


def test_typosquatting_detected_from_ledger_mapping():
    known = {"vitalik.eth": ADDR_A, "uniswap.eth": ADDR_B}
    warning = check_typosquatting("vitallk.eth", known)
    assert warning is not None
    assert warning.details["suggested_domain"] == "vitalik.eth"


def test_typosquatting_first_match_suggested():
    warning = check_typosquatting("vitalik.eth", ["vitalikk.eth", "vltalik.eth"])
    assert warning.details["suggested_domain"] == "vitalikk.eth"
    assert warning.details["similar_domains"] == ("vitalikk.eth", "vltalik.eth")


def test_typosquatting_exact_known_domain_not_flagged():
    assert check_typosquatting("uniswap.eth", ["uniswap.eth"]) is None
    assert check_typosquatting("UNISWAP.eth", {"uniswap.eth": ADDR_A}) is None


def test_typosquatting_two_edits_not_flagged():
    assert check_typosquatting("unisw4p2.eth", ["uniswap.eth"]) is None


def test_typosquatting_empty_inputs():
    assert check_typosquatting("", ["uniswap.eth"]) is None
    assert check_typosquatting("uniswaap.eth", []) is None
    assert check_typosquatting("uniswaap.eth", {}) is None
    assert check_typosquatting("uniswaap.eth", None) is None


def test_typosquatting_edit_distance_configurable():
    cfg = DetectionConfig(domain_edit_distance=2)
    warning = check_typosquatting("unisw4p2.eth", ["uniswap.eth"], config=cfg)
    assert warning is not None
    assert warning.details["method"] == "edit-distance(2)"


def test_drop_catching_same_address_no_warning():
    assert check_drop_catching("vitalik.eth", ADDR_A, ADDR_A) is None
    assert check_drop_catching("vitalik.eth", MIXED_A, MIXED_A.lower()) is None
    assert check_drop_catching("vitalik.eth", MIXED_A.upper().replace("0X", "0x"), MIXED_A) is None


def test_drop_catching_changed_address_warns():
    warning = check_drop_catching("vitalik.eth", ADDR_B, ADDR_A)
    assert warning is not None
    assert warning.kind is WarningKind.DROP_CATCHING
    assert warning.details["previous_address"] == ADDR_A
    assert warning.details["current_address"] == ADDR_B
    assert '"vitalik.eth"' in warning.message
    assert len(warning.alert_details) == 2


def test_drop_catching_case_does_not_change_outcome():
    base = check_drop_catching("vitalik.eth", ADDR_B, MIXED_A)
    swapped = check_drop_catching("vitalik.eth", ADDR_B.upper(), MIXED_A.lower())
    assert base is not None and swapped is not None
    assert base.details["previous_address"] == swapped.details["previous_address"] == MIXED_A.lower()


def test_drop_catching_requires_all_inputs():
    assert check_drop_catching("vitalik.eth", ADDR_A, None) is None
    assert check_drop_catching("vitalik.eth", "", ADDR_A) is None
    assert check_drop_catching("", ADDR_A, ADDR_B) is None


def test_warning_details_copied_from_caller_mapping():
    details = {"domain": "vitalik.eth"}
    warning = DetectionWarning(
        kind=WarningKind.DROP_CATCHING,
        severity=Severity.HIGH,
        title="t",
        message="m",
        details=details,
        alert_details=["hint"],
    )
    details["domain"] = "changed.eth"
    assert warning.details["domain"] == "vitalik.eth"
    assert warning.alert_details == ("hint",)
    with pytest.raises(TypeError):
        warning.details["domain"] = "changed.eth"
    assert warning.to_dict()["details"] == {"domain": "vitalik.eth"}
