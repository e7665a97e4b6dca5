"""
Warning model returned by the detection policies.

A warning is an immutable value created on a positive match and handed to
the caller; the engine never stores it. Warnings are advisory: is_blocking
is always False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class WarningKind(str, Enum):
    ADDRESS_POISONING = "address-poisoning"
    TYPOSQUATTING = "typosquatting"
    DROP_CATCHING = "drop-catching"


class Severity(str, Enum):
    # all three warning kinds are emitted as high
    HIGH = "high"


@dataclass(frozen=True)
class DetectionWarning:
    """
    Single explainable detection result.

    details carries the structured evidence (recipient, the similar or
    previous value, and the method tag) for auditing and display. It is
    stored as a read-only copy.
    """

    kind: WarningKind
    severity: Severity
    title: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)
    alert_details: tuple[str, ...] = ()
    """Extra hint lines for the confirmation screen."""
    is_blocking: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))
        object.__setattr__(self, "alert_details", tuple(self.alert_details))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "details": dict(self.details),
            "alert_details": list(self.alert_details),
            "is_blocking": self.is_blocking,
        }
