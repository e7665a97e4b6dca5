"""
Application-level exceptions.

Detection itself never raises: invalid input degrades to "no warning".
These classes cover the two places where a failure can surface: building
configuration, and talking to a persisted resolution ledger.
"""

from __future__ import annotations


class TxShieldError(Exception):
    """Base class for txshield errors."""


class ConfigError(TxShieldError, ValueError):
    """Invalid detection configuration (threshold out of range, bad window pair, unparseable env value)."""


class LedgerError(TxShieldError):
    """Domain resolution ledger could not be read or written."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"ledger {operation} failed: {message}")
        self.operation = operation
