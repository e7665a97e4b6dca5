"""
Domain resolution ledger: domain -> last resolved address / chain / timestamp.

The engine reads and writes through the DomainResolutionLedger interface and
never assumes a storage technology. Two implementations ship: an in-memory
dict and a SQLAlchemy-backed table (SQLite by default).
"""

from txshield.ledger.base import DomainResolutionLedger
from txshield.ledger.memory import InMemoryResolutionLedger
from txshield.ledger.models import ResolvedDomainEntry
from txshield.ledger.sql import SqlResolutionLedger

__all__ = [
    "DomainResolutionLedger",
    "InMemoryResolutionLedger",
    "ResolvedDomainEntry",
    "SqlResolutionLedger",
]
