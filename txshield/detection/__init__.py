"""
Detection entry points for the transfer confirmation flow.

DetectionFacade wires the enablement flag and a last-input cache around the
policies. DomainLookupFlow orchestrates the ledger reads and writes around an
externally performed domain resolution and drops stale results.
"""

from txshield.detection.domain_lookup import (
    NO_RESOLUTION_FOR_DOMAIN,
    DomainLookupFlow,
    DomainLookupResult,
    LookupRequest,
    Resolution,
)
from txshield.detection.facade import DetectionFacade, WalletStateSnapshot

__all__ = [
    "NO_RESOLUTION_FOR_DOMAIN",
    "DetectionFacade",
    "DomainLookupFlow",
    "DomainLookupResult",
    "LookupRequest",
    "Resolution",
    "WalletStateSnapshot",
]
