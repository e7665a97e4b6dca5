# Detection policies: address poisoning and domain name attacks (typosquatting, drop-catching).

from txshield.policies.address_poisoning import evaluate as evaluate_address_poisoning
from txshield.policies.domain_attack import check_drop_catching, check_typosquatting
from txshield.policies.models import DetectionWarning, Severity, WarningKind

__all__ = [
    "Severity",
    "DetectionWarning",
    "WarningKind",
    "check_drop_catching",
    "check_typosquatting",
    "evaluate_address_poisoning",
]
