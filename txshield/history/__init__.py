# Transaction history: models and the sent-to / received-from relation index.

from txshield.history.index import build_relation_sets, parse_hex_value
from txshield.history.models import (
    STATUS_CONFIRMED,
    AddressRelationSets,
    Transaction,
    TxParams,
)

__all__ = [
    "STATUS_CONFIRMED",
    "AddressRelationSets",
    "Transaction",
    "TxParams",
    "build_relation_sets",
    "parse_hex_value",
]
