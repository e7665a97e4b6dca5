# String-distance primitives and the address / domain similarity rules built on them.

from txshield.similarity.address import (
    SimilarityResult,
    are_addresses_similar,
    classify,
    truncate_address,
)
from txshield.similarity.domain import (
    are_similar_domains,
    find_similar_domains,
    normalize_domain,
)
from txshield.similarity.string_metrics import (
    damerau_levenshtein,
    levenshtein,
    matching_positions,
    similarity_ratio,
)

__all__ = [
    "SimilarityResult",
    "are_addresses_similar",
    "are_similar_domains",
    "classify",
    "damerau_levenshtein",
    "find_similar_domains",
    "levenshtein",
    "matching_positions",
    "normalize_domain",
    "similarity_ratio",
    "truncate_address",
]
