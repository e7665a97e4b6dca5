"""
Domain typo detection.

Two domains are confusable when they differ by exactly one edit
(insertion, deletion, substitution or adjacent transposition). Domain names
are short, so broader similarity scoring would be noisy; only single-edit
variants count.
"""

from __future__ import annotations

from collections.abc import Iterable

from txshield.similarity.string_metrics import damerau_levenshtein

TYPO_EDIT_DISTANCE = 1


def normalize_domain(domain: str | None) -> str:
    """Trim and lowercase; None becomes ""."""
    return (domain or "").strip().lower()


def are_similar_domains(
    domain1: str | None,
    domain2: str | None,
    edit_distance: int = TYPO_EDIT_DISTANCE,
) -> bool:
    """True iff the normalized domains differ and are exactly `edit_distance` edits apart."""
    d1 = normalize_domain(domain1)
    d2 = normalize_domain(domain2)
    if not d1 or not d2 or d1 == d2:
        return False
    return damerau_levenshtein(d1, d2) == edit_distance


def find_similar_domains(
    target: str | None,
    known_domains: Iterable[str],
    edit_distance: int = TYPO_EDIT_DISTANCE,
) -> list[str]:
    """
    Return known domains that are one edit away from target.

    Input order is preserved, exact (case-folded) matches are skipped, and each
    match is returned as spelled in known_domains.
    """
    normalized_target = normalize_domain(target)
    if not normalized_target:
        return []
    similar: list[str] = []
    for known in known_domains:
        if normalize_domain(known) == normalized_target:
            continue
        if are_similar_domains(normalized_target, known, edit_distance):
            similar.append(known)
    return similar
