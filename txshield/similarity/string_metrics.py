"""
String distance and similarity primitives.

Full dynamic-programming matrices, unit costs. Inputs are short (addresses,
domain names), so O(len(a) * len(b)) time and space is fine. All functions
are total over str input and symmetric.
"""

from __future__ import annotations


def matching_positions(a: str, b: str) -> int:
    """Count indices i < min(len(a), len(b)) where a[i] == b[i]. Position-anchored, no alignment."""
    return sum(1 for x, y in zip(a, b) if x == y)


def _init_matrix(len_a: int, len_b: int) -> list[list[int]]:
    matrix = [[0] * (len_b + 1) for _ in range(len_a + 1)]
    for i in range(len_a + 1):
        matrix[i][0] = i
    for j in range(len_b + 1):
        matrix[0][j] = j
    return matrix


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions turning a into b."""
    len_a, len_b = len(a), len(b)
    matrix = _init_matrix(len_a, len_b)
    for i in range(1, len_a + 1):
        for j in range(1, len_b + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
    return matrix[len_a][len_b]


def damerau_levenshtein(a: str, b: str) -> int:
    """
    Levenshtein distance plus adjacent transposition at cost 1.

    Optimal-string-alignment form: a transposition is taken from the
    cell two rows and two columns back when the two preceding characters
    are a swapped pair ("ab" -> "ba").
    """
    len_a, len_b = len(a), len(b)
    matrix = _init_matrix(len_a, len_b)
    for i in range(1, len_a + 1):
        for j in range(1, len_b + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                matrix[i][j] = min(matrix[i][j], matrix[i - 2][j - 2] + 1)
    return matrix[len_a][len_b]


def similarity_ratio(a: str, b: str) -> float:
    """1 - levenshtein(a, b) / max(len(a), len(b)), in [0, 1]. Two empty strings are identical (1.0)."""
    longest = max(len(a), len(b), 1)
    return 1.0 - levenshtein(a, b) / longest
