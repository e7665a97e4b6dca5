"""
Address lookalike classification.

Decides whether two addresses are suspiciously similar and names the rule
that matched, so warnings are explainable. Rules run in order; the first
match wins:

1. empty or identical (case-folded) inputs are never similar;
2. exact prefix+suffix windows (identical head and tail, mutated middle),
   the dominant poisoning pattern;
3. whole-address similarity ratio;
4. similarity ratio of the leading window;
5. similarity ratio of the trailing window;
6. optional combined same-position matches over head and tail.

Thresholds and windows come from DetectionConfig.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from txshield.config.settings import DetectionConfig
from txshield.similarity.string_metrics import matching_positions, similarity_ratio

_DEFAULT_CONFIG = DetectionConfig()

# Head window for the positional rule skips the "0x" marker
POSITIONAL_HEAD_START = 2
POSITIONAL_HEAD_END = 10
POSITIONAL_TAIL_LENGTH = 10

METHOD_WINDOW = "prefix({prefix})+suffix({suffix})"
METHOD_HIGH_SIMILARITY = "high-similarity({pct}%)"
METHOD_PREFIX_SIMILARITY = "prefix-similarity({pct}%)"
METHOD_SUFFIX_SIMILARITY = "suffix-similarity({pct}%)"
METHOD_POSITIONAL = "positional-match({count})"


@dataclass(frozen=True)
class SimilarityResult:
    """Outcome of classify(): whether the pair is similar and which rule said so."""

    is_similar: bool
    method: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"is_similar": self.is_similar, "method": self.method}


NOT_SIMILAR = SimilarityResult(is_similar=False, method=None)


def _pct(ratio: float) -> int:
    return int(round(ratio * 100))


def _window_match(a: str, b: str, config: DetectionConfig) -> str | None:
    for prefix_len, suffix_len in config.window_pairs:
        if len(a) < prefix_len + suffix_len or len(b) < prefix_len + suffix_len:
            continue
        if a[:prefix_len] == b[:prefix_len] and a[-suffix_len:] == b[-suffix_len:]:
            return METHOD_WINDOW.format(prefix=prefix_len, suffix=suffix_len)
    return None


def _positional_match(a: str, b: str, threshold: int) -> str | None:
    head = matching_positions(
        a[POSITIONAL_HEAD_START:POSITIONAL_HEAD_END],
        b[POSITIONAL_HEAD_START:POSITIONAL_HEAD_END],
    )
    tail = matching_positions(a[-POSITIONAL_TAIL_LENGTH:], b[-POSITIONAL_TAIL_LENGTH:])
    if head + tail >= threshold:
        return METHOD_POSITIONAL.format(count=head + tail)
    return None


def classify(
    addr1: str | None,
    addr2: str | None,
    config: DetectionConfig | None = None,
) -> SimilarityResult:
    """
    Classify two addresses as suspiciously similar or not.

    Comparison is case-insensitive. Returns SimilarityResult(is_similar, method)
    where method is e.g. "prefix(6)+suffix(4)" or "high-similarity(90%)".
    Never raises; empty input yields not-similar.
    """
    if not addr1 or not addr2:
        return NOT_SIMILAR
    cfg = config or _DEFAULT_CONFIG
    a = addr1.strip().lower()
    b = addr2.strip().lower()
    if not a or not b or a == b:
        return NOT_SIMILAR

    method = _window_match(a, b, cfg)
    if method:
        return SimilarityResult(is_similar=True, method=method)

    ratio = similarity_ratio(a, b)
    if ratio >= cfg.high_similarity_threshold:
        return SimilarityResult(True, METHOD_HIGH_SIMILARITY.format(pct=_pct(ratio)))

    prefix_ratio = similarity_ratio(a[: cfg.prefix_window], b[: cfg.prefix_window])
    if prefix_ratio >= cfg.prefix_similarity_threshold:
        return SimilarityResult(True, METHOD_PREFIX_SIMILARITY.format(pct=_pct(prefix_ratio)))

    suffix_ratio = similarity_ratio(a[-cfg.suffix_window :], b[-cfg.suffix_window :])
    if suffix_ratio >= cfg.suffix_similarity_threshold:
        return SimilarityResult(True, METHOD_SUFFIX_SIMILARITY.format(pct=_pct(suffix_ratio)))

    if cfg.positional_match_threshold is not None:
        method = _positional_match(a, b, cfg.positional_match_threshold)
        if method:
            return SimilarityResult(is_similar=True, method=method)

    return NOT_SIMILAR


def are_addresses_similar(
    addr1: str | None,
    addr2: str | None,
    config: DetectionConfig | None = None,
) -> bool:
    """Boolean shortcut for classify(addr1, addr2).is_similar."""
    return classify(addr1, addr2, config).is_similar


def truncate_address(address: str, head: int = 8, tail: int = 6) -> str:
    """Display form: first `head` and last `tail` characters joined by '...'."""
    if len(address) <= head + tail:
        return address
    return f"{address[:head]}...{address[-tail:]}"
