"""
Application settings and detection thresholds.

Responsibilities:
- DetectionConfig: tunable policy constants for address and domain similarity.
  Thresholds trade false positives against false negatives, so they are
  configuration, not code.
- Settings: process-level configuration (enablement flag, ledger URL, logging).
- get_settings(): build Settings from environment variables and .env (cached).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from txshield.config.env import (
    env_flag,
    get_ledger_db_url,
    load_txshield_env,
)
from txshield.core.exceptions import ConfigError

# (prefix_len, suffix_len) windows that must match exactly; checked in order
DEFAULT_WINDOW_PAIRS: tuple[tuple[int, int], ...] = ((6, 4), (8, 6), (10, 4), (6, 6))
DEFAULT_HIGH_SIMILARITY_THRESHOLD = 0.85
DEFAULT_PREFIX_WINDOW = 12
DEFAULT_PREFIX_SIMILARITY_THRESHOLD = 0.80
DEFAULT_SUFFIX_WINDOW = 10
DEFAULT_SUFFIX_SIMILARITY_THRESHOLD = 0.80
DEFAULT_DOMAIN_EDIT_DISTANCE = 1


def _check_ratio(name: str, value: float) -> None:
    if not 0.0 < value <= 1.0:
        raise ConfigError(f"{name} must be in (0, 1], got {value!r}")


@dataclass(frozen=True)
class DetectionConfig:
    """Policy constants for the similarity heuristics."""

    window_pairs: tuple[tuple[int, int], ...] = DEFAULT_WINDOW_PAIRS
    """Exact prefix/suffix windows; first satisfied pair names the match method."""
    high_similarity_threshold: float = DEFAULT_HIGH_SIMILARITY_THRESHOLD
    """Whole-address similarity ratio at or above which two addresses are similar."""
    prefix_window: int = DEFAULT_PREFIX_WINDOW
    prefix_similarity_threshold: float = DEFAULT_PREFIX_SIMILARITY_THRESHOLD
    suffix_window: int = DEFAULT_SUFFIX_WINDOW
    suffix_similarity_threshold: float = DEFAULT_SUFFIX_SIMILARITY_THRESHOLD
    positional_match_threshold: int | None = None
    """Combined same-position matches over head+tail windows; None disables the rule."""
    domain_edit_distance: int = DEFAULT_DOMAIN_EDIT_DISTANCE
    """Exact Damerau-Levenshtein distance that makes two domains confusable."""

    def __post_init__(self) -> None:
        if not self.window_pairs:
            raise ConfigError("window_pairs must not be empty")
        for pair in self.window_pairs:
            if len(pair) != 2 or pair[0] <= 0 or pair[1] <= 0:
                raise ConfigError(f"invalid window pair {pair!r}")
        _check_ratio("high_similarity_threshold", self.high_similarity_threshold)
        _check_ratio("prefix_similarity_threshold", self.prefix_similarity_threshold)
        _check_ratio("suffix_similarity_threshold", self.suffix_similarity_threshold)
        if self.prefix_window <= 0 or self.suffix_window <= 0:
            raise ConfigError("prefix_window and suffix_window must be positive")
        if self.positional_match_threshold is not None and self.positional_match_threshold <= 0:
            raise ConfigError("positional_match_threshold must be positive when set")
        if self.domain_edit_distance <= 0:
            raise ConfigError("domain_edit_distance must be positive")


@dataclass(frozen=True)
class Settings:
    """Process-level configuration loaded from the environment."""

    detection_enabled: bool = True
    ledger_db_url: str = "sqlite:///txshield_ledger.db"
    log_level: str = "INFO"
    log_format: str = "json"
    detection: DetectionConfig = field(default_factory=DetectionConfig)


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _env_optional_int(name: str) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def parse_window_pairs(raw: str) -> tuple[tuple[int, int], ...]:
    """Parse "6:4,8:6" into ((6, 4), (8, 6))."""
    pairs: list[tuple[int, int]] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        prefix, sep, suffix = chunk.partition(":")
        if not sep:
            raise ConfigError(f"window pair must look like PREFIX:SUFFIX, got {chunk!r}")
        try:
            pairs.append((int(prefix), int(suffix)))
        except ValueError:
            raise ConfigError(f"window pair must be integers, got {chunk!r}") from None
    return tuple(pairs)


def detection_config_from_env() -> DetectionConfig:
    """Build DetectionConfig from TXSHIELD_* variables; unset values keep defaults."""
    raw_pairs = (os.getenv("TXSHIELD_WINDOW_PAIRS") or "").strip()
    return DetectionConfig(
        window_pairs=parse_window_pairs(raw_pairs) if raw_pairs else DEFAULT_WINDOW_PAIRS,
        high_similarity_threshold=_env_float(
            "TXSHIELD_HIGH_SIMILARITY_THRESHOLD", DEFAULT_HIGH_SIMILARITY_THRESHOLD
        ),
        prefix_similarity_threshold=_env_float(
            "TXSHIELD_PREFIX_SIMILARITY_THRESHOLD", DEFAULT_PREFIX_SIMILARITY_THRESHOLD
        ),
        suffix_similarity_threshold=_env_float(
            "TXSHIELD_SUFFIX_SIMILARITY_THRESHOLD", DEFAULT_SUFFIX_SIMILARITY_THRESHOLD
        ),
        positional_match_threshold=_env_optional_int("TXSHIELD_POSITIONAL_MATCH_THRESHOLD"),
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Return the current application settings.

    Cached to avoid re-parsing the environment; call get_settings.cache_clear()
    after changing environment variables (tests do this).
    """
    load_txshield_env()
    return Settings(
        detection_enabled=env_flag("TXSHIELD_DETECTION_ENABLED", True),
        ledger_db_url=get_ledger_db_url(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_format=(os.getenv("LOG_FORMAT") or "json").strip().lower(),
        detection=detection_config_from_env(),
    )
