from __future__ import annotations

"""Collection config resolution for the POLO collector.

A run is driven by a single :class:`CollectionConfig`: which queries to send,
to which destination countries, in which languages, and over which time
window. Values come from ``config/queries.yml`` when it exists, field by field,
with built-in defaults filling every gap.

Resolution Order
----------------
1. **YAML file** – any non-blank value for a field wins.
2. **Built-in defaults** – used when the field is missing, ``null`` or ``""``.

``tbs`` is the odd one out: its absence means "no date filter" for SERP
requests, so it resolves to ``None`` rather than to a default string.
"""

import logging
import math
import pathlib
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class ConfigError(ValueError):
    """Raised when a supplied config value cannot be used for a run."""


# ---------------------------------------------------------------------------
# Config Dataclass
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CollectionConfig:
    """Fully-resolved, immutable collection settings for one run."""

    queries: Tuple[str, ...]
    destinations: Tuple[str, ...]      # ISO country codes, e.g. "SA"
    languages: Tuple[str, ...]         # Google ``lr`` tokens, e.g. "lang_en"
    tbs: Optional[str]                 # None -> no date restriction
    pages: int
    pause: Tuple[float, float]         # (min, max) seconds between requests
    trends_time: str                   # Google Trends range token

    def asdict(self) -> Dict[str, Any]:  # convenience for logging
        return asdict(self)


DEFAULT_QUERIES: Tuple[str, ...] = (
    "domestic worker abuse",
    "OFW contract violation",
    "household service worker passport withheld",
    "pang-aabuso kasambahay",
    "paglabag sa kontrata OFW",
    "kinuha ang pasaporte kasambahay",
)

DEFAULT_CONFIG = CollectionConfig(
    queries=DEFAULT_QUERIES,
    destinations=("SA", "HK", "AE", "IT"),
    languages=("lang_en", "lang_tl"),
    tbs=None,          # all available SERP results
    pages=10,
    pause=(0.8, 1.6),
    trends_time="all",  # earliest Trends data (2004) -> present
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def value_or_default(provided: Any, fallback: Any) -> Any:
    """Return ``provided`` unless it is ``None`` or an empty string.

    >>> value_or_default("", "all")
    'all'
    >>> value_or_default(0, 10)
    0
    """
    if provided is None:
        return fallback
    if isinstance(provided, str) and provided == "":
        return fallback
    return provided


def _as_str_tuple(field: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        items = (str(value),)
    elif isinstance(value, (list, tuple)):
        if any(v is None or str(v).strip() == "" for v in value):
            raise ConfigError(f"'{field}' must not contain blank items, got {value!r}")
        items = tuple(_as_str(field, v) for v in value)
    else:
        raise ConfigError(f"'{field}' must be a string or a list of strings, got {value!r}")
    if not items:
        raise ConfigError(f"'{field}' must not be empty")
    return items


def _as_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{field}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ConfigError(f"'{field}' must be a whole number, got {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"'{field}' must be an integer, got {value!r}")


def _as_float(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"'{field}' must be numeric, got {value!r}")
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{field}' must be numeric, got {value!r}") from None
    if not math.isfinite(f):
        raise ConfigError(f"'{field}' must be a finite number, got {value!r}")
    return f


def _as_pause(value: Any) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"'pause' must be a pair [min, max], got {value!r}")
    lo, hi = (_as_float("pause", v) for v in value)
    if lo < 0 or hi < 0:
        raise ConfigError(f"'pause' values must be >= 0, got {value!r}")
    if lo > hi:
        raise ConfigError(f"'pause' min must not exceed max, got {value!r}")
    return (lo, hi)


def _as_str(field: str, value: Any) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigError(f"'{field}' must be a string, got {value!r}")


def _as_optional_str(field: str, value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return _as_str(field, value)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def read_config_file(config_path: Union[str, pathlib.Path]) -> Dict[str, Any]:
    """Return the YAML mapping at ``config_path`` or ``{}`` when the file is missing."""
    path = pathlib.Path(config_path)
    if not path.is_file():
        logger.info(f"No {path.name} found at {path} – using defaults.")
        return {}

    logger.info(f"Reading config from {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            loaded = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return loaded


def build_config(raw: Mapping[str, Any], defaults: CollectionConfig = DEFAULT_CONFIG) -> CollectionConfig:
    """Overlay ``raw`` on ``defaults`` field by field and coerce the result."""
    pages = _as_int("pages", value_or_default(raw.get("pages"), defaults.pages))
    if pages < 1:
        raise ConfigError(f"'pages' must be >= 1, got {pages}")

    return CollectionConfig(
        queries=_as_str_tuple("queries", value_or_default(raw.get("queries"), defaults.queries)),
        destinations=_as_str_tuple(
            "destinations", value_or_default(raw.get("destinations"), defaults.destinations)
        ),
        languages=_as_str_tuple("languages", value_or_default(raw.get("languages"), defaults.languages)),
        # tbs never falls back: absent means unfiltered
        tbs=_as_optional_str("tbs", raw.get("tbs")),
        pages=pages,
        pause=_as_pause(value_or_default(raw.get("pause"), defaults.pause)),
        trends_time=_as_str("trends_time", value_or_default(raw.get("trends_time"), defaults.trends_time)),
    )


def resolve(config_path: Union[str, pathlib.Path]) -> CollectionConfig:
    """Public resolver: optional YAML file over built-in defaults."""
    return build_config(read_config_file(config_path))
