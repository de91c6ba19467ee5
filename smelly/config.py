"""Per-detector configuration.

Configuration is keyed by detector identity (``BooleanParameter``) and resolved
once, at repository construction, into ``DetectorConfig`` values. Keys outside
CONFIG_SCHEMA are detector-specific and kept in ``options``.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .context import name_pattern

logger = logging.getLogger(__name__)

ENABLED_KEY = "enabled"
EXCLUDE_KEY = "exclude"
DETECTORS_SECTION = "detectors"


class ConfigError(ValueError):
    """Malformed detector configuration."""


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    ENABLED_KEY: ConfigKey(bool, True,
        "Run this detector at all"),
    EXCLUDE_KEY: ConfigKey(list, [],
        "Context names to skip; '/regex/' or plain substring"),
}


@dataclass(frozen=True)
class DetectorConfig:
    enabled: bool = True
    exclude: tuple[str, ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)
    # exclude with "/regex/" entries compiled once
    exclude_patterns: tuple[str | re.Pattern, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "exclude", tuple(self.exclude))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(self, "exclude_patterns", _compile_exclude(self.exclude))

    def value(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)


def default_config() -> dict:
    """Return a raw config dict with every schema key at its default."""
    return {k: v.default for k, v in CONFIG_SCHEMA.items()}


def _compile_exclude(exclude: tuple[str, ...]) -> tuple[str | re.Pattern, ...]:
    patterns = []
    for candidate in exclude:
        try:
            patterns.append(name_pattern(candidate))
        except re.error as exc:
            raise ConfigError(f"Invalid exclude pattern {candidate!r}: {exc}") from exc
    return tuple(patterns)


def _check_type(key: str, value: object) -> None:
    expected = CONFIG_SCHEMA[key].type
    if expected is list:
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"Expected a list of strings for '{key}', got: {value!r}")
    elif not isinstance(value, expected):
        raise ConfigError(
            f"Expected {expected.__name__} for '{key}', got: {value!r}"
        )


def resolve_detector_config(
    raw: DetectorConfig | Mapping[str, Any] | None,
    defaults: Mapping[str, Any] | None = None,
) -> DetectorConfig:
    """Merge ``raw`` over ``defaults`` and validate the schema keys.

    A DetectorConfig passes through untouched; None means "all defaults".
    """
    if isinstance(raw, DetectorConfig):
        return raw
    if raw is not None and not isinstance(raw, Mapping):
        raise ConfigError(f"Detector configuration must be a mapping, got: {raw!r}")

    merged = dict(default_config())
    merged.update(defaults or {})
    merged.update(raw or {})

    for key in CONFIG_SCHEMA:
        _check_type(key, merged[key])

    return DetectorConfig(
        enabled=merged.pop(ENABLED_KEY),
        exclude=merged.pop(EXCLUDE_KEY),
        options=merged,
    )


def resolve_configuration(
    raw: Mapping[str, DetectorConfig | Mapping[str, Any]],
) -> dict[str, DetectorConfig]:
    """Resolve a whole ``{detector name: settings}`` table."""
    return {name: resolve_detector_config(settings) for name, settings in raw.items()}


def load_config(path: Path | str) -> dict[str, DetectorConfig]:
    """Load detector settings from a JSON file.

    Expected shape::

        {"detectors": {"BooleanParameter": {"enabled": false}}}

    A missing file means no overrides. Unknown detector names are rejected.
    """
    from .detectors import is_registered

    p = Path(path)
    if not p.exists():
        logger.debug("No config file at %s, using defaults", p)
        return {}

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        raise ConfigError(f"Cannot read config file {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {p} must contain a JSON object")

    section = data.get(DETECTORS_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"'{DETECTORS_SECTION}' in {p} must be an object")

    for name in section:
        if not is_registered(name):
            raise ConfigError(f"Unknown detector '{name}' in {p}")

    resolved = resolve_configuration(section)
    logger.debug("Loaded config for %d detector(s) from %s", len(resolved), p)
    return resolved
