"""Navigation mode/weight configuration with validate-then-merge semantics."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)

MODE_ENV_VAR = "SPATIAL_NAV_MODE"

MODES = ("geometric", "directional")
SCROLL_BEHAVIORS = ("scrollFirst", "focus")
FALLBACKS = ("none", "nearest", "wrap")
NUMERIC_FIELDS = (
    "cone_angle",
    "primary_weight",
    "secondary_weight",
    "overlap_weight",
    "alignment_weight",
    "orthogonal_weight_lr",
    "orthogonal_weight_ud",
)
FLAG_FIELDS = ("overlap_bonus", "row_column_bias")

# Portal preferences use the browser-side spelling.
_CAMEL_ALIASES = {
    "coneAngle": "cone_angle",
    "primaryWeight": "primary_weight",
    "secondaryWeight": "secondary_weight",
    "overlapBonus": "overlap_bonus",
    "overlapWeight": "overlap_weight",
    "rowColumnBias": "row_column_bias",
    "alignmentWeight": "alignment_weight",
    "scrollBehavior": "scroll_behavior",
    "orthogonalWeightLR": "orthogonal_weight_lr",
    "orthogonalWeightUD": "orthogonal_weight_ud",
}


class NavigationConfigError(ValueError):
    """Raised when configuration options fail validation."""


@dataclass(frozen=True)
class NavigationConfig:
    mode: str = "geometric"
    cone_angle: float = 30.0
    primary_weight: float = 1.0
    secondary_weight: float = 0.5
    overlap_bonus: bool = True
    overlap_weight: float = 5.0
    row_column_bias: bool = True
    alignment_weight: float = 5.0
    scroll_behavior: str = "focus"
    fallback: str = "none"
    orthogonal_weight_lr: float = 30.0
    orthogonal_weight_ud: float = 2.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = NavigationConfig()
_FIELD_NAMES = frozenset(f.name for f in fields(NavigationConfig))


def _canonical_key(key: Any) -> str:
    if not isinstance(key, str):
        raise NavigationConfigError(f"Configuration keys must be strings, got {key!r}")
    name = _CAMEL_ALIASES.get(key, key)
    if name not in _FIELD_NAMES:
        raise NavigationConfigError(f"Unknown configuration option '{key}'")
    return name


def validate_options(options: Any) -> Dict[str, Any]:
    """Return ``options`` keyed by field name, raising on the first invalid entry."""

    if not isinstance(options, Mapping):
        raise NavigationConfigError("Configuration options must be a mapping")
    normalized: Dict[str, Any] = {}
    for key, value in options.items():
        name = _canonical_key(key)
        if name == "mode" and value not in MODES:
            raise NavigationConfigError(f"Invalid mode {value!r}: must be 'geometric' or 'directional'")
        if name == "scroll_behavior" and value not in SCROLL_BEHAVIORS:
            raise NavigationConfigError(f"Invalid scroll_behavior {value!r}: must be 'scrollFirst' or 'focus'")
        if name == "fallback" and value not in FALLBACKS:
            raise NavigationConfigError(f"Invalid fallback {value!r}: must be 'none', 'nearest', or 'wrap'")
        if name in NUMERIC_FIELDS and (isinstance(value, bool) or not isinstance(value, (int, float))):
            raise NavigationConfigError(f"{name} must be a number, got {value!r}")
        if name in FLAG_FIELDS and not isinstance(value, bool):
            raise NavigationConfigError(f"{name} must be a boolean, got {value!r}")
        normalized[name] = value
    return normalized


def preset_options(mode: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Options the portal applies when switching into ``mode``."""

    if mode == "geometric":
        options: Dict[str, Any] = {"mode": "geometric", "fallback": "none"}
    elif mode == "directional":
        options = {
            "mode": "directional",
            "cone_angle": 30,
            "primary_weight": 1,
            "secondary_weight": 0.5,
            "overlap_bonus": True,
            "row_column_bias": True,
            "fallback": "nearest",
        }
    else:
        raise NavigationConfigError(f"Invalid mode {mode!r}: must be 'geometric' or 'directional'")
    if overrides:
        options.update(validate_options(overrides))
    return options


def resolve_effective_mode(
    *,
    bundle_mode: Optional[str] = None,
    bundle_required: bool = False,
    site_mode: Optional[str] = None,
    global_mode: Optional[str] = None,
) -> str:
    """Pick the navigation mode for a page.

    Priority: a bundle that requires its mode, then a per-site override, then the
    bundle's preferred mode, then the global preference, then ``directional``.
    """

    if bundle_required and bundle_mode:
        return bundle_mode
    if site_mode and site_mode != "null":
        return site_mode
    if bundle_mode and not bundle_required:
        return bundle_mode
    return global_mode or "directional"


class NavigationContext:
    """Holds the active ``NavigationConfig`` for one navigator."""

    def __init__(self, config: Optional[NavigationConfig] = None) -> None:
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def config(self) -> NavigationConfig:
        return self._config

    def configure(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> NavigationConfig:
        if options is None and not kwargs:
            raise NavigationConfigError("Configuration options must be a mapping")
        merged: Dict[str, Any] = {}
        if options is not None:
            merged.update(validate_options(options))
        if kwargs:
            merged.update(validate_options(kwargs))
        self._config = replace(self._config, **merged)
        _NAV_LOGGER.debug("Navigation config updated: %s", ", ".join(f"{k}={v}" for k, v in sorted(merged.items())))
        return self._config

    def get_config(self) -> NavigationConfig:
        return self._config

    def reset_config(self) -> None:
        self._config = DEFAULT_CONFIG

    def apply_mode(self, mode: str, overrides: Optional[Mapping[str, Any]] = None) -> NavigationConfig:
        config = self.configure(preset_options(mode, overrides))
        _NAV_LOGGER.info("Navigation mode set to %s (fallback=%s)", config.mode, config.fallback)
        return config


def load_navigation_config(path: Path, *, env: Optional[Mapping[str, str]] = None) -> NavigationConfig:
    """Build a config from a JSON file plus the ``SPATIAL_NAV_MODE`` override.

    Missing or unparsable files fall back to defaults; a file that parses but holds
    invalid options raises ``NavigationConfigError``.
    """

    data: Any = {}
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _NAV_LOGGER.debug("Navigation config %s not found; using defaults", path)
    except OSError as exc:
        _NAV_LOGGER.warning("Unable to read navigation config %s: %s", path, exc)
    else:
        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            _NAV_LOGGER.warning("Ignoring malformed navigation config %s: %s", path, exc)
            data = {}
    if not isinstance(data, dict):
        _NAV_LOGGER.warning("Navigation config %s is not a JSON object; using defaults", path)
        data = {}

    context = NavigationContext()
    if data:
        context.configure(data)

    environ = os.environ if env is None else env
    env_mode = (environ.get(MODE_ENV_VAR) or "").strip().lower()
    if env_mode:
        if env_mode in MODES:
            context.configure(mode=env_mode)
        else:
            _NAV_LOGGER.warning("Ignoring %s=%r: must be one of %s", MODE_ENV_VAR, env_mode, ", ".join(MODES))
    return context.get_config()
