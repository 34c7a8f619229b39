"""Remote-control key schemes and dispatch of D-pad keys to the navigator."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from spatial_navigation.direction import Direction

if TYPE_CHECKING:
    from spatial_navigation.navigator import SpatialNavigator

LOGGER = logging.getLogger("TVPortal.SpatialNav")

KeyCode = Union[int, str]

KEYS = {
    "LEFT": 37,
    "UP": 38,
    "RIGHT": 39,
    "DOWN": 40,
    "ENTER": 13,
}

DEFAULT_CONFIG_PATH = Path(__file__).with_name("keybindings.json")

# Tizen remote codes plus the keyboard names Qt hosts report.
DEFAULT_CONFIG = {
    "active_scheme": "tv_remote",
    "schemes": {
        "tv_remote": {
            "device_type": "remote",
            "display_name": "TV remote (default)",
            "bindings": {
                "left": [KEYS["LEFT"], "Left"],
                "right": [KEYS["RIGHT"], "Right"],
                "up": [KEYS["UP"], "Up"],
                "down": [KEYS["DOWN"], "Down"],
            },
        }
    },
}

_NAVIGATION_CODES = {
    KEYS["LEFT"]: Direction.LEFT,
    KEYS["RIGHT"]: Direction.RIGHT,
    KEYS["UP"]: Direction.UP,
    KEYS["DOWN"]: Direction.DOWN,
}


def is_navigation_key(key_code: int) -> bool:
    return key_code in _NAVIGATION_CODES


def direction_for_key(key_code: int) -> Optional[Direction]:
    return _NAVIGATION_CODES.get(key_code)


@dataclass
class ControlScheme:
    """Container for a set of bindings and some metadata."""

    name: str
    device_type: str
    display_name: str
    bindings: Dict[str, List[KeyCode]]

    def key_map(self) -> Dict[KeyCode, Direction]:
        mapping: Dict[KeyCode, Direction] = {}
        for action, keys in self.bindings.items():
            try:
                direction = Direction(action)
            except ValueError:
                LOGGER.warning("Skipping unknown binding action '%s' in scheme '%s'", action, self.name)
                continue
            for key in keys:
                if isinstance(key, str):
                    key = key.strip()
                    if not key:
                        LOGGER.warning("Skipping invalid binding '' for action '%s'", action)
                        continue
                mapping[key] = direction
        return mapping


@dataclass
class BindingConfig:
    """Representation of the key binding file contents."""

    schemes: Dict[str, ControlScheme]
    active_scheme: str
    source_path: Path

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "BindingConfig":
        """Load config from disk, creating the default file if missing."""

        path = path or DEFAULT_CONFIG_PATH
        if not path.exists():
            path.write_text(json.dumps(DEFAULT_CONFIG, indent=2), encoding="utf-8")

        payload = json.loads(path.read_text(encoding="utf-8"))
        schemes = {
            name: ControlScheme(
                name=name,
                device_type=spec.get("device_type", "remote"),
                display_name=spec.get("display_name", name),
                bindings={
                    action: list(inputs or [])
                    for action, inputs in (spec.get("bindings") or {}).items()
                },
            )
            for name, spec in payload.get("schemes", {}).items()
        }

        active = payload.get("active_scheme")
        if active not in schemes:
            raise ValueError(
                f"Active scheme '{active}' is not defined in keybindings file {path}"
            )

        return cls(schemes=schemes, active_scheme=active, source_path=path)

    @classmethod
    def default(cls) -> "BindingConfig":
        spec = DEFAULT_CONFIG["schemes"]["tv_remote"]
        scheme = ControlScheme(
            name="tv_remote",
            device_type=spec["device_type"],
            display_name=spec["display_name"],
            bindings={action: list(keys) for action, keys in spec["bindings"].items()},
        )
        return cls(schemes={"tv_remote": scheme}, active_scheme="tv_remote", source_path=DEFAULT_CONFIG_PATH)

    def get_scheme(self, name: Optional[str] = None) -> ControlScheme:
        """Return the requested scheme or the currently active one."""

        scheme_name = name or self.active_scheme
        try:
            return self.schemes[scheme_name]
        except KeyError as exc:
            raise ValueError(f"Unknown control scheme '{scheme_name}'") from exc


class RemoteKeyDispatcher:
    """Routes key presses from the active scheme to ``SpatialNavigator.navigate``."""

    def __init__(self, navigator: "SpatialNavigator", config: Optional[BindingConfig] = None) -> None:
        self.navigator = navigator
        self.config = config or BindingConfig.default()
        self._key_map = self.config.get_scheme().key_map()

    def activate(self, scheme_name: Optional[str] = None) -> None:
        self._key_map = self.config.get_scheme(scheme_name).key_map()

    def direction_for(self, key: KeyCode) -> Optional[Direction]:
        return self._key_map.get(key)

    def handle_key(self, key: KeyCode) -> bool:
        """Return True when ``key`` is a D-pad key and focus moved."""

        direction = self.direction_for(key)
        if direction is None:
            return False
        moved = self.navigator.navigate(direction)
        LOGGER.debug("Key %r -> %s (moved=%s)", key, direction.value, moved)
        return moved
