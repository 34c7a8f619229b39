from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from spatial_navigation.direction import Direction
from spatial_navigation.input_bindings import (
    DEFAULT_CONFIG,
    KEYS,
    BindingConfig,
    ControlScheme,
    RemoteKeyDispatcher,
    direction_for_key,
    is_navigation_key,
)


class _StubNavigator:
    def __init__(self, result: bool = True) -> None:
        self.calls = []
        self.result = result

    def navigate(self, direction):
        self.calls.append(direction)
        return self.result


def test_remote_key_codes() -> None:
    assert KEYS == {"LEFT": 37, "UP": 38, "RIGHT": 39, "DOWN": 40, "ENTER": 13}
    assert direction_for_key(37) is Direction.LEFT
    assert direction_for_key(40) is Direction.DOWN
    assert is_navigation_key(39)
    assert not is_navigation_key(KEYS["ENTER"])
    assert direction_for_key(13) is None


def test_load_creates_default_file(tmp_path: Path) -> None:
    path = tmp_path / "keybindings.json"

    config = BindingConfig.load(path)

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG
    assert config.active_scheme == "tv_remote"
    assert config.get_scheme().key_map()[38] is Direction.UP


def test_load_rejects_undefined_active_scheme(tmp_path: Path) -> None:
    path = tmp_path / "keybindings.json"
    path.write_text(json.dumps({"active_scheme": "gamepad", "schemes": {}}), encoding="utf-8")

    with pytest.raises(ValueError):
        BindingConfig.load(path)


def test_get_scheme_unknown_name() -> None:
    with pytest.raises(ValueError):
        BindingConfig.default().get_scheme("keyboard")


def test_key_map_skips_invalid_entries(caplog: pytest.LogCaptureFixture) -> None:
    scheme = ControlScheme(
        name="custom",
        device_type="keyboard",
        display_name="Custom",
        bindings={"left": ["a", "  "], "jump": ["space"], "right": ["d"]},
    )

    with caplog.at_level(logging.WARNING, logger="TVPortal.SpatialNav"):
        mapping = scheme.key_map()

    assert mapping == {"a": Direction.LEFT, "d": Direction.RIGHT}
    messages = [record.getMessage() for record in caplog.records]
    assert any("unknown binding action 'jump'" in message for message in messages)
    assert any("invalid binding ''" in message for message in messages)


def test_dispatcher_routes_navigation_keys() -> None:
    navigator = _StubNavigator()
    dispatcher = RemoteKeyDispatcher(navigator)

    assert dispatcher.handle_key(39) is True
    assert dispatcher.handle_key("Up") is True
    assert dispatcher.handle_key(KEYS["ENTER"]) is False
    assert navigator.calls == [Direction.RIGHT, Direction.UP]


def test_dispatcher_reports_blocked_moves() -> None:
    navigator = _StubNavigator(result=False)

    assert RemoteKeyDispatcher(navigator).handle_key(37) is False
    assert navigator.calls == [Direction.LEFT]


def test_dispatcher_switches_schemes(tmp_path: Path) -> None:
    path = tmp_path / "keybindings.json"
    payload = dict(DEFAULT_CONFIG)
    payload["schemes"] = dict(DEFAULT_CONFIG["schemes"])
    payload["schemes"]["wasd"] = {
        "device_type": "keyboard",
        "bindings": {"left": ["a"], "right": ["d"], "up": ["w"], "down": ["s"]},
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    navigator = _StubNavigator()
    dispatcher = RemoteKeyDispatcher(navigator, BindingConfig.load(path))

    assert dispatcher.direction_for("w") is None
    dispatcher.activate("wasd")

    assert dispatcher.direction_for("w") is Direction.UP
    assert dispatcher.direction_for(37) is None
    assert BindingConfig.load(path).get_scheme("wasd").display_name == "wasd"
