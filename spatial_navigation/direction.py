from __future__ import annotations

import enum
from typing import Any


class InvalidNavigationArgument(ValueError):
    """Raised when a navigation request is missing its origin or direction."""


class Direction(enum.Enum):
    """Cardinal directions for focus moves."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        if isinstance(value, Direction):
            return value
        if not value:
            raise InvalidNavigationArgument("direction is required")
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidNavigationArgument(f"Invalid direction {value!r}: must be left, right, up, or down")

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}
