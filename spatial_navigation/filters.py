"""Direction filters: which candidates count as lying "toward" a direction."""
from __future__ import annotations

import math
from typing import Any, List, Sequence, Tuple

from spatial_navigation.direction import Direction
from spatial_navigation.focusable import get_rect
from spatial_navigation.geometry import Rect


def is_past_center(origin_rect: Rect, candidate_rect: Rect, direction: Direction) -> bool:
    """Half-plane test: candidate center strictly beyond the origin center."""

    if direction is Direction.LEFT:
        return candidate_rect.center_x < origin_rect.center_x
    if direction is Direction.RIGHT:
        return candidate_rect.center_x > origin_rect.center_x
    if direction is Direction.UP:
        return candidate_rect.center_y < origin_rect.center_y
    return candidate_rect.center_y > origin_rect.center_y


def cone_apex(origin_rect: Rect, direction: Direction) -> Tuple[float, float]:
    """Midpoint of the origin edge facing ``direction``."""

    if direction is Direction.LEFT:
        return origin_rect.left, origin_rect.center_y
    if direction is Direction.RIGHT:
        return origin_rect.right, origin_rect.center_y
    if direction is Direction.UP:
        return origin_rect.center_x, origin_rect.top
    return origin_rect.center_x, origin_rect.bottom


def cone_angle_to(origin_rect: Rect, candidate_rect: Rect, direction: Direction) -> float | None:
    """Angle in degrees off the primary axis, or None when the candidate is behind the apex."""

    apex_x, apex_y = cone_apex(origin_rect, direction)
    dx = candidate_rect.center_x - apex_x
    dy = candidate_rect.center_y - apex_y
    if direction is Direction.LEFT:
        ahead = dx < 0
    elif direction is Direction.RIGHT:
        ahead = dx > 0
    elif direction is Direction.UP:
        ahead = dy < 0
    else:
        ahead = dy > 0
    if not ahead:
        return None
    if direction.is_horizontal:
        return math.degrees(abs(math.atan2(dy, abs(dx))))
    return math.degrees(abs(math.atan2(dx, abs(dy))))


def filter_geometric(origin: Any, candidates: Sequence[Any], direction: Direction | str) -> List[Any]:
    direction = Direction.parse(direction)
    origin_rect = get_rect(origin)
    return [
        candidate
        for candidate in candidates
        if candidate is not origin and is_past_center(origin_rect, get_rect(candidate), direction)
    ]


def filter_cone(
    origin: Any,
    candidates: Sequence[Any],
    direction: Direction | str,
    cone_angle: float = 30.0,
) -> List[Any]:
    """Keep candidates whose center falls inside a symmetric cone of ``cone_angle`` degrees.

    The apex sits on the origin's leading edge rather than its center, so a wide
    origin does not push near neighbours outside the cone.
    """

    direction = Direction.parse(direction)
    origin_rect = get_rect(origin)
    filtered: List[Any] = []
    for candidate in candidates:
        if candidate is origin:
            continue
        angle = cone_angle_to(origin_rect, get_rect(candidate), direction)
        if angle is not None and angle <= cone_angle:
            filtered.append(candidate)
    return filtered
