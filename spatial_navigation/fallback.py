"""Fallback selection when the directional cone finds nothing."""
from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from spatial_navigation.direction import Direction
from spatial_navigation.focusable import get_rect
from spatial_navigation.geometry import Rect

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)


def find_nearest_candidate(origin: Any, candidates: Sequence[Any]) -> Optional[Any]:
    """Closest candidate by center-to-center distance, ignoring direction."""

    origin_rect = get_rect(origin)
    nearest = None
    best = math.inf
    for candidate in candidates:
        if candidate is origin:
            continue
        rect = get_rect(candidate)
        distance = math.hypot(rect.center_x - origin_rect.center_x, rect.center_y - origin_rect.center_y)
        if distance < best:
            best = distance
            nearest = candidate
    return nearest


def _wrap_score(origin_rect: Rect, rect: Rect, direction: Direction) -> Optional[float]:
    # Moving left wraps to the far right of the row, and so on.
    if direction is Direction.LEFT:
        if rect.left <= origin_rect.left:
            return None
        return -rect.left + abs(rect.center_y - origin_rect.center_y)
    if direction is Direction.RIGHT:
        if rect.right >= origin_rect.right:
            return None
        return rect.left + abs(rect.center_y - origin_rect.center_y)
    if direction is Direction.UP:
        if rect.top <= origin_rect.top:
            return None
        return -rect.top + abs(rect.center_x - origin_rect.center_x)
    if rect.bottom >= origin_rect.bottom:
        return None
    return rect.top + abs(rect.center_x - origin_rect.center_x)


def find_wrap_candidate(origin: Any, candidates: Sequence[Any], direction: Direction | str) -> Optional[Any]:
    direction = Direction.parse(direction)
    origin_rect = get_rect(origin)
    best = None
    best_score = math.inf
    for candidate in candidates:
        if candidate is origin:
            continue
        score = _wrap_score(origin_rect, get_rect(candidate), direction)
        if score is not None and score < best_score:
            best_score = score
            best = candidate
    return best


def apply_fallback(
    origin: Any,
    candidates: Sequence[Any],
    direction: Direction | str,
    fallback: str = "none",
) -> Optional[Any]:
    if fallback == "nearest":
        result = find_nearest_candidate(origin, candidates)
    elif fallback == "wrap":
        result = find_wrap_candidate(origin, candidates, direction)
    else:
        return None
    _NAV_LOGGER.debug("Fallback '%s' resolved %r", fallback, result)
    return result
