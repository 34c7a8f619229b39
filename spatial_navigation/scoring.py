"""Distance scorers for the two navigation modes. Lower scores win."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from spatial_navigation.direction import Direction
from spatial_navigation.focusable import get_rect
from spatial_navigation.geometry import Rect
from spatial_navigation.nav_config import DEFAULT_CONFIG, NavigationConfig

Point = Tuple[float, float]


@dataclass(frozen=True)
class EntryExit:
    exit: Point
    entry: Point


def _perpendicular_span(rect: Rect, direction: Direction) -> Tuple[float, float]:
    if direction.is_horizontal:
        return rect.top, rect.bottom
    return rect.left, rect.right


def perpendicular_overlap(origin_rect: Rect, candidate_rect: Rect, direction: Direction) -> float:
    """Length shared by both rectangles on the axis perpendicular to ``direction``."""

    origin_low, origin_high = _perpendicular_span(origin_rect, direction)
    candidate_low, candidate_high = _perpendicular_span(candidate_rect, direction)
    return max(0.0, min(origin_high, candidate_high) - max(origin_low, candidate_low))


def _edge_pair(origin_rect: Rect, candidate_rect: Rect, direction: Direction) -> Tuple[float, float]:
    """Origin leading edge and candidate trailing edge on the movement axis."""

    if direction is Direction.LEFT:
        return origin_rect.left, candidate_rect.right
    if direction is Direction.RIGHT:
        return origin_rect.right, candidate_rect.left
    if direction is Direction.UP:
        return origin_rect.top, candidate_rect.bottom
    return origin_rect.bottom, candidate_rect.top


def entry_exit_points(origin_rect: Rect, candidate_rect: Rect, direction: Direction | str) -> EntryExit:
    """Closest pair of points used by the geometric score.

    On the movement axis the points sit on the facing edges. On the perpendicular
    axis, disjoint rectangles use their nearest edges; overlapping rectangles each
    clamp their own center into the overlapping span.
    """

    direction = Direction.parse(direction)
    exit_primary, entry_primary = _edge_pair(origin_rect, candidate_rect, direction)
    origin_low, origin_high = _perpendicular_span(origin_rect, direction)
    candidate_low, candidate_high = _perpendicular_span(candidate_rect, direction)
    if origin_high <= candidate_low:
        exit_secondary, entry_secondary = origin_high, candidate_low
    elif origin_low >= candidate_high:
        exit_secondary, entry_secondary = origin_low, candidate_high
    else:
        span_low = max(origin_low, candidate_low)
        span_high = min(origin_high, candidate_high)
        origin_center = (origin_low + origin_high) / 2.0
        candidate_center = (candidate_low + candidate_high) / 2.0
        exit_secondary = min(max(origin_center, span_low), span_high)
        entry_secondary = min(max(candidate_center, span_low), span_high)

    if direction.is_horizontal:
        return EntryExit(exit=(exit_primary, exit_secondary), entry=(entry_primary, entry_secondary))
    return EntryExit(exit=(exit_secondary, exit_primary), entry=(entry_secondary, entry_primary))


def score_rects_geometric(
    origin_rect: Rect,
    candidate_rect: Rect,
    direction: Direction,
    config: NavigationConfig,
) -> float:
    points = entry_exit_points(origin_rect, candidate_rect, direction)
    dx = abs(points.entry[0] - points.exit[0])
    dy = abs(points.entry[1] - points.exit[1])
    euclidean = math.hypot(dx, dy)

    if direction.is_horizontal:
        orthogonal_bias = dy * config.orthogonal_weight_lr
        extent = origin_rect.height
    else:
        orthogonal_bias = dx * config.orthogonal_weight_ud
        extent = origin_rect.width

    alignment_bonus = 0.0
    if extent > 0:
        alignment_bonus = perpendicular_overlap(origin_rect, candidate_rect, direction) / extent
    return euclidean + orthogonal_bias - alignment_bonus


def score_rects_directional(
    origin_rect: Rect,
    candidate_rect: Rect,
    direction: Direction,
    config: NavigationConfig,
) -> float:
    exit_edge, entry_edge = _edge_pair(origin_rect, candidate_rect, direction)
    if direction in (Direction.RIGHT, Direction.DOWN):
        primary = entry_edge - exit_edge
    else:
        primary = exit_edge - entry_edge
    primary = max(0.0, primary)

    if direction.is_horizontal:
        center_diff = abs(candidate_rect.center_y - origin_rect.center_y)
        extent = origin_rect.height
    else:
        center_diff = abs(candidate_rect.center_x - origin_rect.center_x)
        extent = origin_rect.width

    overlap_bonus = 0.0
    if config.overlap_bonus and extent > 0:
        overlap = perpendicular_overlap(origin_rect, candidate_rect, direction)
        overlap_bonus = overlap / extent * config.overlap_weight

    alignment_bonus = 0.0
    half_extent = extent / 2.0
    if config.row_column_bias and center_diff < half_extent:
        alignment_bonus = config.alignment_weight * (1.0 - center_diff / half_extent)

    score = (
        primary * config.primary_weight
        + center_diff * config.secondary_weight
        - overlap_bonus
        - alignment_bonus
    )
    return max(0.0, score)


def score_geometric(
    origin: Any,
    candidate: Any,
    direction: Direction | str,
    config: Optional[NavigationConfig] = None,
) -> float:
    """Euclidean gap plus weighted orthogonal drift, minus a row/column overlap fraction."""

    return score_rects_geometric(
        get_rect(origin),
        get_rect(candidate),
        Direction.parse(direction),
        config or DEFAULT_CONFIG,
    )


def score_directional(
    origin: Any,
    candidate: Any,
    direction: Direction | str,
    config: Optional[NavigationConfig] = None,
) -> float:
    """Weighted primary/secondary distance with overlap and alignment bonuses, floored at 0."""

    return score_rects_directional(
        get_rect(origin),
        get_rect(candidate),
        Direction.parse(direction),
        config or DEFAULT_CONFIG,
    )
