"""Rectangle model and layout diagnostics for spatial navigation."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)

MIN_GAP = 4.0
_PRECISION = 2


@dataclass(frozen=True)
class Rect:
    """Screen-space rectangle with derived size and center."""

    top: float
    right: float
    bottom: float
    left: float
    width: float
    height: float
    center_x: float
    center_y: float

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        left_f = float(left)
        top_f = float(top)
        right_f = max(left_f, float(right))
        bottom_f = max(top_f, float(bottom))
        width = right_f - left_f
        height = bottom_f - top_f
        return cls(
            top=top_f,
            right=right_f,
            bottom=bottom_f,
            left=left_f,
            width=width,
            height=height,
            center_x=left_f + width / 2.0,
            center_y=top_f + height / 2.0,
        )

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls.from_edges(x, y, float(x) + max(0.0, float(width)), float(y) + max(0.0, float(height)))

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect.from_edges(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0


ZERO_RECT = Rect(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


def normalize_rect(raw: Any) -> Rect:
    """Coerce a host rectangle into a ``Rect`` rounded to two decimals.

    Accepts a ``Rect``, a ``(left, top, right, bottom)`` sequence, or any object or
    mapping exposing ``left/top/right/bottom`` (width/height are derived). Raises
    ``TypeError``/``ValueError`` for unusable input; callers that must not raise go
    through :func:`spatial_navigation.focusable.measure`.
    """

    if isinstance(raw, Rect):
        edges = raw.as_tuple()
    elif isinstance(raw, dict):
        edges = (raw["left"], raw["top"], raw["right"], raw["bottom"])
    elif isinstance(raw, (tuple, list)):
        if len(raw) != 4:
            raise ValueError(f"expected 4 rectangle edges, got {len(raw)}")
        edges = tuple(raw)
    else:
        edges = (raw.left, raw.top, raw.right, raw.bottom)
    values = [round(float(value), _PRECISION) for value in edges]
    if any(not math.isfinite(value) for value in values):
        raise ValueError(f"non-finite rectangle edges: {values}")
    left, top, right, bottom = values
    return Rect.from_edges(left, top, right, bottom)


def get_gap(first: Rect, second: Rect, axis: str) -> float:
    """Return the gap between two rectangles along ``axis``; negative when they overlap."""

    if axis == "horizontal":
        if first.right <= second.left:
            return second.left - first.right
        if second.right <= first.left:
            return first.left - second.right
        return -min(first.right - second.left, second.right - first.left)
    if axis == "vertical":
        if first.bottom <= second.top:
            return second.top - first.bottom
        if second.bottom <= first.top:
            return first.top - second.bottom
        return -min(first.bottom - second.top, second.bottom - first.top)
    raise ValueError(f"Unknown axis '{axis}'")


def _contains(outer: Rect, inner: Rect) -> bool:
    return (
        outer.left <= inner.left
        and outer.top <= inner.top
        and outer.right >= inner.right
        and outer.bottom >= inner.bottom
    )


@dataclass(frozen=True)
class SpacingViolation:
    first: Any
    second: Any
    gap: float
    required: float


@dataclass
class SpacingReport:
    violations: List[SpacingViolation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations


def validate_spacing(
    entries: Sequence[Tuple[Any, Rect]],
    *,
    min_gap: float = MIN_GAP,
) -> SpacingReport:
    """Flag adjacent focus targets packed tighter than ``min_gap`` pixels.

    Two rectangles are adjacent when they overlap on one axis and sit within
    ``min_gap`` of each other on the other. Nested rectangles are skipped.
    """

    report = SpacingReport()
    for index, (first_key, first) in enumerate(entries):
        for second_key, second in entries[index + 1 :]:
            if _contains(first, second) or _contains(second, first):
                continue
            h_gap = get_gap(first, second, "horizontal")
            v_gap = get_gap(first, second, "vertical")
            adjacent = (h_gap < min_gap and v_gap < 0) or (v_gap < min_gap and h_gap < 0)
            if not adjacent:
                continue
            gap = min(
                h_gap if h_gap >= 0 else math.inf,
                v_gap if v_gap >= 0 else math.inf,
            )
            if gap < min_gap and math.isfinite(gap):
                report.violations.append(
                    SpacingViolation(first=first_key, second=second_key, gap=gap, required=min_gap)
                )
    if report.violations:
        _NAV_LOGGER.debug("Spacing check found %d violation(s) below %.1fpx", len(report.violations), min_gap)
    return report


def is_in_viewport(rect: Rect, viewport: Rect, *, margin: float = 0.0) -> bool:
    """Return True when ``rect`` intersects ``viewport`` grown by ``margin``."""

    return (
        rect.top < viewport.bottom + margin
        and rect.bottom > viewport.top - margin
        and rect.left < viewport.right + margin
        and rect.right > viewport.left - margin
    )
