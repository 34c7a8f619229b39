from __future__ import annotations

import itertools

import pytest

from spatial_navigation.direction import Direction
from spatial_navigation.focusable import BoxItem
from spatial_navigation.geometry import Rect
from spatial_navigation.nav_config import DEFAULT_CONFIG, NavigationConfig
from spatial_navigation.scoring import (
    entry_exit_points,
    perpendicular_overlap,
    score_directional,
    score_geometric,
    score_rects_directional,
    score_rects_geometric,
)

ORIGIN = Rect.from_edges(0, 0, 100, 50)


def _box(left: float, top: float, right: float, bottom: float) -> BoxItem:
    return BoxItem("box", Rect.from_edges(left, top, right, bottom), kind="button")


def test_entry_exit_points_clamp_each_center_into_overlap() -> None:
    points = entry_exit_points(ORIGIN, Rect.from_edges(120, 30, 220, 80), "right")

    assert points.exit == (100, 30)
    assert points.entry == (120, 50)


def test_entry_exit_points_vertical() -> None:
    origin = Rect.from_edges(0, 100, 100, 150)

    points = entry_exit_points(origin, Rect.from_edges(40, 0, 140, 50), Direction.UP)

    assert points.exit == (50, 100)
    assert points.entry == (90, 50)


def test_entry_exit_points_use_nearest_edges_when_disjoint() -> None:
    points = entry_exit_points(ORIGIN, Rect.from_edges(120, 80, 220, 130), "right")

    assert points.exit == (100, 50)
    assert points.entry == (120, 80)


def test_perpendicular_overlap() -> None:
    assert perpendicular_overlap(ORIGIN, Rect.from_edges(120, 40, 220, 90), Direction.RIGHT) == 10
    assert perpendicular_overlap(ORIGIN, Rect.from_edges(120, 60, 220, 90), Direction.RIGHT) == 0
    assert perpendicular_overlap(ORIGIN, Rect.from_edges(20, 80, 60, 120), Direction.DOWN) == 40


def test_geometric_score_values() -> None:
    aligned = _box(120, 0, 220, 50)
    adjacent = _box(100, 0, 200, 50)
    offset = _box(120, 80, 220, 130)
    origin = _box(0, 0, 100, 50)

    assert score_geometric(origin, aligned, "right") == pytest.approx(19.0)
    assert score_geometric(origin, adjacent, "right") == pytest.approx(-1.0)
    # hypot(20, 30) + 30 * 30, no overlap
    assert score_geometric(origin, offset, "right") == pytest.approx(936.0555, rel=1e-5)


def test_geometric_score_keeps_drift_penalty_for_slight_overlap() -> None:
    origin = _box(0, 0, 100, 50)
    tall = _box(120, 40, 220, 400)
    aligned = _box(150, 0, 250, 50)

    # hypot(20, 10) + 10 * 30 - 10 / 50
    assert score_geometric(origin, tall, "right") == pytest.approx(322.1607, rel=1e-5)
    assert score_geometric(origin, aligned, "right") == pytest.approx(49.0)


def test_geometric_score_weighs_vertical_drift_lightly() -> None:
    config = DEFAULT_CONFIG
    origin = Rect.from_edges(0, 0, 100, 50)
    below_shifted = Rect.from_edges(130, 80, 230, 130)

    down = score_rects_geometric(origin, below_shifted, Direction.DOWN, config)

    # hypot(30, 30) + 30 * 2
    assert down == pytest.approx(102.4264, rel=1e-5)


def test_directional_score_values() -> None:
    origin = _box(0, 0, 100, 50)

    assert score_directional(origin, _box(120, 0, 220, 50), "right") == pytest.approx(10.0)
    assert score_directional(origin, _box(120, 40, 220, 90), "right") == pytest.approx(39.0)
    assert score_directional(origin, _box(100, 0, 200, 50), "right") == 0


def test_directional_bonuses_can_be_disabled() -> None:
    config = NavigationConfig(mode="directional", overlap_bonus=False, row_column_bias=False)

    score = score_directional(_box(0, 0, 100, 50), _box(120, 0, 220, 50), "right", config)

    assert score == pytest.approx(20.0)


def _layout() -> list[Rect]:
    rects = []
    for index, (x, y) in enumerate(itertools.product((-300, 0, 150, 410), (-120, 0, 90, 260))):
        width = 60 + (index % 3) * 35
        height = 40 + (index % 4) * 15
        rects.append(Rect.from_xywh(x, y, width, height))
    return rects


@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize("scorer", [score_rects_geometric, score_rects_directional])
@pytest.mark.parametrize("shift", [(37.5, -12.0), (-640.0, 1080.0)])
def test_scores_are_translation_invariant(direction, scorer, shift) -> None:
    config = NavigationConfig(mode="directional")
    rects = _layout()
    for origin, candidate in itertools.permutations(rects[:8], 2):
        moved_origin = origin.translated(*shift)
        moved_candidate = candidate.translated(*shift)
        assert scorer(moved_origin, moved_candidate, direction, config) == pytest.approx(
            scorer(origin, candidate, direction, config), abs=1e-6
        )


@pytest.mark.parametrize("direction", list(Direction))
def test_directional_scores_are_never_negative(direction) -> None:
    config = NavigationConfig(mode="directional", overlap_weight=500, alignment_weight=500)
    rects = _layout()
    for origin, candidate in itertools.permutations(rects, 2):
        assert score_rects_directional(origin, candidate, direction, config) >= 0
