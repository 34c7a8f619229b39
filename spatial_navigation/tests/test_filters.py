from __future__ import annotations

import itertools

import pytest

from spatial_navigation.direction import Direction, InvalidNavigationArgument
from spatial_navigation.filters import cone_angle_to, cone_apex, filter_cone, filter_geometric
from spatial_navigation.focusable import BoxItem
from spatial_navigation.geometry import Rect


def _box(item_id: str, left: float, top: float, right: float, bottom: float) -> BoxItem:
    return BoxItem(item_id, Rect.from_edges(left, top, right, bottom), kind="button")


def _grid() -> list[BoxItem]:
    items = []
    for row, col in itertools.product(range(4), range(4)):
        left = col * 130 + (row % 2) * 7
        top = row * 80 + (col % 3) * 5
        items.append(_box(f"r{row}c{col}", left, top, left + 100, top + 60))
    return items


def test_geometric_filter_uses_strict_center_half_plane() -> None:
    origin = _box("o", 100, 100, 200, 150)
    right = _box("right", 250, 100, 350, 150)
    same_column = _box("same-column", 120, 300, 180, 350)
    left = _box("left", 0, 100, 80, 150)

    result = filter_geometric(origin, [origin, right, same_column, left], "right")

    assert result == [right]
    assert filter_geometric(origin, [origin, right, same_column, left], Direction.DOWN) == [same_column]


@pytest.mark.parametrize("direction", list(Direction))
def test_geometric_filter_soundness_over_grid(direction: Direction) -> None:
    items = _grid()
    for origin in items:
        result = filter_geometric(origin, items, direction)
        assert origin not in result
        for candidate in items:
            if candidate is origin:
                continue
            o, c = origin.bounds, candidate.bounds
            expected = {
                Direction.LEFT: c.center_x < o.center_x,
                Direction.RIGHT: c.center_x > o.center_x,
                Direction.UP: c.center_y < o.center_y,
                Direction.DOWN: c.center_y > o.center_y,
            }[direction]
            assert (candidate in result) is expected


def test_cone_apex_sits_on_leading_edge() -> None:
    rect = Rect.from_edges(0, 0, 100, 50)

    assert cone_apex(rect, Direction.RIGHT) == (100, 25)
    assert cone_apex(rect, Direction.LEFT) == (0, 25)
    assert cone_apex(rect, Direction.UP) == (50, 0)
    assert cone_apex(rect, Direction.DOWN) == (50, 50)


def test_cone_filter_keeps_candidates_inside_angle() -> None:
    origin = _box("o", 0, 0, 100, 50)
    inside = _box("inside", 150, 10, 250, 110)  # center (200, 60): ~19 degrees off axis
    outside = _box("outside", 150, 50, 250, 150)  # center (200, 100): ~37 degrees
    behind_apex = _box("behind", 40, 0, 140, 50)  # center x 90 is left of the apex

    assert filter_cone(origin, [inside, outside, behind_apex], "right", 30) == [inside]
    assert filter_cone(origin, [inside, outside, behind_apex], "right", 45) == [inside, outside]


def test_cone_filter_excludes_origin_and_wrong_side() -> None:
    origin = _box("o", 200, 200, 300, 250)
    above = _box("above", 200, 0, 300, 50)
    below = _box("below", 200, 400, 300, 450)

    assert filter_cone(origin, [origin, above, below], "up") == [above]
    assert filter_cone(origin, [origin, above, below], "down") == [below]
    assert filter_cone(origin, [origin, above, below], "left") == []


@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize("cone", [15.0, 30.0, 60.0])
def test_cone_filter_soundness_over_grid(direction: Direction, cone: float) -> None:
    items = _grid()
    for origin in items:
        for candidate in filter_cone(origin, items, direction, cone):
            assert candidate is not origin
            angle = cone_angle_to(origin.bounds, candidate.bounds, direction)
            assert angle is not None
            assert angle <= cone


def test_filters_reject_garbled_direction() -> None:
    origin = _box("o", 0, 0, 10, 10)

    with pytest.raises(InvalidNavigationArgument):
        filter_geometric(origin, [], "diagonal")
    with pytest.raises(InvalidNavigationArgument):
        filter_cone(origin, [], None)  # type: ignore[arg-type]
