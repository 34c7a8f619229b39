"""Sequential focus helpers for lists of focus targets (menus, rows, forms)."""
from __future__ import annotations

import logging
from typing import Any, Sequence

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)


def focus_item(item: Any) -> bool:
    """Focus ``item``, logging instead of raising when the host refuses."""

    if item is None:
        return False
    try:
        item.focus()
    except Exception as exc:
        _NAV_LOGGER.warning("Failed to focus %r: %s", item, exc)
        return False
    return True


def focus_first(items: Sequence[Any]) -> bool:
    if not items:
        return False
    return focus_item(items[0])


def focus_last(items: Sequence[Any]) -> bool:
    if not items:
        return False
    return focus_item(items[-1])


def focus_relative(items: Sequence[Any], current: Any, offset: int) -> bool:
    """Move ``offset`` steps from ``current``, clamped to the ends of ``items``.

    Returns False when ``current`` is not in ``items`` or the clamped index does not
    change.
    """

    if not items:
        return False
    try:
        index = next(i for i, item in enumerate(items) if item is current)
    except StopIteration:
        return False
    target = min(max(index + offset, 0), len(items) - 1)
    if target == index:
        return False
    return focus_item(items[target])


def focus_next(items: Sequence[Any], current: Any) -> bool:
    return focus_relative(items, current, 1)


def focus_previous(items: Sequence[Any], current: Any) -> bool:
    return focus_relative(items, current, -1)
