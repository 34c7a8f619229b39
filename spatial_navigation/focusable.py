"""Focus target contract, fault-isolated measurement and an in-memory host."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Protocol, runtime_checkable

from spatial_navigation.geometry import ZERO_RECT, Rect, normalize_rect

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)

# Naturally interactive kinds; "link" additionally needs a target.
FOCUSABLE_KINDS = frozenset({"link", "button", "input", "select", "textarea"})


@runtime_checkable
class FocusableItem(Protocol):
    """What the engine needs from a host element."""

    def rect(self) -> Any:
        ...

    def is_visible(self) -> bool:
        ...

    def is_focusable(self) -> bool:
        ...

    def focus(self) -> None:
        ...


class FocusHost(Protocol):
    """Host surface the navigator reads focus state from and enumerates items in."""

    def active_item(self) -> Optional[Any]:
        ...

    def root(self) -> Any:
        ...

    def is_root(self, item: Any) -> bool:
        ...

    def candidate_items(self, container: Any = None) -> Iterable[Any]:
        ...


@dataclass(frozen=True)
class RectReading:
    rect: Rect
    ok: bool


_DEGRADED = RectReading(ZERO_RECT, False)


def measure(item: Any) -> RectReading:
    """Read an item's rectangle; any failure yields the zero rect with ``ok=False``."""

    if item is None:
        return _DEGRADED
    reader = getattr(item, "rect", None)
    if not callable(reader):
        return _DEGRADED
    try:
        return RectReading(normalize_rect(reader()), True)
    except Exception as exc:
        _NAV_LOGGER.debug("Geometry read failed for %r: %s", item, exc)
        return _DEGRADED


def get_rect(item: Any) -> Rect:
    return measure(item).rect


def _ask(item: Any, name: str) -> bool:
    probe = getattr(item, name, None)
    if not callable(probe):
        return False
    try:
        return bool(probe())
    except Exception as exc:
        _NAV_LOGGER.debug("%s() failed for %r: %s", name, item, exc)
        return False


def is_visible(item: Any) -> bool:
    if item is None or not _ask(item, "is_visible"):
        return False
    rect = get_rect(item)
    return rect.width > 0 and rect.height > 0


def is_focusable(item: Any) -> bool:
    return is_visible(item) and _ask(item, "is_focusable")


@dataclass(eq=False)
class BoxItem:
    """Synthetic focus target with a fixed rectangle.

    Mirrors the attributes a browser element exposes to the focus rules: an element
    kind, an optional explicit tab index, a disabled flag, a link target and the
    computed ``display``/``visibility`` styles.
    """

    item_id: str
    bounds: Rect
    kind: str = "div"
    tab_index: Optional[int] = None
    disabled: bool = False
    href: Optional[str] = None
    display: str = "block"
    visibility: str = "visible"
    parent: Optional["BoxItem"] = None
    on_focus: Optional[Callable[["BoxItem"], None]] = field(default=None, repr=False)

    def rect(self) -> Rect:
        return self.bounds

    def is_visible(self) -> bool:
        if self.display == "none" or self.visibility == "hidden":
            return False
        return self.bounds.width > 0 and self.bounds.height > 0

    def is_focusable(self) -> bool:
        if not self.is_visible():
            return False
        if self.tab_index is not None and self.tab_index >= 0:
            return True
        if self.kind not in FOCUSABLE_KINDS:
            return False
        if self.kind == "link":
            return bool(self.href)
        return not self.disabled

    def focus(self) -> None:
        if self.on_focus is not None:
            self.on_focus(self)

    def is_descendant_of(self, container: "BoxItem") -> bool:
        node = self.parent
        while node is not None:
            if node is container:
                return True
            node = node.parent
        return False


class BoxHost:
    """In-memory ``FocusHost`` over ``BoxItem`` instances kept in document order."""

    def __init__(self, items: Optional[Iterable[BoxItem]] = None) -> None:
        self._root = BoxItem("root", Rect.from_edges(0, 0, 1920, 1080), kind="body")
        self._items: List[BoxItem] = []
        self._active: Optional[BoxItem] = None
        for item in items or ():
            self.add(item)

    def add(self, item: BoxItem) -> BoxItem:
        if item.parent is None:
            item.parent = self._root
        item.on_focus = self._set_active
        self._items.append(item)
        return item

    def _set_active(self, item: BoxItem) -> None:
        self._active = item

    @property
    def items(self) -> List[BoxItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[BoxItem]:
        return next((item for item in self._items if item.item_id == item_id), None)

    def active_item(self) -> Optional[BoxItem]:
        return self._active

    def root(self) -> BoxItem:
        return self._root

    def is_root(self, item: Any) -> bool:
        return item is self._root

    def blur(self) -> None:
        self._active = None

    def candidate_items(self, container: Any = None) -> List[BoxItem]:
        if container is None or container is self._root:
            return list(self._items)
        return [item for item in self._items if item.is_descendant_of(container)]
