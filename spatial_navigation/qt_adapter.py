"""PyQt6 host adapter: widgets as focus targets, arrow keys routed to the navigator."""
from __future__ import annotations

import logging
import weakref
from typing import List, Optional

from PyQt6.QtCore import QEvent, QObject, QPoint, Qt
from PyQt6.QtWidgets import QApplication, QWidget

from spatial_navigation.geometry import Rect
from spatial_navigation.input_bindings import BindingConfig, RemoteKeyDispatcher
from spatial_navigation.navigator import SpatialNavigator

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)

_QT_KEY_NAMES = {
    Qt.Key.Key_Left.value: "Left",
    Qt.Key.Key_Right.value: "Right",
    Qt.Key.Key_Up.value: "Up",
    Qt.Key.Key_Down.value: "Down",
}


class QtFocusableItem:
    """Focus target backed by a ``QWidget``; geometry is reported in global coordinates."""

    def __init__(self, widget: QWidget) -> None:
        self._widget_ref = weakref.ref(widget)

    @property
    def widget(self) -> Optional[QWidget]:
        return self._widget_ref()

    def __repr__(self) -> str:
        widget = self.widget
        if widget is None:
            return "QtFocusableItem(<deleted>)"
        name = widget.objectName() or type(widget).__name__
        return f"QtFocusableItem({name})"

    def rect(self) -> Rect:
        origin = self.widget.mapToGlobal(QPoint(0, 0))
        return Rect.from_xywh(origin.x(), origin.y(), self.widget.width(), self.widget.height())

    def is_visible(self) -> bool:
        widget = self.widget
        return widget is not None and widget.isVisible()

    def is_focusable(self) -> bool:
        widget = self.widget
        if widget is None or not (widget.isVisible() and widget.isEnabled()):
            return False
        policy = widget.focusPolicy().value
        return bool(policy & Qt.FocusPolicy.TabFocus.value)

    def focus(self) -> None:
        self.widget.setFocus(Qt.FocusReason.OtherFocusReason)


class QtFocusHost:
    """``FocusHost`` over the widget tree below ``root_widget``."""

    def __init__(self, root_widget: QWidget) -> None:
        self.root_widget = root_widget
        # Wrappers hold their widget weakly, so entries go away with the widget.
        self._items: "weakref.WeakKeyDictionary[QWidget, QtFocusableItem]" = weakref.WeakKeyDictionary()

    def wrap(self, widget: QWidget) -> QtFocusableItem:
        item = self._items.get(widget)
        if item is None:
            item = QtFocusableItem(widget)
            self._items[widget] = item
        return item

    def active_item(self) -> Optional[QtFocusableItem]:
        widget = QApplication.focusWidget()
        if widget is None:
            return None
        if widget is not self.root_widget and not self.root_widget.isAncestorOf(widget):
            return None
        return self.wrap(widget)

    def root(self) -> QtFocusableItem:
        return self.wrap(self.root_widget)

    def is_root(self, item: object) -> bool:
        return isinstance(item, QtFocusableItem) and item.widget is self.root_widget

    def candidate_items(self, container: object = None) -> List[QtFocusableItem]:
        scope = container.widget if isinstance(container, QtFocusableItem) else self.root_widget
        if scope is None:
            return []
        return [self.wrap(widget) for widget in scope.findChildren(QWidget)]


class QtNavigationFilter(QObject):
    """Event filter that turns arrow key presses into spatial navigation."""

    def __init__(
        self,
        navigator: SpatialNavigator,
        bindings: Optional[BindingConfig] = None,
        parent: Optional[QObject] = None,
        *,
        scope: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.dispatcher = RemoteKeyDispatcher(navigator, bindings)
        self.scope = scope

    def _in_scope(self, watched: QObject) -> bool:
        if self.scope is None:
            return True
        if not isinstance(watched, QWidget):
            return False
        return watched is self.scope or self.scope.isAncestorOf(watched)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt override
        if event.type() != QEvent.Type.KeyPress or not self._in_scope(watched):
            return False
        key_name = _QT_KEY_NAMES.get(int(event.key()))
        if key_name is None:
            return False
        try:
            return self.dispatcher.handle_key(key_name)
        except Exception as exc:
            _NAV_LOGGER.warning("Spatial navigation failed for key %s: %s", key_name, exc)
            return False


def install_navigation(root_widget: QWidget, navigator: Optional[SpatialNavigator] = None) -> QtNavigationFilter:
    """Attach spatial navigation to ``root_widget`` and return the installed filter.

    The filter sits on the application so key presses reach it before the focused
    child widget consumes them; presses outside ``root_widget`` are ignored.
    """

    navigator = navigator or SpatialNavigator(QtFocusHost(root_widget))
    nav_filter = QtNavigationFilter(navigator, parent=root_widget, scope=root_widget)
    app = QApplication.instance()
    (app if app is not None else root_widget).installEventFilter(nav_filter)
    _NAV_LOGGER.debug("Spatial navigation installed on %s", root_widget.objectName() or type(root_widget).__name__)
    return nav_filter
