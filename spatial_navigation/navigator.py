"""Navigation orchestrator: filter, score, fall back, focus."""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Mapping, Optional, Sequence

from spatial_navigation.direction import Direction, InvalidNavigationArgument
from spatial_navigation.fallback import apply_fallback
from spatial_navigation.filters import filter_cone, filter_geometric
from spatial_navigation.focus_helpers import focus_item
from spatial_navigation.focusable import FocusHost, is_focusable, measure
from spatial_navigation.nav_config import NavigationConfig, NavigationContext
from spatial_navigation.scoring import score_rects_directional, score_rects_geometric

_LOGGER_NAME = "TVPortal.SpatialNav"
_NAV_LOGGER = logging.getLogger(_LOGGER_NAME)

ScrollHook = Callable[[Any, Any, Direction], None]


class SpatialNavigator:
    """Moves focus between host items using on-screen geometry only.

    ``scroll_hook`` is called with ``(origin, target, direction)`` before returning a
    target when the config asks for ``scroll_behavior='scrollFirst'`` in directional
    mode. Scroll-before-focus itself is not implemented here; without a hook the
    option has no effect.
    """

    def __init__(
        self,
        host: FocusHost,
        context: Optional[NavigationContext] = None,
        *,
        scroll_hook: Optional[ScrollHook] = None,
    ) -> None:
        self.host = host
        self.context = context if context is not None else NavigationContext()
        self.scroll_hook = scroll_hook
        self._enabled = True

    # Configuration -------------------------------------------------------

    def configure(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> NavigationConfig:
        return self.context.configure(options, **kwargs)

    def get_config(self) -> NavigationConfig:
        return self.context.get_config()

    def reset_config(self) -> None:
        self.context.reset_config()

    def apply_mode(self, mode: str, overrides: Optional[Mapping[str, Any]] = None) -> NavigationConfig:
        return self.context.apply_mode(mode, overrides)

    def set_navigation_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    def is_navigation_enabled(self) -> bool:
        return self._enabled

    # Candidates ----------------------------------------------------------

    def _host_items(self, container: Any) -> List[Any]:
        scope = container if container is not None else self.host.root()
        try:
            return list(self.host.candidate_items(scope))
        except Exception as exc:
            _NAV_LOGGER.warning("Unable to enumerate navigation candidates: %s", exc)
            return []

    def _collect_candidates(self, origin: Any, container: Any, candidates: Optional[Sequence[Any]]) -> List[Any]:
        # Unreadable geometry measures as the zero rect; it must never be picked.
        if candidates is not None:
            return [
                candidate
                for candidate in candidates
                if candidate is not origin and measure(candidate).ok
            ]
        return [
            item
            for item in self._host_items(container)
            if item is not origin and is_focusable(item) and measure(item).ok
        ]

    def find_first_focusable(self, container: Any = None) -> Optional[Any]:
        for item in self._host_items(container):
            if is_focusable(item):
                return item
        return None

    # Navigation ----------------------------------------------------------

    def find_next_focusable(
        self,
        origin: Any,
        direction: Direction | str,
        *,
        container: Any = None,
        candidates: Optional[Sequence[Any]] = None,
    ) -> Optional[Any]:
        if origin is None:
            raise InvalidNavigationArgument("origin is required")
        direction = Direction.parse(direction)
        config = self.context.get_config()

        pool = self._collect_candidates(origin, container, candidates)
        if not pool:
            _NAV_LOGGER.debug("No candidates for %s navigation", direction.value)
            return None

        origin_reading = measure(origin)
        if not origin_reading.ok:
            _NAV_LOGGER.debug("Origin %r has no readable geometry; skipping navigation", origin)
            return None

        if config.mode == "geometric":
            filtered = filter_geometric(origin, pool, direction)
        else:
            filtered = filter_cone(origin, pool, direction, config.cone_angle)

        if not filtered:
            if config.mode == "directional":
                return apply_fallback(origin, pool, direction, config.fallback)
            return None

        scorer = score_rects_geometric if config.mode == "geometric" else score_rects_directional
        origin_rect = origin_reading.rect
        best = None
        best_score = math.inf
        for candidate in filtered:
            reading = measure(candidate)
            score = scorer(origin_rect, reading.rect, direction, config)
            if score < best_score:
                best_score = score
                best = candidate
        _NAV_LOGGER.debug(
            "%s navigation (%s): %d/%d candidates in direction, best=%r score=%.2f",
            direction.value,
            config.mode,
            len(filtered),
            len(pool),
            best,
            best_score,
        )

        if best is not None and config.mode == "directional" and config.scroll_behavior == "scrollFirst":
            self._run_scroll_hook(origin, best, direction)
        return best

    def _run_scroll_hook(self, origin: Any, target: Any, direction: Direction) -> None:
        hook = self.scroll_hook
        if hook is None:
            return
        try:
            hook(origin, target, direction)
        except Exception as exc:
            _NAV_LOGGER.warning("Scroll hook failed for %r: %s", target, exc)

    def navigate(
        self,
        direction: Direction | str,
        *,
        container: Any = None,
        candidates: Optional[Sequence[Any]] = None,
    ) -> bool:
        direction = Direction.parse(direction)
        if not self._enabled:
            return False

        try:
            origin = self.host.active_item()
        except Exception as exc:
            _NAV_LOGGER.warning("Unable to read active item: %s", exc)
            origin = None

        if origin is None or self.host.is_root(origin):
            first = self.find_first_focusable(container)
            if first is None:
                return False
            return focus_item(first)

        target = self.find_next_focusable(origin, direction, container=container, candidates=candidates)
        if target is None:
            return False
        return focus_item(target)
