"""Geometry-driven D-pad focus navigation for TV portal pages."""

from .direction import Direction, InvalidNavigationArgument
from .fallback import apply_fallback, find_nearest_candidate, find_wrap_candidate
from .filters import filter_cone, filter_geometric
from .focus_helpers import focus_first, focus_item, focus_last, focus_next, focus_previous, focus_relative
from .focusable import BoxHost, BoxItem, FocusableItem, FocusHost, RectReading, get_rect, is_focusable, is_visible, measure
from .geometry import MIN_GAP, ZERO_RECT, Rect, get_gap, is_in_viewport, validate_spacing
from .nav_config import (
    DEFAULT_CONFIG,
    NavigationConfig,
    NavigationConfigError,
    NavigationContext,
    load_navigation_config,
    preset_options,
    resolve_effective_mode,
)
from .navigator import SpatialNavigator
from .scoring import entry_exit_points, score_directional, score_geometric

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG",
    "Direction",
    "FocusHost",
    "FocusableItem",
    "BoxHost",
    "BoxItem",
    "InvalidNavigationArgument",
    "MIN_GAP",
    "NavigationConfig",
    "NavigationConfigError",
    "NavigationContext",
    "Rect",
    "RectReading",
    "SpatialNavigator",
    "ZERO_RECT",
    "apply_fallback",
    "entry_exit_points",
    "filter_cone",
    "filter_geometric",
    "find_nearest_candidate",
    "find_wrap_candidate",
    "focus_first",
    "focus_item",
    "focus_last",
    "focus_next",
    "focus_previous",
    "focus_relative",
    "get_gap",
    "get_rect",
    "is_focusable",
    "is_in_viewport",
    "is_visible",
    "load_navigation_config",
    "measure",
    "preset_options",
    "resolve_effective_mode",
    "score_directional",
    "score_geometric",
    "validate_spacing",
    "__version__",
]
