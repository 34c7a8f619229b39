#!/usr/bin/env python3
"""Replay a navigation request against a JSON layout dump and print the target."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from spatial_navigation.direction import Direction, InvalidNavigationArgument
from spatial_navigation.focusable import BoxHost, BoxItem
from spatial_navigation.geometry import Rect, validate_spacing
from spatial_navigation.logging_utils import configure_logging
from spatial_navigation.nav_config import (
    FALLBACKS,
    MODES,
    NavigationConfigError,
    NavigationContext,
    load_navigation_config,
)
from spatial_navigation.navigator import SpatialNavigator


class LayoutError(ValueError):
    """Raised when a layout dump cannot be turned into focus targets."""


def _item_from_entry(entry: Dict[str, Any]) -> BoxItem:
    try:
        item_id = str(entry["id"])
        left, top, right, bottom = entry["rect"]
        bounds = Rect.from_edges(left, top, right, bottom)
        tab_index = entry.get("tab_index")
        if tab_index is not None:
            tab_index = int(tab_index)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise LayoutError(f"Layout entry needs 'id' and a 4-value 'rect': {entry!r}") from exc
    return BoxItem(
        item_id=item_id,
        bounds=bounds,
        kind=str(entry.get("kind", "button")),
        tab_index=tab_index,
        disabled=bool(entry.get("disabled", False)),
        href=entry.get("href"),
        display=str(entry.get("display", "block")),
        visibility=str(entry.get("visibility", "visible")),
    )


def load_layout(path: Path) -> tuple[BoxHost, Dict[str, Any]]:
    """Return a host populated from ``path`` plus the dump's inline config block."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise LayoutError(f"Unable to read layout {path}: {exc}") from exc
    entries = data.get("items") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise LayoutError(f"Layout {path} must be a list of items or an object with 'items'")
    host = BoxHost(_item_from_entry(entry) for entry in entries)
    inline_config = data.get("config") if isinstance(data, dict) else None
    return host, inline_config if isinstance(inline_config, dict) else {}


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spatial navigation layout probe")
    parser.add_argument("layout", type=Path, help="JSON layout dump (items with id/rect)")
    parser.add_argument("--from", dest="origin", help="Id of the currently focused item (omit to bootstrap)")
    parser.add_argument("--direction", choices=[d.value for d in Direction], default="right")
    parser.add_argument("--config", type=Path, help="Navigation config JSON")
    parser.add_argument("--mode", choices=MODES, help="Override the navigation mode")
    parser.add_argument("--fallback", choices=FALLBACKS, help="Override the fallback strategy")
    parser.add_argument("--check-spacing", action="store_true", help="Report focus targets packed too tightly")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", action="store_true", help="Also write a rotating log file")
    return parser.parse_args(argv)


def _report_spacing(host: BoxHost) -> int:
    entries = [(item.item_id, item.bounds) for item in host.items if item.is_focusable()]
    report = validate_spacing(entries)
    if report.valid:
        print("spacing ok")
        return 0
    for violation in report.violations:
        print(f"{violation.first} <-> {violation.second}: gap {violation.gap:.1f}px (need {violation.required:.0f}px)")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logger = configure_logging(debug=args.debug, to_file=args.log_file)

    try:
        host, inline_config = load_layout(args.layout)
        base_config = load_navigation_config(args.config) if args.config else None
        context = NavigationContext(base_config)
        if inline_config:
            context.configure(inline_config)
        overrides = {key: value for key, value in (("mode", args.mode), ("fallback", args.fallback)) if value}
        if overrides:
            context.configure(overrides)
    except (LayoutError, NavigationConfigError) as exc:
        logger.error("%s", exc)
        return 2

    if args.check_spacing:
        return _report_spacing(host)

    navigator = SpatialNavigator(host, context)
    if args.origin:
        origin = host.get(args.origin)
        if origin is None:
            logger.error("Unknown origin id '%s'", args.origin)
            return 2
        origin.focus()

    try:
        moved = navigator.navigate(args.direction)
    except InvalidNavigationArgument as exc:
        logger.error("%s", exc)
        return 2
    active = host.active_item()
    if not moved or active is None:
        print("none")
        return 1
    print(active.item_id)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
