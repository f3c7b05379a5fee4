"""Geometry for the floating transcript panel.

WHY: The cinema transcript floats over the video and can be dragged and
resized from any edge or corner. It must never shrink below a usable size,
never grow past most of the viewport, and never be dragged fully off
screen.

HOW: PanelBounds is an immutable rectangle. Each gesture is a pure function
from the bounds captured when the gesture began plus the pointer delta to
the new bounds; every result is passed through clamp_position().

RULES:
- Width >= MIN_WIDTH, height >= MIN_HEIGHT, both <= MAX_*_RATIO of viewport.
- At least MIN_VISIBLE_PX of the panel stays inside the viewport
  horizontally; the top edge never goes above the viewport.
- West/north resizes move the origin and are ignored when they would
  break the size limits (the panel does not jump).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

MIN_WIDTH = 320
MIN_HEIGHT = 280
MAX_WIDTH_RATIO = 0.9
MAX_HEIGHT_RATIO = 0.9
DEFAULT_WIDTH = 480
DEFAULT_HEIGHT = 400
MIN_VISIBLE_PX = 50
EDGE_PADDING = 24
BOTTOM_CLEARANCE = 60

RESIZE_DIRECTIONS = frozenset({"n", "s", "e", "w", "ne", "nw", "se", "sw"})


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class PanelBounds:
    x: float = 0.0
    y: float = 0.0
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT


def clamp_position(x: float, y: float, width: float, viewport: Viewport) -> Tuple[float, float]:
    """Keep the panel reachable: a strip stays on screen, the top never hides."""
    max_x = viewport.width - MIN_VISIBLE_PX
    max_y = viewport.height - MIN_VISIBLE_PX
    min_x = MIN_VISIBLE_PX - width
    return (
        max(min_x, min(max_x, x)),
        max(0.0, min(max_y, y)),
    )


def initial_position(bounds: PanelBounds, viewport: Viewport) -> PanelBounds:
    """Place the panel in the bottom-right corner, clear of the player controls."""
    return replace(
        bounds,
        x=viewport.width - bounds.width - EDGE_PADDING,
        y=viewport.height - bounds.height - EDGE_PADDING - BOTTOM_CLEARANCE,
    )


def move_panel(start: PanelBounds, dx: float, dy: float, viewport: Viewport) -> PanelBounds:
    """Drag the panel by a pointer delta measured from the drag start."""
    x, y = clamp_position(start.x + dx, start.y + dy, start.width, viewport)
    return replace(start, x=x, y=y)


def resize_panel(
    direction: str,
    start: PanelBounds,
    dx: float,
    dy: float,
    viewport: Viewport,
) -> PanelBounds:
    """Resize from a handle by a pointer delta measured from the resize start.

    Args:
        direction: Handle name, one of n, s, e, w, ne, nw, se, sw.
        start: Bounds captured when the resize began.
        dx: Horizontal pointer movement since the resize began.
        dy: Vertical pointer movement since the resize began.
        viewport: Current window size.

    Raises:
        ValueError: If direction is not a known handle.
    """
    if direction not in RESIZE_DIRECTIONS:
        raise ValueError("Unknown resize direction '{}'".format(direction))

    max_width = viewport.width * MAX_WIDTH_RATIO
    max_height = viewport.height * MAX_HEIGHT_RATIO

    width, height = start.width, start.height
    x, y = start.x, start.y

    if "e" in direction:
        width = min(max_width, max(MIN_WIDTH, start.width + dx))
    if "w" in direction:
        candidate = start.width - dx
        if MIN_WIDTH <= candidate <= max_width:
            width = candidate
            x = start.x + dx
    if "s" in direction:
        height = min(max_height, max(MIN_HEIGHT, start.height + dy))
    if "n" in direction:
        candidate = start.height - dy
        if MIN_HEIGHT <= candidate <= max_height:
            height = candidate
            y = start.y + dy

    x, y = clamp_position(x, y, width, viewport)
    return PanelBounds(x=x, y=y, width=width, height=height)


def fit_to_viewport(bounds: PanelBounds, viewport: Viewport) -> PanelBounds:
    """Re-clamp after the window itself was resized."""
    x, y = clamp_position(bounds.x, bounds.y, bounds.width, viewport)
    return replace(bounds, x=x, y=y)
