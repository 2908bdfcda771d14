"""Finding the neighbouring window or monitor in a given direction."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple, TypeVar

from .state import Compositor
from .window import Box, Vector, Window
from .workspaces import is_workspace_visible

T = TypeVar("T")

_LEFT = "l"
_RIGHT = "r"
_UP = ("t", "u")
_DOWN = ("b", "d")


def sticks(a: float, b: float) -> bool:
    """True if two edge coordinates touch, allowing for rounding."""
    return abs(a - b) < 2


def _overlap(start_a: float, end_a: float, start_b: float, end_b: float) -> float:
    return max(0.0, min(end_a, end_b) - max(start_a, start_b))


def _intersect_in_direction(
    pos_a: Vector, size_a: Vector, pos_b: Vector, size_b: Vector, direction: str
) -> Optional[float]:
    """Length of the shared edge if B touches A on the given side, else None."""
    if direction == _LEFT:
        if sticks(pos_a.x, pos_b.x + size_b.x):
            return _overlap(pos_a.y, pos_a.y + size_a.y, pos_b.y, pos_b.y + size_b.y)
    elif direction == _RIGHT:
        if sticks(pos_a.x + size_a.x, pos_b.x):
            return _overlap(pos_a.y, pos_a.y + size_a.y, pos_b.y, pos_b.y + size_b.y)
    elif direction in _UP:
        if sticks(pos_a.y, pos_b.y + size_b.y):
            return _overlap(pos_a.x, pos_a.x + size_a.x, pos_b.x, pos_b.x + size_b.x)
    elif direction in _DOWN:
        if sticks(pos_a.y + size_a.y, pos_b.y):
            return _overlap(pos_a.x, pos_a.x + size_a.x, pos_b.x, pos_b.x + size_b.x)
    return None


def _best_in_direction(
    pos_a: Vector,
    size_a: Vector,
    candidates: Iterable[Tuple[T, Vector, Vector]],
    direction: str,
) -> Optional[T]:
    longest = -1
    best: Optional[T] = None
    for item, pos_b, size_b in candidates:
        length = _intersect_in_direction(pos_a, size_a, pos_b, size_b, direction)
        if length is not None and length > longest:
            longest = int(length)
            best = item
    return best if longest != -1 else None


def _ideal_box(compositor: Compositor, window: Window) -> Box:
    monitor = compositor.monitor_from_id(window.monitor_id)
    if monitor is None:
        return window.layout_box()
    return window.ideal_bounding_box(monitor)


def _box_parts(box: Box) -> Tuple[Vector, Vector]:
    return Vector(box.x, box.y), Vector(box.width, box.height)


def window_in_direction(
    compositor: Compositor, window: Window, direction: str
) -> Optional[Window]:
    """The visible tiled window sharing the longest edge with ``window`` on that side.

    ``direction`` is one of ``l``, ``r``, ``t``/``u`` or ``b``/``d``.
    """
    pos_a, size_a = _box_parts(_ideal_box(compositor, window))

    def candidates():
        for other in compositor.windows:
            if (
                other is window
                or not other.is_mapped
                or other.hidden
                or other.is_floating
                or not is_workspace_visible(compositor, other.workspace_id)
            ):
                continue
            pos_b, size_b = _box_parts(_ideal_box(compositor, other))
            yield other, pos_b, size_b

    return _best_in_direction(pos_a, size_a, candidates(), direction)


def monitor_in_direction(compositor: Compositor, direction: str):
    """The monitor sharing the longest edge with the last-focused monitor on that side."""
    current = compositor.last_monitor
    if current is None:
        return None
    candidates = (
        (m, m.position, m.size) for m in compositor.monitors if m is not current
    )
    return _best_in_direction(current.position, current.size, candidates, direction)