"""Finding the window under a point or under the cursor."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from .state import Compositor
from .window import Vector, Window
from .workspaces import SPECIAL_WORKSPACE_ID, is_workspace_visible


def _first(windows: Iterable[Window], test: Callable[[Window], bool]) -> Optional[Window]:
    return next((w for w in windows if test(w)), None)


def vector_to_window(compositor: Compositor, pos: Vector) -> Optional[Window]:
    """The window drawn at ``pos``: floating above tiled, special workspace first."""
    monitor = compositor.monitor_from_vector(pos)
    if monitor is None:
        return None

    def drawn_at(w: Window) -> bool:
        return w.real_box().contains(pos.x, pos.y)

    if monitor.special_workspace_open:
        found = _first(
            reversed(compositor.windows),
            lambda w: w.is_floating
            and w.workspace_id == SPECIAL_WORKSPACE_ID
            and w.is_mapped
            and drawn_at(w)
            and not w.hidden,
        )
        if found is None:
            found = _first(
                compositor.windows,
                lambda w: w.workspace_id == SPECIAL_WORKSPACE_ID
                and drawn_at(w)
                and w.is_mapped
                and not w.is_floating
                and not w.hidden,
            )
        if found is not None:
            return found

    found = _first(
        reversed(compositor.windows),
        lambda w: drawn_at(w)
        and w.is_mapped
        and w.is_floating
        and is_workspace_visible(compositor, w.workspace_id)
        and not w.hidden,
    )
    if found is not None:
        return found

    return _first(
        compositor.windows,
        lambda w: drawn_at(w)
        and w.is_mapped
        and not w.is_floating
        and monitor.active_workspace == w.workspace_id
        and not w.hidden,
    )


def vector_to_window_tiled(compositor: Compositor, pos: Vector) -> Optional[Window]:
    """The tiled window whose layout box holds ``pos``."""
    monitor = compositor.monitor_from_vector(pos)
    if monitor is None:
        return None

    def laid_at(w: Window) -> bool:
        return w.layout_box().contains(pos.x, pos.y)

    if monitor.special_workspace_open:
        found = _first(
            compositor.windows,
            lambda w: w.workspace_id == SPECIAL_WORKSPACE_ID
            and laid_at(w)
            and not w.is_floating
            and not w.hidden,
        )
        if found is not None:
            return found

    return _first(
        compositor.windows,
        lambda w: w.is_mapped
        and laid_at(w)
        and w.workspace_id == monitor.active_workspace
        and not w.is_floating
        and not w.hidden,
    )


def window_from_cursor(compositor: Compositor) -> Optional[Window]:
    """The window under the cursor, floating windows first."""
    monitor = compositor.monitor_from_cursor()
    if monitor is None:
        return None
    cursor = compositor.cursor

    def drawn_under(w: Window) -> bool:
        return w.real_box().contains(cursor.x, cursor.y)

    def laid_under(w: Window) -> bool:
        return w.layout_box().contains(cursor.x, cursor.y)

    if monitor.special_workspace_open:
        found = _first(
            reversed(compositor.windows),
            lambda w: w.is_floating
            and w.workspace_id == SPECIAL_WORKSPACE_ID
            and w.is_mapped
            and drawn_under(w)
            and not w.hidden,
        )
        if found is None:
            found = _first(
                compositor.windows,
                lambda w: w.workspace_id == SPECIAL_WORKSPACE_ID
                and laid_under(w)
                and w.is_mapped,
            )
        if found is not None:
            return found

    found = _first(
        reversed(compositor.windows),
        lambda w: drawn_under(w)
        and w.is_mapped
        and w.is_floating
        and is_workspace_visible(compositor, w.workspace_id),
    )
    if found is not None:
        return found

    return _first(
        compositor.windows,
        lambda w: laid_under(w)
        and w.is_mapped
        and w.workspace_id == monitor.active_workspace,
    )


def floating_window_from_cursor(compositor: Compositor) -> Optional[Window]:
    """The topmost visible floating window under the cursor."""
    cursor = compositor.cursor
    return _first(
        reversed(compositor.windows),
        lambda w: w.real_box().contains(cursor.x, cursor.y)
        and w.is_mapped
        and w.is_floating
        and is_workspace_visible(compositor, w.workspace_id)
        and not w.hidden,
    )