"""Window list housekeeping: existence, ordering, removal and focus state."""

from __future__ import annotations

from typing import Iterable, Optional

from .state import Compositor
from .window import Window

_UNMANAGED_X11 = 2


def window_exists(compositor: Compositor, window: Optional[Window]) -> bool:
    """True if the window is one of the managed windows."""
    return window is not None and any(w is window for w in compositor.windows)


def window_valid_mapped(compositor: Compositor, window: Optional[Window]) -> bool:
    """True if the window exists, is mapped and is not hidden."""
    if not window_exists(compositor, window):
        return False
    if window.is_x11 and not window.mapped_x11:
        return False
    return window.is_mapped and not window.hidden


def _without(windows: Iterable[Window], doomed: Window) -> list[Window]:
    return [w for w in windows if w is not doomed]


def remove_window(compositor: Compositor, window: Window) -> None:
    """Drop a window, and any X11 children it owns, unless it is still fading out."""
    if not window_exists(compositor, window) or window.fading_out:
        return

    if window.is_x11 and window.x11_type == _UNMANAGED_X11:
        compositor.unmanaged_x11_windows[:] = _without(compositor.unmanaged_x11_windows, window)

    if window.is_x11:
        compositor.windows[:] = [
            w for w in compositor.windows if not (w.is_x11 and w.x11_parent is window)
        ]
        compositor.unmanaged_x11_windows[:] = [
            w for w in compositor.unmanaged_x11_windows if w.x11_parent is not window
        ]

    compositor.windows[:] = _without(compositor.windows, window)


def move_window_to_top(compositor: Compositor, window: Window) -> None:
    """Move a mapped window to the end of the stack, where it is drawn last."""
    if not window_valid_mapped(compositor, window):
        return
    compositor.windows[:] = _without(compositor.windows, window) + [window]


def move_unmanaged_to_windows(compositor: Compositor, window: Window) -> None:
    """Move an unmanaged X11 window into the managed window list."""
    for index, candidate in enumerate(compositor.unmanaged_x11_windows):
        if candidate is window:
            del compositor.unmanaged_x11_windows[index]
            compositor.windows.append(window)
            return


def _is_sibling(candidate: Window, window: Window) -> bool:
    return (
        candidate is not window
        and candidate.workspace_id == window.workspace_id
        and candidate.is_mapped
        and not candidate.hidden
    )


def _next_in(order: list[Window], window: Window) -> Optional[Window]:
    position = next((i for i, w in enumerate(order) if w is window), None)
    if position is not None:
        for candidate in order[position + 1 :]:
            if _is_sibling(candidate, window):
                return candidate
    return next((w for w in order if _is_sibling(w, window)), None)


def next_window_on_workspace(compositor: Compositor, window: Window) -> Optional[Window]:
    """The visible window after this one on its workspace, wrapping around."""
    return _next_in(list(compositor.windows), window)


def prev_window_on_workspace(compositor: Compositor, window: Window) -> Optional[Window]:
    """The visible window before this one on its workspace, wrapping around."""
    return _next_in(list(reversed(compositor.windows)), window)


def is_window_active(compositor: Compositor, window: Window) -> bool:
    """True if the window or its surface holds the focus."""
    if compositor.last_window is None and compositor.last_focus is None:
        return False
    if not window_valid_mapped(compositor, window):
        return False
    surface_focused = window.surface is not None and window.surface is compositor.last_focus
    return surface_focused or window is compositor.last_window


def add_to_fading_out(compositor: Compositor, window: Window) -> None:
    """Queue a window for fade-out cleanup, at most once."""
    if not any(w is window for w in compositor.windows_fading_out):
        compositor.windows_fading_out.append(window)