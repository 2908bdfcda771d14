"""Window lookup by pattern, decoration state and fade-out cleanup."""

from __future__ import annotations

import re
from typing import Any, Optional

from .config_values import INT_MAX, ConfigStore
from .state import Compositor
from .window import Window
from .windows import remove_window, window_exists
from .workspaces import workspace_by_id

_UNMANAGED_X11 = 2
_NO_SHADOW = 0


def window_by_regex(compositor: Compositor, pattern: str) -> Optional[Window]:
    """The first visible window matching ``pattern``.

    The pattern is a class regex, or ``title:<regex>``, ``address:<0x...>``
    or ``pid:<number>``. Raises re.error on an invalid regex.
    """
    regex = re.compile(pattern)
    match_text = ""
    mode = "class"
    if pattern.startswith("title:"):
        mode = "title"
        regex = re.compile(pattern[6:])
    elif pattern.startswith("address:"):
        mode = "address"
        match_text = pattern[8:]
    elif pattern.startswith("pid:"):
        mode = "pid"
        match_text = pattern[4:]

    for window in compositor.windows:
        if not window.is_mapped or window.hidden:
            continue
        if mode == "class" and not regex.search(window.app_class):
            continue
        if mode == "title" and not regex.search(window.title):
            continue
        if mode == "address" and match_text != f"0x{id(window):x}":
            continue
        if mode == "pid" and match_text != str(window.pid):
            continue
        return window
    return None


def _focus_alpha(compositor: Compositor, window: Window, store: ConfigStore) -> float:
    render = window.special_render_data
    if window is compositor.last_window:
        return render.alpha * store.get_float("decoration:active_opacity")
    inactive = store.get_float("decoration:inactive_opacity")
    if render.alpha_inactive != -1:
        return render.alpha_inactive * inactive
    return inactive


def update_decoration_values(
    compositor: Compositor, window: Window, store: ConfigStore
) -> None:
    """Set a window's border colour, opacity and shadow colour for its focus state."""
    active = window is compositor.last_window

    window.border_color = store.get_int(
        "general:col.active_border" if active else "general:col.inactive_border"
    )

    workspace = workspace_by_id(compositor, window.workspace_id) if window.is_fullscreen else None
    if workspace is not None and workspace.fullscreen_mode == "full":
        window.active_inactive_alpha = store.get_float("decoration:fullscreen_opacity")
    else:
        window.active_inactive_alpha = _focus_alpha(compositor, window, store)

    if window.x11_type != _UNMANAGED_X11 and not window.x11_doesnt_want_borders:
        shadow = store.get_int("decoration:col.shadow")
        if not active:
            inactive = store.get_int("decoration:col.shadow_inactive")
            if inactive != INT_MAX:
                shadow = inactive
        window.shadow_color = shadow
    else:
        window.shadow_color = _NO_SHADOW


def update_all_decoration_values(compositor: Compositor, store: ConfigStore) -> None:
    """Refresh the decoration values of every mapped window."""
    for window in compositor.windows:
        if window.is_mapped:
            update_decoration_values(compositor, window, store)


def _layer_surface_exists(compositor: Compositor, surface: Any) -> bool:
    return any(
        candidate is surface
        for monitor in compositor.monitors
        for layer in monitor.layer_surfaces
        for candidate in layer
    )


def cleanup_fading_out(compositor: Compositor, monitor_id: int) -> None:
    """Destroy at most one window or layer surface that has finished fading out.

    Layer surfaces are expected to carry ``monitor_id``, ``fading_out``,
    ``ready_to_delete`` and ``alpha_animating`` attributes.
    """
    for window in list(compositor.windows_fading_out):
        if window.monitor_id != monitor_id:
            continue
        valid = window_exists(compositor, window)
        if not valid or not window.fading_out or window.alpha == 0:
            if valid and not window.ready_to_delete:
                continue
            remove_window(compositor, window)
            compositor.windows_fading_out[:] = [
                w for w in compositor.windows_fading_out if w is not window
            ]
            return

    for surface in list(compositor.surfaces_fading_out):
        if not _layer_surface_exists(compositor, surface):
            compositor.surfaces_fading_out[:] = [
                s for s in compositor.surfaces_fading_out if s is not surface
            ]
            return

        if surface.monitor_id != monitor_id:
            continue

        if surface.fading_out and surface.ready_to_delete and not surface.alpha_animating:
            for monitor in compositor.monitors:
                for layer in monitor.layer_surfaces:
                    layer[:] = [s for s in layer if s is not surface]
            compositor.surfaces_fading_out[:] = [
                s for s in compositor.surfaces_fading_out if s is not surface
            ]
            return