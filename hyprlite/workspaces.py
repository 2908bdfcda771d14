"""Workspace lookups and housekeeping over the compositor state."""

from __future__ import annotations

from typing import Optional

from .state import Compositor, Workspace
from .window import Window

SPECIAL_WORKSPACE_ID = -99


def workspace_by_id(compositor: Compositor, workspace_id: int) -> Optional[Workspace]:
    return next((w for w in compositor.workspaces if w.id == workspace_id), None)


def workspace_by_name(compositor: Compositor, name: str) -> Optional[Workspace]:
    return next((w for w in compositor.workspaces if w.name == name), None)


def workspace_by_string(compositor: Compositor, text: str) -> Optional[Workspace]:
    """Find a workspace by ``name:<name>`` or by its numeric id."""
    if text.startswith("name:"):
        return workspace_by_name(compositor, text[text.find(":") + 1 :])
    try:
        workspace_id = int(text)
    except ValueError:
        return None
    return workspace_by_id(compositor, workspace_id)


def is_workspace_visible(compositor: Compositor, workspace_id: int) -> bool:
    """True if a monitor shows the workspace, the special one included when open."""
    return any(
        m.active_workspace == workspace_id
        or (m.special_workspace_open and workspace_id == SPECIAL_WORKSPACE_ID)
        for m in compositor.monitors
    )


def windows_on_workspace(compositor: Compositor, workspace_id: int) -> int:
    """The number of mapped windows on the workspace."""
    return sum(1 for w in compositor.windows if w.workspace_id == workspace_id and w.is_mapped)


def first_window_on_workspace(compositor: Compositor, workspace_id: int) -> Optional[Window]:
    return next(
        (
            w
            for w in compositor.windows
            if w.workspace_id == workspace_id and w.is_mapped and not w.hidden
        ),
        None,
    )


def fullscreen_window_on_workspace(compositor: Compositor, workspace_id: int) -> Optional[Window]:
    return next(
        (w for w in compositor.windows if w.workspace_id == workspace_id and w.is_fullscreen),
        None,
    )


def sanity_check_workspaces(compositor: Compositor) -> None:
    """Drop empty invisible workspaces; an empty special workspace is closed and dropped."""
    kept: list[Workspace] = []
    for workspace in compositor.workspaces:
        count = windows_on_workspace(compositor, workspace.id)
        if count == 0 and not is_workspace_visible(compositor, workspace.id):
            continue
        if workspace.id == SPECIAL_WORKSPACE_ID and count == 0:
            for monitor in compositor.monitors:
                monitor.special_workspace_open = False
            continue
        kept.append(workspace)
    compositor.workspaces[:] = kept


def next_available_named_workspace(compositor: Compositor) -> int:
    """An id for a new named workspace, below every existing named one."""
    lowest = -1337 + 1
    for workspace in compositor.workspaces:
        if workspace.id < -1 and workspace.id < lowest:
            lowest = workspace.id
    return lowest - 1


def workspace_id_out_of_bounds(compositor: Compositor, workspace_id: int) -> bool:
    """True if the id lies outside the range spanned by existing workspaces."""
    lowest = 99999
    highest = -99999
    for workspace in compositor.workspaces:
        lowest = min(lowest, workspace.id)
        highest = max(highest, workspace.id)
    return min(max(workspace_id, lowest), highest) != workspace_id