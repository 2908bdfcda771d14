"""The compositor's bookkeeping: monitors, windows, workspaces and focus."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .window import Box, Monitor, Vector, Window


@dataclass(eq=False)
class Workspace:
    """A workspace living on one monitor; named workspaces have ids below -1."""

    id: int
    monitor_id: int = 0
    name: str = ""
    has_fullscreen_window: bool = False
    fullscreen_mode: str = "full"
    active: bool = False


def _distance_squared_to_rect(point: Vector, top_left: Vector, bottom_right: Vector) -> float:
    dx = max(top_left.x - point.x, 0.0, point.x - bottom_right.x)
    dy = max(top_left.y - point.y, 0.0, point.y - bottom_right.y)
    return dx * dx + dy * dy


@dataclass(eq=False)
class Compositor:
    """Holds everything the window manager tracks."""

    monitors: list[Monitor] = field(default_factory=list)
    real_monitors: list[Monitor] = field(default_factory=list)
    windows: list[Window] = field(default_factory=list)
    unmanaged_x11_windows: list[Window] = field(default_factory=list)
    workspaces: list[Workspace] = field(default_factory=list)
    windows_fading_out: list[Window] = field(default_factory=list)
    surfaces_fading_out: list[Any] = field(default_factory=list)

    last_focus: Any = None
    last_window: Optional[Window] = None
    last_monitor: Optional[Monitor] = None

    cursor: Vector = Vector()
    session_active: bool = True
    instance_signature: str = ""
    current_splash: str = "error"

    def add_monitor(self, monitor: Monitor) -> None:
        """Register an enabled monitor; the first one becomes the last-focused one."""
        if monitor not in self.monitors:
            self.monitors.append(monitor)
        if monitor not in self.real_monitors:
            self.real_monitors.append(monitor)
        if self.last_monitor is None:
            self.last_monitor = monitor

    def monitor_from_id(self, monitor_id: int) -> Optional[Monitor]:
        return next((m for m in self.monitors if m.id == monitor_id), None)

    def monitor_from_name(self, name: str) -> Optional[Monitor]:
        return next((m for m in self.monitors if m.name == name), None)

    def monitor_from_vector(self, point: Vector) -> Optional[Monitor]:
        """The monitor under ``point``, or else the one closest to it."""
        for monitor in self.monitors:
            box = Box(
                int(monitor.position.x),
                int(monitor.position.y),
                int(monitor.size.x),
                int(monitor.size.y),
            )
            if box.contains(point.x, point.y):
                return monitor

        best: Optional[Monitor] = None
        best_distance = 0.0
        for monitor in self.monitors:
            distance = _distance_squared_to_rect(
                point, monitor.position, monitor.position + monitor.size
            )
            if best is None or distance < best_distance:
                best, best_distance = monitor, distance
        return best

    def monitor_from_cursor(self) -> Optional[Monitor]:
        return self.monitor_from_vector(self.cursor)

    def is_point_on_any_monitor(self, point: Vector) -> bool:
        """True if the point lies on a monitor, edges included."""
        return any(
            m.position.x <= point.x <= m.position.x + m.size.x
            and m.position.y <= point.y <= m.position.y + m.size.y
            for m in self.monitors
        )

    def next_available_monitor_id(self) -> int:
        return max((m.id for m in self.monitors), default=-1) + 1