"""Geometry primitives, monitors and the window model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Vector:
    """A 2D point or size."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Box:
    """An integer rectangle."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies inside; the right and bottom edges are outside."""
        if self.width <= 0 or self.height <= 0:
            return False
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class DecorationExtents:
    """How far a decoration reaches beyond the window on each side."""

    top_left: Vector = Vector()
    bottom_right: Vector = Vector()


@dataclass(eq=False)
class Decoration:
    """Something drawn around a window, such as a shadow."""

    kind: str
    extents: DecorationExtents = DecorationExtents()
    last_position: Optional[Vector] = None
    last_size: Optional[Vector] = None

    def update_window(self, window: "Window") -> None:
        """Track the window's current drawn geometry."""
        self.last_position = window.real_position
        self.last_size = window.real_size


@dataclass(eq=False)
class Monitor:
    """An output with its place in the layout and reserved edges."""

    id: int
    name: str = ""
    position: Vector = Vector()
    size: Vector = Vector()
    reserved_top_left: Vector = Vector()
    reserved_bottom_right: Vector = Vector()
    active_workspace: int = -1
    special_workspace_open: bool = False
    enabled: bool = True
    layer_surfaces: list[list[Any]] = field(default_factory=lambda: [[], [], [], []])


@dataclass
class SpecialRenderData:
    alpha: float = 1.0
    alpha_inactive: float = -1.0  # -1 means unset
    rounding: bool = True


@dataclass
class AdditionalConfigData:
    animation_style: str = ""
    rounding: int = -1  # -1 means unset
    force_no_blur: bool = False
    force_opaque: bool = False


@dataclass(eq=False)
class Window:
    """A managed toplevel window, compared by identity."""

    title: str = ""
    app_class: str = ""
    pid: int = -1
    surface: Any = None

    # layout bounding box
    position: Vector = Vector()
    size: Vector = Vector()

    # geometry actually drawn
    real_position: Vector = Vector()
    real_size: Vector = Vector()

    reported_position: Vector = Vector()
    reported_size: Vector = Vector()

    is_pseudotiled: bool = False
    pseudo_size: Vector = Vector()

    tags: int = 0
    is_floating: bool = False
    dragging_tiled: bool = False
    is_fullscreen: bool = False
    monitor_id: int = -1
    workspace_id: int = -1
    is_mapped: bool = False
    requests_float: bool = False
    created_over_fullscreen: bool = False

    is_x11: bool = False
    mapped_x11: bool = False
    x11_parent: Optional["Window"] = None
    x11_type: int = 0
    is_modal: bool = False
    x11_doesnt_want_borders: bool = False

    no_focus: bool = False
    no_initial_focus: bool = False

    border_color: int = 0
    alpha: float = 1.0
    fading_out: bool = False
    ready_to_delete: bool = False
    original_closed_pos: Vector = Vector()
    original_closed_size: Vector = Vector()

    hidden: bool = False

    decorations: list[Decoration] = field(default_factory=list)
    decorations_to_remove: list[Decoration] = field(default_factory=list)

    special_render_data: SpecialRenderData = field(default_factory=SpecialRenderData)
    additional_config_data: AdditionalConfigData = field(default_factory=AdditionalConfigData)

    active_inactive_alpha: float = 1.0
    shadow_color: int = 0

    def real_box(self) -> Box:
        return Box(
            int(self.real_position.x),
            int(self.real_position.y),
            int(self.real_size.x),
            int(self.real_size.y),
        )

    def layout_box(self) -> Box:
        return Box(int(self.position.x), int(self.position.y), int(self.size.x), int(self.size.y))

    def full_bounding_box(self, border_size: int) -> Box:
        """The drawn box grown by the border and the widest decoration on each side."""
        base = border_size + 1
        left = top = right = bottom = float(base)
        for decoration in self.decorations:
            extents = decoration.extents
            left = max(left, extents.top_left.x)
            top = max(top, extents.top_left.y)
            right = max(right, extents.bottom_right.x)
            bottom = max(bottom, extents.bottom_right.y)
        return Box(
            int(self.real_position.x - left),
            int(self.real_position.y - top),
            int(self.real_size.x + left + right),
            int(self.real_size.y + top + bottom),
        )

    def ideal_bounding_box(self, monitor: Monitor) -> Box:
        """The layout box extended over any reserved monitor edge it touches."""

        def near(a: float, b: float) -> bool:
            return abs(a - b) < 1

        pos_x, pos_y = self.position.x, self.position.y
        size_x, size_y = self.size.x, self.size.y

        if near(pos_y - monitor.position.y, monitor.reserved_top_left.y):
            pos_y = monitor.position.y
            size_y += monitor.reserved_top_left.y
        if near(pos_x - monitor.position.x, monitor.reserved_top_left.x):
            pos_x = monitor.position.x
            size_x += monitor.reserved_top_left.x
        if near(pos_x + size_x - monitor.position.x, monitor.size.x - monitor.reserved_bottom_right.x):
            size_x += monitor.reserved_bottom_right.x
        if near(pos_y + size_y - monitor.position.y, monitor.size.y - monitor.reserved_bottom_right.y):
            size_y += monitor.reserved_bottom_right.y

        return Box(int(pos_x), int(pos_y), int(size_x), int(size_y))

    def remove_decoration(self, decoration: Decoration) -> None:
        """Schedule a decoration for removal at the next update."""
        self.decorations_to_remove.append(decoration)

    def update_decorations(self) -> None:
        """Refresh every decoration, then drop the ones scheduled for removal."""
        for decoration in self.decorations:
            decoration.update_window(self)
        doomed = {id(d) for d in self.decorations_to_remove}
        self.decorations = [d for d in self.decorations if id(d) not in doomed]
        self.decorations_to_remove.clear()

    def decoration_by_type(self, kind: str) -> Optional[Decoration]:
        return next((d for d in self.decorations if d.kind == kind), None)