import pytest

from hyprlite.directions import monitor_in_direction, sticks, window_in_direction
from hyprlite.state import Compositor
from hyprlite.window import Monitor, Vector, Window


def _window(x, y, w, h, **kwargs):
    options = dict(workspace_id=1, monitor_id=0, is_mapped=True)
    options.update(kwargs)
    return Window(position=Vector(x, y), size=Vector(w, h), **options)


@pytest.fixture
def compositor():
    comp = Compositor()
    comp.add_monitor(Monitor(id=0, size=Vector(1920, 1080), active_workspace=1))
    return comp


def test_sticks_tolerance():
    assert sticks(0, 1)
    assert sticks(5, 5)
    assert not sticks(0, 2)


def test_left_and_right_neighbours(compositor):
    left = _window(0, 0, 960, 1080)
    right = _window(960, 0, 960, 1080)
    compositor.windows += [left, right]
    assert window_in_direction(compositor, left, "r") is right
    assert window_in_direction(compositor, right, "l") is left
    assert window_in_direction(compositor, left, "l") is None


def test_up_aliases(compositor):
    top = _window(0, 0, 1920, 540)
    bottom = _window(0, 540, 1920, 540)
    compositor.windows += [top, bottom]
    assert window_in_direction(compositor, bottom, "t") is top
    assert window_in_direction(compositor, bottom, "u") is top
    assert window_in_direction(compositor, top, "b") is bottom
    assert window_in_direction(compositor, top, "d") is bottom


def test_longest_shared_edge_wins(compositor):
    left = _window(0, 0, 960, 1080)
    small = _window(960, 0, 960, 300)
    large = _window(960, 300, 960, 780)
    compositor.windows += [left, small, large]
    assert window_in_direction(compositor, left, "r") is large


def test_floating_hidden_and_invisible_are_skipped(compositor):
    left = _window(0, 0, 960, 1080)
    floating = _window(960, 0, 960, 1080, is_floating=True)
    hidden = _window(960, 0, 960, 1080, hidden=True)
    elsewhere = _window(960, 0, 960, 1080, workspace_id=7)
    compositor.windows += [left, floating, hidden, elsewhere]
    assert window_in_direction(compositor, left, "r") is None


def test_unknown_direction(compositor):
    left = _window(0, 0, 960, 1080)
    right = _window(960, 0, 960, 1080)
    compositor.windows += [left, right]
    assert window_in_direction(compositor, left, "x") is None


def test_monitor_in_direction():
    comp = Compositor()
    first = Monitor(id=0, size=Vector(1920, 1080))
    second = Monitor(id=1, position=Vector(1920, 0), size=Vector(1920, 1080))
    comp.add_monitor(first)
    comp.add_monitor(second)
    assert monitor_in_direction(comp, "r") is second
    assert monitor_in_direction(comp, "l") is None
    comp.last_monitor = second
    assert monitor_in_direction(comp, "l") is first


def test_monitor_in_direction_without_monitor():
    assert monitor_in_direction(Compositor(), "r") is None