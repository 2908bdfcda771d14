import pytest

from hyprlite.state import Compositor, Workspace
from hyprlite.window import Monitor, Vector, Window
from hyprlite.workspaces import (
    SPECIAL_WORKSPACE_ID,
    first_window_on_workspace,
    fullscreen_window_on_workspace,
    is_workspace_visible,
    next_available_named_workspace,
    sanity_check_workspaces,
    windows_on_workspace,
    workspace_by_id,
    workspace_by_name,
    workspace_by_string,
    workspace_id_out_of_bounds,
)


@pytest.fixture
def comp():
    c = Compositor()
    c.add_monitor(Monitor(id=0, name="DP-1", size=Vector(1920, 1080), active_workspace=1))
    c.workspaces.extend([Workspace(id=1, name="1"), Workspace(id=2, name="2"), Workspace(id=-1338, name="web")])
    return c


def test_lookup_by_id_and_name(comp):
    assert workspace_by_id(comp, 2) is comp.workspaces[1]
    assert workspace_by_id(comp, 7) is None
    assert workspace_by_name(comp, "web") is comp.workspaces[2]


def test_lookup_by_string(comp):
    assert workspace_by_string(comp, "name:web") is comp.workspaces[2]
    assert workspace_by_string(comp, "2") is comp.workspaces[1]
    assert workspace_by_string(comp, "garbage") is None


def test_visibility(comp):
    assert is_workspace_visible(comp, 1)
    assert not is_workspace_visible(comp, 2)
    assert not is_workspace_visible(comp, SPECIAL_WORKSPACE_ID)
    comp.monitors[0].special_workspace_open = True
    assert is_workspace_visible(comp, SPECIAL_WORKSPACE_ID)


def test_window_counts(comp):
    hidden = Window(workspace_id=2, is_mapped=True, hidden=True)
    shown = Window(workspace_id=2, is_mapped=True)
    comp.windows.extend([Window(workspace_id=2), hidden, shown])
    assert windows_on_workspace(comp, 2) == 2
    assert first_window_on_workspace(comp, 2) is shown
    assert first_window_on_workspace(comp, 1) is None


def test_fullscreen_window(comp):
    full = Window(workspace_id=1, is_fullscreen=True)
    comp.windows.extend([Window(workspace_id=1), full])
    assert fullscreen_window_on_workspace(comp, 1) is full
    assert fullscreen_window_on_workspace(comp, 2) is None


def test_sanity_check_drops_empty_invisible(comp):
    comp.windows.append(Window(workspace_id=-1338, is_mapped=True))
    sanity_check_workspaces(comp)
    assert [w.id for w in comp.workspaces] == [1, -1338]


def test_sanity_check_closes_empty_special(comp):
    comp.monitors[0].special_workspace_open = True
    comp.workspaces.append(Workspace(id=SPECIAL_WORKSPACE_ID))
    sanity_check_workspaces(comp)
    assert workspace_by_id(comp, SPECIAL_WORKSPACE_ID) is None
    assert not comp.monitors[0].special_workspace_open


def test_next_named_workspace(comp):
    assert next_available_named_workspace(Compositor()) == -1337
    assert next_available_named_workspace(comp) == -1339


def test_out_of_bounds(comp):
    assert not workspace_id_out_of_bounds(comp, 1)
    assert not workspace_id_out_of_bounds(comp, -5)
    assert workspace_id_out_of_bounds(comp, 3)
    assert workspace_id_out_of_bounds(comp, -1400)