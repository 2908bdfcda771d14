import pytest

from hyprlite.binds import AnimationTree, Bezier, KeybindTable
from hyprlite.config_values import ConfigError, default_values
from hyprlite.window import Vector

SUPER_MASK = default_values()["general:main_mod_internal"].int_value


@pytest.fixture
def table():
    return KeybindTable(dispatchers=frozenset({"exec", "workspace", "killactive"}))


def test_bind_by_name(table):
    table.handle_bind("bind", "SUPER,Q,exec,kitty --single")
    assert len(table.keybinds) == 1
    bind = table.keybinds[0]
    assert bind.key == "Q"
    assert bind.keycode == -1
    assert bind.modmask == SUPER_MASK
    assert bind.handler == "exec"
    assert bind.arg == "kitty --single"


def test_bind_with_numeric_keycode(table):
    table.handle_bind("bind", "SUPER,10,workspace,1")
    assert table.keybinds[0].key == ""
    assert table.keybinds[0].keycode == 10


def test_bind_small_number_stays_key(table):
    table.handle_bind("bind", "SUPER,1,workspace,1")
    assert table.keybinds[0].key == "1"
    assert table.keybinds[0].keycode == -1


def test_bind_flags(table):
    table.handle_bind("bindlr", "SUPER,C,killactive,")
    bind = table.keybinds[0]
    assert (bind.locked, bind.release, bind.repeat) == (True, True, False)
    assert bind.arg == ""


def test_bind_empty_key_is_ignored(table):
    table.handle_bind("bind", "SUPER,,exec,kitty")
    assert table.keybinds == []


@pytest.mark.parametrize(
    "command,value",
    [
        ("bindx", "SUPER,Q,exec,kitty"),
        ("bindre", "SUPER,Q,exec,kitty"),
        ("bind", "SUPER,Q,nosuch,kitty"),
        ("bind", "BOGUS,Q,exec,kitty"),
    ],
)
def test_bind_errors(table, command, value):
    with pytest.raises(ConfigError):
        table.handle_bind(command, value)
    assert table.keybinds == []


def test_dispatcher_error_message(table):
    with pytest.raises(ConfigError, match='requested "nosuch" does not exist'):
        table.handle_bind("bind", "SUPER,Q,nosuch,x")


def test_submap_applies_and_resets(table):
    table.handle_submap("resize")
    table.handle_bind("bind", "SUPER,Q,exec,a")
    table.handle_submap("reset")
    table.handle_bind("bind", "SUPER,W,exec,b")
    assert [b.submap for b in table.keybinds] == ["resize", ""]


def test_unbind_removes_matching(table):
    table.handle_bind("bind", "SUPER,Q,exec,a")
    table.handle_bind("bind", "ALT,Q,exec,b")
    table.handle_unbind("SUPER,Q")
    assert [b.arg for b in table.keybinds] == ["b"]


def test_bezier_and_clear(table):
    table.handle_bezier("overshot,0.05,0.9,0.1,1.1")
    assert table.beziers["overshot"] == Bezier("overshot", Vector(0.05, 0.9), Vector(0.1, 1.1))
    table.handle_bind("bind", "SUPER,Q,exec,a")
    table.clear()
    assert table.beziers == {}
    assert table.keybinds == []


def test_bezier_bad_number(table):
    with pytest.raises(ConfigError):
        table.handle_bezier("curve,a,b,c,d")


def test_tree_defaults():
    tree = AnimationTree()
    root = tree.get("global")
    assert tree.get("windowsIn").parent is tree.get("windows")
    assert tree.get("windowsIn").values is root
    assert root.effective.bezier == "default"
    assert root.effective.speed == 8.0


def test_animation_override_propagates():
    tree = AnimationTree()
    tree.handle_animation("windows,1,5,overshot,slide")
    windows = tree.get("windows")
    assert windows.overridden
    assert (windows.enabled, windows.speed, windows.bezier, windows.style) == (1, 5.0, "overshot", "slide")
    assert tree.get("windowsIn").values is windows
    assert tree.get("fadeIn").values is tree.get("global")


def test_overridden_child_keeps_own_values():
    tree = AnimationTree()
    tree.handle_animation("windowsIn,0,3,default")
    tree.handle_animation("windows,1,5,default")
    assert tree.get("windowsIn").values is tree.get("windowsIn")
    assert tree.get("windowsIn").enabled == 0
    assert tree.get("windowsOut").values is tree.get("windows")


def test_unknown_animation():
    with pytest.raises(ConfigError, match="no such animation"):
        AnimationTree().handle_animation("nothing,1,5,default")


def test_invalid_speed_falls_back_and_raises():
    tree = AnimationTree()
    with pytest.raises(ConfigError, match="Invalid speed"):
        tree.handle_animation("fade,1,fast,default")
    assert tree.get("fade").speed == 10.0
    assert tree.get("fadeIn").values is tree.get("fade")


def test_reset_restores_tree():
    tree = AnimationTree()
    tree.handle_animation("windows,1,5,default")
    tree.reset()
    assert not tree.get("windows").overridden
    assert tree.get("windowsIn").values is tree.get("global")