import pytest

from hyprlite.config_rules import MonitorRule, ReservedArea, RuleSet, WindowRule
from hyprlite.config_values import ConfigError
from hyprlite.window import Vector


def test_full_monitor_rule():
    rules = RuleSet()
    rules.handle_monitor("DP-1,1920x1080@144,0x0,1")
    rule = rules.monitor_rule_for("DP-1")
    assert rule.name == "DP-1"
    assert rule.resolution == Vector(1920, 1080)
    assert rule.refresh_rate == 144.0
    assert rule.offset == Vector(0, 0)
    assert rule.scale == 1.0


def test_preferred_resolution_is_zero_vector():
    rules = RuleSet()
    rules.handle_monitor(",preferred,0x0,1")
    assert rules.monitor_rules[0].resolution == Vector()
    assert rules.monitor_rules[0].refresh_rate == MonitorRule().refresh_rate


def test_monitor_rule_without_refresh_keeps_default():
    rules = RuleSet()
    rules.handle_monitor("HDMI-A-1,2560x1440,1920x0,1.5")
    rule = rules.monitor_rules[0]
    assert rule.resolution == Vector(2560, 1440)
    assert rule.offset == Vector(1920, 0)
    assert rule.scale == 1.5
    assert rule.refresh_rate == MonitorRule().refresh_rate


def test_monitor_rule_overwrites_same_name():
    rules = RuleSet()
    rules.handle_monitor("DP-1,1920x1080,0x0,1")
    rules.handle_monitor("DP-1,2560x1440,0x0,2")
    assert len(rules.monitor_rules) == 1
    assert rules.monitor_rules[0].resolution == Vector(2560, 1440)


def test_old_syntax_raises():
    rules = RuleSet()
    with pytest.raises(ConfigError, match="old syntax"):
        rules.handle_monitor("DP-1,1920x1080,0x0,1,extra")
    assert rules.monitor_rules == []


def test_garbage_monitor_rule_raises():
    rules = RuleSet()
    with pytest.raises(ConfigError):
        rules.handle_monitor("DP-1,abc,0x0,1")


def test_disable_monitor():
    rules = RuleSet()
    rules.handle_monitor("DP-2,disable")
    assert rules.monitor_rule_for("DP-2").disabled is True


def test_transform_only_updates_existing_rule():
    rules = RuleSet()
    rules.handle_monitor("DP-3,transform,1")
    assert rules.monitor_rules == []
    rules.handle_monitor("DP-3,1920x1080,0x0,1")
    rules.handle_monitor("DP-3,transform,1")
    assert rules.monitor_rules[0].transform == 1


def test_addreserved():
    rules = RuleSet()
    rules.handle_monitor("DP-1,addreserved,10,20,30,40")
    assert rules.reserved_areas["DP-1"] == ReservedArea(10, 20, 30, 40)
    assert rules.monitor_rules == []


def test_fallback_rules():
    rules = RuleSet()
    default = rules.monitor_rule_for("nothing")
    assert default.resolution == Vector(1280, 720)
    rules.handle_monitor(",1920x1080,0x0,1")
    assert rules.monitor_rule_for("nothing").resolution == Vector(1920, 1080)


def test_monitor_rule_for_returns_copy():
    rules = RuleSet()
    rules.handle_monitor("DP-1,1920x1080,0x0,1")
    copy = rules.monitor_rule_for("DP-1")
    copy.scale = 3.0
    assert rules.monitor_rules[0].scale == 1.0


def test_default_workspace():
    rules = RuleSet()
    rules.handle_monitor("DP-1,1920x1080,0x0,1")
    rules.handle_default_workspace("DP-1,name:web")
    assert rules.monitor_rule_for("DP-1").default_workspace == "name:web"


def test_window_rules_valid_and_invalid():
    rules = RuleSet()
    rules.handle_window_rule("float,kitty")
    rules.handle_window_rule("opacity 0.5,firefox")
    assert rules.window_rules == [WindowRule("float", "kitty"), WindowRule("opacity 0.5", "firefox")]
    with pytest.raises(ConfigError, match="Invalid rule found: bogus"):
        rules.handle_window_rule("bogus,kitty")


def test_window_rule_empty_is_ignored():
    rules = RuleSet()
    rules.handle_window_rule(",kitty")
    assert rules.window_rules == []


def test_matching_rules_by_class_and_title():
    rules = RuleSet()
    rules.handle_window_rule("float,^kit")
    rules.handle_window_rule("tile,title:Editor")
    rules.handle_window_rule("center,[unclosed")
    found = rules.matching_rules("My Editor", "kitty")
    assert [r.rule for r in found] == ["float", "tile"]
    assert rules.matching_rules("x", "alacritty") == []


def test_blur_ls_add_and_remove():
    rules = RuleSet()
    rules.handle_blur_ls("waybar")
    rules.handle_blur_ls("rofi")
    assert rules.should_blur_ls("waybar")
    rules.handle_blur_ls("remove,waybar")
    assert not rules.should_blur_ls("waybar")
    assert rules.should_blur_ls("rofi")


def test_clear():
    rules = RuleSet()
    rules.handle_monitor("DP-1,1920x1080,0x0,1")
    rules.handle_window_rule("float,kitty")
    rules.handle_blur_ls("waybar")
    rules.handle_monitor("DP-1,addreserved,1,2,3,4")
    rules.clear()
    assert (rules.monitor_rules, rules.window_rules, rules.reserved_areas, rules.blur_namespaces) == (
        [],
        [],
        {},
        [],
    )