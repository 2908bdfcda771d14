"""Typed configuration values with defaults, device overrides and user variables."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, replace

STRVAL_EMPTY = "[[EMPTY]]"
INT_MAX = 2**31 - 1

_MOD_LOGO = 64
_DAMAGE_TRACKING_FULL = 2

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1

_DECIMAL_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ConfigError(ValueError):
    """Raised when a configuration value cannot be set."""


@dataclass
class ConfigValue:
    """One configuration entry; the kind is the field that is not left at -1 / empty."""

    int_value: int = -1
    float_value: float = -1.0
    str_value: str = ""
    set: bool = False


def _parse_long(text: str, base: int = 10) -> int:
    """Parse the leading integer of ``text`` the way the C library does."""
    if base == 16:
        match = _HEX_PREFIX.match(text)
        if not match:
            raise ValueError(f"no integer in {text!r}")
        value = int(match.group(1) + match.group(2), 16)
    else:
        match = _DECIMAL_PREFIX.match(text)
        if not match:
            raise ValueError(f"no integer in {text!r}")
        value = int(match.group(1))
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise ValueError(f"integer out of range in {text!r}")
    return value


def _parse_float(text: str) -> float:
    """Parse the leading float of ``text`` the way the C library does."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        raise ValueError(f"no number in {text!r}")
    return float(match.group(1))


def default_values() -> dict[str, ConfigValue]:
    """Return a fresh table of every global option with its default."""
    ints = {
        "general:max_fps": 60,
        "general:apply_sens_to_raw": 0,
        "general:main_mod_internal": _MOD_LOGO,
        "general:damage_tracking_internal": _DAMAGE_TRACKING_FULL,
        "general:border_size": 1,
        "general:no_border_on_floating": 0,
        "general:gaps_in": 5,
        "general:gaps_out": 20,
        "general:col.active_border": 0xFFFFFFFF,
        "general:col.inactive_border": 0xFF444444,
        "general:cursor_inactive_timeout": 0,
        "general:no_cursor_warps": 0,
        "misc:disable_hyprland_logo": 0,
        "misc:disable_splash_rendering": 0,
        "misc:no_vfr": 1,
        "misc:damage_entire_on_snapshot": 0,
        "misc:mouse_move_enables_dpms": 0,
        "debug:int": 0,
        "debug:log_damage": 0,
        "debug:overlay": 0,
        "debug:damage_blink": 0,
        "debug:disable_logs": 0,
        "debug:disable_time": 1,
        "decoration:rounding": 1,
        "decoration:blur": 1,
        "decoration:blur_size": 8,
        "decoration:blur_passes": 1,
        "decoration:blur_ignore_opacity": 0,
        "decoration:blur_new_optimizations": 0,
        "decoration:multisample_edges": 1,
        "decoration:no_blur_on_oversized": 0,
        "decoration:drop_shadow": 1,
        "decoration:shadow_range": 4,
        "decoration:shadow_render_power": 3,
        "decoration:shadow_ignore_window": 1,
        "decoration:col.shadow": 0xEE1A1A1A,
        "decoration:col.shadow_inactive": INT_MAX,
        "dwindle:pseudotile": 0,
        "dwindle:col.group_border": 0x66777700,
        "dwindle:col.group_border_active": 0x66FFFF00,
        "dwindle:force_split": 0,
        "dwindle:preserve_split": 0,
        "dwindle:no_gaps_when_only": 0,
        "master:new_is_master": 1,
        "master:new_on_top": 0,
        "master:no_gaps_when_only": 0,
        "animations:enabled": 1,
        "animations:windows": 1,
        "animations:borders": 1,
        "animations:fadein": 1,
        "animations:workspaces": 1,
        "input:repeat_rate": 25,
        "input:repeat_delay": 600,
        "input:natural_scroll": 0,
        "input:numlock_by_default": 0,
        "input:force_no_accel": 0,
        "input:touchpad:natural_scroll": 0,
        "input:touchpad:disable_while_typing": 1,
        "input:touchpad:clickfinger_behavior": 0,
        "input:touchpad:middle_button_emulation": 0,
        "input:touchpad:tap-to-click": 1,
        "input:touchpad:drag_lock": 0,
        "binds:pass_mouse_when_bound": 1,
        "binds:scroll_event_delay": 300,
        "gestures:workspace_swipe": 0,
        "gestures:workspace_swipe_fingers": 3,
        "gestures:workspace_swipe_distance": 300,
        "gestures:workspace_swipe_invert": 1,
        "gestures:workspace_swipe_min_speed_to_force": 30,
        "input:follow_mouse": 1,
        "autogenerated": 0,
    }
    floats = {
        "general:sensitivity": 1.0,
        "decoration:active_opacity": 1.0,
        "decoration:inactive_opacity": 1.0,
        "decoration:fullscreen_opacity": 1.0,
        "dwindle:special_scale_factor": 0.8,
        "dwindle:split_width_multiplier": 1.0,
        "master:special_scale_factor": 0.8,
        "animations:speed": 7.0,
        "animations:windows_speed": 0.0,
        "animations:borders_speed": 0.0,
        "animations:fadein_speed": 0.0,
        "animations:workspaces_speed": 0.0,
        "input:sensitivity": 0.0,
        "gestures:workspace_swipe_cancel_ratio": 0.5,
    }
    strings = {
        "general:main_mod": "SUPER",
        "general:damage_tracking": "full",
        "general:layout": "dwindle",
        "decoration:shadow_offset": "0 0",
        "animations:curve": "default",
        "animations:windows_style": STRVAL_EMPTY,
        "animations:windows_curve": "[[f]]",
        "animations:borders_style": STRVAL_EMPTY,
        "animations:borders_curve": "[[f]]",
        "animations:fadein_style": STRVAL_EMPTY,
        "animations:fadein_curve": "[[f]]",
        "animations:workspaces_style": STRVAL_EMPTY,
        "animations:workspaces_curve": "[[f]]",
        "input:kb_layout": "us",
        "input:kb_variant": STRVAL_EMPTY,
        "input:kb_options": STRVAL_EMPTY,
        "input:kb_rules": STRVAL_EMPTY,
        "input:kb_model": STRVAL_EMPTY,
    }
    table: dict[str, ConfigValue] = {}
    table.update({key: ConfigValue(int_value=v) for key, v in ints.items()})
    table.update({key: ConfigValue(float_value=v) for key, v in floats.items()})
    table.update({key: ConfigValue(str_value=v) for key, v in strings.items()})
    return table


def device_default_values() -> dict[str, ConfigValue]:
    """Return a fresh table of the options a single input device may override."""
    return {
        "sensitivity": ConfigValue(float_value=0.0),
        "kb_layout": ConfigValue(str_value="us"),
        "kb_variant": ConfigValue(str_value=STRVAL_EMPTY),
        "kb_options": ConfigValue(str_value=STRVAL_EMPTY),
        "kb_rules": ConfigValue(str_value=STRVAL_EMPTY),
        "kb_model": ConfigValue(str_value=STRVAL_EMPTY),
        "repeat_rate": ConfigValue(int_value=25),
        "repeat_delay": ConfigValue(int_value=600),
        "natural_scroll": ConfigValue(int_value=0),
        "numlock_by_default": ConfigValue(int_value=0),
        "disable_while_typing": ConfigValue(int_value=1),
        "clickfinger_behavior": ConfigValue(int_value=0),
        "middle_button_emulation": ConfigValue(int_value=0),
        "tap-to-click": ConfigValue(int_value=1),
        "drag_lock": ConfigValue(int_value=0),
    }


def _assign(entry: ConfigValue, key: str, value: str) -> None:
    entry.set = True
    try:
        if entry.int_value != -1:
            if value.startswith("0x"):
                entry.int_value = _parse_long(value[2:], 16)
            elif value.startswith(("true", "on", "yes")):
                entry.int_value = 1
            elif value.startswith(("false", "off", "no")):
                entry.int_value = 0
            else:
                entry.int_value = _parse_long(value)
        elif entry.float_value != -1:
            entry.float_value = _parse_float(value)
        elif entry.str_value != "":
            entry.str_value = value
    except ValueError as exc:
        raise ConfigError(f"Error setting value <{value}> for field <{key}>.") from exc


class ConfigStore:
    """Global options, per-device options and user-declared ``$variables``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.values: dict[str, ConfigValue] = {}
        self.devices: dict[str, dict[str, ConfigValue]] = {}
        self.variables: dict[str, str] = {}
        self.reset()

    def reset(self) -> None:
        """Restore every option to its default and forget devices and variables."""
        with self._lock:
            self.values = default_values()
            self.devices = {}
            self.variables = {}

    def get_value(self, key: str) -> ConfigValue:
        """Return a copy of the entry for ``key`` (an empty entry if unknown)."""
        with self._lock:
            entry = self.values.get(key)
            return replace(entry) if entry is not None else ConfigValue()

    def get_int(self, key: str) -> int:
        return self.get_value(key).int_value

    def get_float(self, key: str) -> float:
        return self.get_value(key).float_value

    def get_string(self, key: str) -> str:
        text = self.get_value(key).str_value
        return "" if text == STRVAL_EMPTY else text

    def set_int(self, key: str, value: int) -> None:
        self.values.setdefault(key, ConfigValue()).int_value = value

    def set_float(self, key: str, value: float) -> None:
        self.values.setdefault(key, ConfigValue()).float_value = value

    def set_string(self, key: str, value: str) -> None:
        self.values.setdefault(key, ConfigValue()).str_value = value

    def set_value(self, key: str, value: str) -> None:
        """Set an option from its textual form, as written in a config file.

        Keys starting with ``$`` declare a variable; ``device:<name>:<option>``
        sets a per-device option. Raises ConfigError on unknown keys or bad values.
        """
        is_device = key.startswith("device:")
        if key not in self.values and not is_device:
            if key.startswith("$"):
                self.variables[key[1:]] = value
                return
            raise ConfigError(f"Error setting value <{value}> for field <{key}>: No such field.")

        if is_device:
            last_colon = key.rfind(":")
            device = key[7:last_colon]
            option = key[last_colon + 1 :]
            options = self.devices.setdefault(device, device_default_values())
            if option not in options:
                raise ConfigError(
                    f"Error setting value <{value}> for field <{key}>: No such field."
                )
            entry = options[option]
        else:
            entry = self.values[key]

        _assign(entry, key, value)

    def device_exists(self, device: str) -> bool:
        return device in self.devices

    def get_device_value(self, device: str, key: str) -> ConfigValue:
        """Return the device's option, falling back to a global option ending in ``key``."""
        with self._lock:
            options = self.devices.get(device)
            if options is None:
                return ConfigValue()
            result = replace(options.setdefault(key, ConfigValue()))
            if not result.set:
                for name, entry in self.values.items():
                    position = name.find(key)
                    if position != -1 and position == len(name) - len(key):
                        result = replace(entry)
            return result

    def get_device_int(self, device: str, key: str) -> int:
        return self.get_device_value(device, key).int_value

    def get_device_float(self, device: str, key: str) -> float:
        return self.get_device_value(device, key).float_value

    def get_device_string(self, device: str, key: str) -> str:
        text = self.get_device_value(device, key).str_value
        return "" if text == STRVAL_EMPTY else text

    def apply_variables(self, line: str, start: int | None) -> str:
        """Substitute ``$name`` occurrences at or after ``start`` with declared values."""
        if start is None:
            return line
        dollar = line.find("$", start)
        while dollar != -1:
            after = line[dollar + 1 :]
            for name, replacement in self.variables.items():
                if after.startswith(name):
                    line = line[:dollar] + replacement + line[dollar + 1 + len(name) :]
                    break
            dollar = line.find("$", dollar + 1)
        return line