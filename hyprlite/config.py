"""The configuration manager: reads the config file, follows sources and applies keywords."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .binds import AnimationTree, KeybindTable, _mod_mask
from .config_rules import RuleSet
from .config_values import ConfigError, ConfigStore

log = logging.getLogger(__name__)

AUTOCONFIG = """
########################################################################################
AUTOGENERATED HYPR CONFIG.
PLEASE USE THE CONFIG PROVIDED IN THE GIT REPO /examples/hypr.conf AND EDIT IT,
OR EDIT THIS ONE ACCORDING TO THE WIKI INSTRUCTIONS.
########################################################################################


#
# Please note not all available settings / options are set here.
# For a full list, see the wiki (basic and advanced configuring)
#

autogenerated=1 # remove this line to get rid of the warning on top.

monitor=,preferred,0x0,1

input {
    kb_layout=
    kb_variant=
    kb_model=
    kb_options=
    kb_rules=

    follow_mouse=1

    touchpad {
        natural_scroll=no
    }
}

general {
    sensitivity=1.0 # for mouse cursor
    main_mod=SUPER

    gaps_in=5
    gaps_out=20
    border_size=2
    col.active_border=0x66ee1111
    col.inactive_border=0x66333333

    apply_sens_to_raw=0 # whether to apply the sensitivity to raw input (e.g. used by games where you aim using your mouse)

    damage_tracking=full # leave it on full unless you hate your GPU and want to make it suffer
}

decoration {
    rounding=10
    blur=1
    blur_size=3 # minimum 1
    blur_passes=1 # minimum 1, more passes = more resource intensive.
    # Your blur "amount" is blur_size * blur_passes, but high blur_size (over around 5-ish) will produce artifacts.
    # if you want heavy blur, you need to up the blur_passes.
    # the more passes, the more you can up the blur_size without noticing artifacts.
}

animations {
    enabled=1
    animation=windows,1,7,default
    animation=border,1,10,default
    animation=fade,1,10,default
    animation=workspaces,1,6,default
}

dwindle {
    pseudotile=0 # enable pseudotiling on dwindle
}

gestures {
    workspace_swipe=no
}

# example window rules
# for windows named/classed as abc and xyz
#windowrule=move 69 420,abc
#windowrule=size 420 69,abc
#windowrule=tile,xyz
#windowrule=float,abc
#windowrule=pseudo,abc
#windowrule=monitor 0,xyz

# example binds
bind=SUPER,Q,exec,kitty
bind=SUPER,RETURN,exec,alacritty
bind=SUPER,C,killactive,
bind=SUPER,M,exit,
bind=SUPER,E,exec,dolphin
bind=SUPER,V,togglefloating,
bind=SUPER,R,exec,wofi --show drun -o DP-3
bind=SUPER,P,pseudo,

bind=SUPER,left,movefocus,l
bind=SUPER,right,movefocus,r
bind=SUPER,up,movefocus,u
bind=SUPER,down,movefocus,d

bind=SUPER,1,workspace,1
bind=SUPER,2,workspace,2
bind=SUPER,3,workspace,3
bind=SUPER,4,workspace,4
bind=SUPER,5,workspace,5
bind=SUPER,6,workspace,6
bind=SUPER,7,workspace,7
bind=SUPER,8,workspace,8
bind=SUPER,9,workspace,9
bind=SUPER,0,workspace,10

bind=ALT,1,movetoworkspace,1
bind=ALT,2,movetoworkspace,2
bind=ALT,3,movetoworkspace,3
bind=ALT,4,movetoworkspace,4
bind=ALT,5,movetoworkspace,5
bind=ALT,6,movetoworkspace,6
bind=ALT,7,movetoworkspace,7
bind=ALT,8,movetoworkspace,8
bind=ALT,9,movetoworkspace,9
bind=ALT,0,movetoworkspace,10

bind=SUPER,mouse_down,workspace,e+1
bind=SUPER,mouse_up,workspace,e-1
"""

DEFAULT_DISPATCHERS = frozenset(
    {
        "exec",
        "killactive",
        "exit",
        "togglefloating",
        "pseudo",
        "movefocus",
        "workspace",
        "movetoworkspace",
    }
)

_DAMAGE_TRACKING_MODES = {"none": 0, "monitor": 1, "full": 2}
_DAMAGE_TRACKING_NONE = 0
_DAMAGE_TRACKING_ERROR = "invalid value for general:damage_tracking, supported: full, monitor, none"
_ERROR_PREFIX = "Config error at line"


def default_config_path(home: str, debug: bool = False) -> str:
    """The config file used when none is given explicitly."""
    name = "hyprlandd.conf" if debug else "hyprland.conf"
    return os.path.join(home, ".config", "hypr", name)


def _strip_spaces_tabs(text: str) -> str:
    return text.strip(" \t")


def _up_to_last_slash(text: str) -> str:
    index = text.rfind("/")
    return text if index == -1 else text[:index]


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class ConfigManager:
    """Loads the configuration and keeps values, rules, binds and animations."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        home: Optional[str] = None,
        dispatchers: Iterable[str] = DEFAULT_DISPATCHERS,
        display_socket: Optional[str] = None,
    ) -> None:
        self.home = home if home is not None else os.environ.get("HOME", "")
        self.explicit = config_path is not None
        self.config_path = config_path if config_path is not None else default_config_path(self.home)
        self.display_socket = display_socket

        self.store = ConfigStore()
        self.rules = RuleSet()
        self.binds = KeybindTable(dispatchers=frozenset(dispatchers))
        self.animations = AnimationTree()

        self.config_paths: list[str] = [self.config_path]
        self.modify_times: dict[str, int] = {}
        self.parse_error = ""
        self.current_category = ""
        self.first_launch = True
        self.first_exec_dispatched = False
        self.first_exec_requests: list[str] = []
        self.wants_monitor_reload = False
        self.force_reload = False
        self._current_path = self.config_path

    # ------------------------------------------------------------------ parsing

    def parse_line(self, line: str) -> None:
        """Parse one line: comments, category braces and ``key=value`` pairs."""
        comment = line.find("#")
        if comment == 0:
            return
        if comment != -1:
            line = line[:comment]

        line = line.lstrip(" \t")

        if " {" in line:
            category = line[: line.find(" {")].lower()
            if self.current_category:
                self.current_category += ":" + category
            else:
                self.current_category = category
            return

        if "}" in line and self.current_category:
            self.current_category = ""
            return

        equals = line.find("=")
        line = self.store.apply_variables(line, equals if equals != -1 else None)
        if equals == -1:
            return

        command = _strip_spaces_tabs(line[:equals])
        value = _strip_spaces_tabs(line[equals + 1 :])
        self.parse_keyword(command, value)

    def parse_keyword(self, command: str, value: str, dynamic: bool = False) -> str:
        """Apply one keyword and return the current error message ("" when none).

        In dynamic mode the error state is reset before and cleared after.
        """
        if dynamic:
            self.parse_error = ""
            self.current_category = ""

        try:
            self._apply_keyword(command, value)
        except ConfigError as exc:
            self.parse_error = str(exc)

        if dynamic:
            result = self.parse_error
            self.parse_error = ""
            return result
        return self.parse_error

    def _apply_keyword(self, command: str, value: str) -> None:
        if command == "exec":
            if self.first_launch:
                self.first_exec_requests.append(value)
            else:
                self.run_exec(value)
        elif command == "exec-once":
            if self.first_launch:
                self.first_exec_requests.append(value)
        elif command == "monitor":
            self.rules.handle_monitor(value)
        elif command.startswith("bind"):
            self.binds.handle_bind(command, value)
        elif command == "unbind":
            self.binds.handle_unbind(value)
        elif command == "workspace":
            self.rules.handle_default_workspace(value)
        elif command == "windowrule":
            self.rules.handle_window_rule(value)
        elif command == "bezier":
            self.binds.handle_bezier(value)
        elif command == "animation":
            self.animations.handle_animation(value)
        elif command == "source":
            self.handle_source(value)
        elif command == "submap":
            self.binds.handle_submap(value)
        elif command == "blurls":
            self.rules.handle_blur_ls(value)
        else:
            prefix = self.current_category + ":" if self.current_category else ""
            self.store.set_value(prefix + command, value)

    def parse_text(self, text: str, source_name: str) -> str:
        """Parse a whole file's text; errors are prefixed with their line."""
        for number, line in enumerate(_split_lines(text), start=1):
            self._current_path = source_name
            try:
                self.parse_line(line)
            except (ValueError, IndexError, OSError):
                log.error("Error reading line from config. Line: %s", line)
                self.parse_error += (
                    f"{_ERROR_PREFIX} {number} ({self._current_path}): Line parsing error."
                )
            if self.parse_error and not self.parse_error.startswith(_ERROR_PREFIX):
                self.parse_error = (
                    f"{_ERROR_PREFIX} {number} ({self._current_path}): {self.parse_error}"
                )
        return self.parse_error

    def handle_source(self, raw_path: str) -> None:
        """Parse another config file. Raises ConfigError if the path is unusable."""
        value = raw_path
        if len(value) < 2:
            raise ConfigError(f"source path {value} bogus!")

        if value[0] == ".":
            current_dir = _up_to_last_slash(self._current_path)
            if value[1] == ".":
                value = _up_to_last_slash(current_dir) + value[2:]
            else:
                value = current_dir + value[1:]

        if value[0] == "~":
            value = self.home + value[1:]

        if not os.path.exists(value):
            raise ConfigError(f"source file {value} doesn't exist!")

        self.config_paths.append(value)

        try:
            self.modify_times[value] = os.stat(value).st_mtime_ns
            text = Path(value).read_text()
        except OSError as exc:
            log.warning("Error at reading config at %s: %s", value, exc)
            return

        self.parse_text(text, value)

    # ------------------------------------------------------------------ loading

    def _read_or_generate(self) -> Optional[str]:
        path = Path(self.config_path)
        try:
            return path.read_text()
        except OSError:
            pass

        if not self.explicit:
            log.warning("Config reading error. Attempting to generate, backing up old one if exists.")
            try:
                os.rename(self.config_path, self.config_path + ".backup")
            except OSError:
                pass
            try:
                os.makedirs(path.parent, exist_ok=True)
            except OSError:
                self.parse_error = "Broken config file! (Could not create directory)"
                return None

        try:
            path.write_text(AUTOCONFIG)
            return path.read_text()
        except OSError:
            self.parse_error = "Broken config file! (Could not open)"
            return None

    def _compute_internal_values(self) -> None:
        self.store.set_int(
            "general:main_mod_internal", _mod_mask(self.store.get_string("general:main_mod"))
        )
        mode = _DAMAGE_TRACKING_MODES.get(self.store.get_string("general:damage_tracking"))
        if mode is None:
            self.parse_error = _DAMAGE_TRACKING_ERROR
            mode = _DAMAGE_TRACKING_NONE
        self.store.set_int("general:damage_tracking_internal", mode)

    def load(self) -> str:
        """Reset everything and read the config file, writing a default one if missing.

        Returns the parse error message, "" when the file was read cleanly.
        """
        log.info("Reloading the config!")
        self.parse_error = ""
        self.current_category = ""
        self.store.reset()
        self.rules.clear()
        self.binds.clear()
        self.animations.reset()
        self.config_paths = [self.config_path]

        text = self._read_or_generate()
        if text is None:
            self.first_launch = False
            return self.parse_error

        try:
            self.modify_times[self.config_path] = os.stat(self.config_path).st_mtime_ns
        except OSError as exc:
            log.warning("Error at statting config: %s", exc)

        self.parse_text(text, self.config_path)
        self._compute_internal_values()

        if not self.first_launch:
            self.wants_monitor_reload = True
        self.first_launch = False
        return self.parse_error

    def tick(self) -> bool:
        """Reload if any config file changed (or a reload was forced); True if reloaded."""
        if not os.path.exists(self.config_path):
            log.error("Config doesn't exist??")
            return False

        changed = False
        for path in self.config_paths:
            try:
                mtime = os.stat(path).st_mtime_ns
            except OSError as exc:
                log.warning("Error at ticking config at %s: %s", path, exc)
                return False
            if mtime != self.modify_times.get(path) or self.force_reload:
                changed = True
                self.modify_times[path] = mtime

        if changed:
            self.force_reload = False
            self.load()
        return changed

    # ------------------------------------------------------------------ exec

    def run_exec(self, command: str) -> int:
        """Start a shell command in the background and return its pid."""
        env = dict(os.environ)
        if self.display_socket:
            env["WAYLAND_DISPLAY"] = self.display_socket
        log.info("Config executing %s", command)
        process = subprocess.Popen(
            ["/bin/sh", "-c", command],
            env=env,
            stdin=subprocess.DEVNULL,
            start_new_session=True,
        )
        log.info("Process created with pid %d", process.pid)
        return process.pid

    def dispatch_exec_once(self) -> None:
        """Run the commands queued during the first load, once."""
        if self.first_exec_dispatched or self.first_launch:
            return
        self.first_exec_dispatched = True
        for command in self.first_exec_requests:
            self.run_exec(command)
        self.first_exec_requests.clear()