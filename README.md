# hyprlite

hyprlite holds the bookkeeping side of a tiling Wayland compositor, written in plain Python with no dependencies:

- **Config parsing.** `hyprlite.config.ConfigManager` reads the `hyprland.conf` format: `category {` blocks, `$variables`, `source=` includes, `monitor=`, `windowrule=`, `workspace=`, `blurls=`, `bind[flags]=`, `unbind=`, `submap=`, `bezier=`, `animation=`, `exec=` and `exec-once=`, and plain `key=value` options.
- **Window and workspace state.** `hyprlite.state.Compositor` holds monitors, windows and workspaces; helper modules answer lookups on it.
- **Decoration values.** Border colour, opacity and shadow colour of a window are worked out from the config and the focus state.
- **A control client.** The `hyprctl` command sends requests to a running compositor over its UNIX socket.

## Installation

```
pip install .
```

With the test tools:

```
pip install ".[test]"
```

## Command line

```
hyprctl [-j] [--batch] <command> [args]
```

Commands: `monitors`, `workspaces`, `clients`, `activewindow`, `layers`, `devices`, `version`, `kill`, `splash`, `reload`, and the two-argument commands `dispatch <dispatcher> <arg>`, `keyword <name> <value>` and `hyprpaper <command> <arg>`.

`-j` asks for JSON output; `--batch` sends several commands separated by `;`. `--help` prints the usage text. Unknown flags or commands print the usage and exit with status 1.

The socket is found through the `HYPRLAND_INSTANCE_SIGNATURE` environment variable, at `/tmp/hypr/<signature>/.socket.sock`; `hyprpaper` requests go to `.hyprpaper.sock` in the same directory. The reply (at most 8192 bytes) is printed.

The same steps are available from Python: `hyprlite.hyprctl.build_request(args)` returns a `Request` (payload and socket name) or raises `UsageError`, and `send_request(payload, socket_name, environ)` returns the reply or raises `ConnectionError`.

## Library use

```python
from hyprlite.config import ConfigManager, default_config_path

manager = ConfigManager(default_config_path("/home/me", False), "/home/me", {"exec", "workspace"}, "wayland-1")
error = manager.load()
```

`load()` resets everything, reads the file and returns the parse error message (`""` when there is none); errors are prefixed with the line number and file. If the file cannot be read, a default config is written in its place and read instead. After loading:

- `manager.store` (`ConfigStore`) gives option values: `get_int`, `get_float`, `get_string`, and per-device values through `get_device_int` and friends.
- `manager.rules` (`RuleSet`) holds monitor rules, window rules, reserved areas and blurred layer namespaces; `monitor_rule_for(name)` and `matching_rules(title, app_class)` query them.
- `manager.binds` (`KeybindTable`) holds key bindings and bezier curves.
- `manager.animations` (`AnimationTree`) holds animation settings, which children inherit from their parents until overridden.

`parse_keyword(command, value, dynamic=True)` applies a single keyword at run time and returns its error. `tick()` reloads when any loaded config file has changed. `exec` and `exec-once` commands seen during the first load are queued and started, through `/bin/sh -c` in the background, by `dispatch_exec_once()`; later `exec` lines start at once.

`hyprlite.state.Compositor` holds monitors, windows and workspaces and finds monitors by id, name or point. These modules work on it:

- `hyprlite.workspaces`: lookup by id, name or string, visibility, window counts, pruning of empty workspaces.
- `hyprlite.windows`: existence, removal, stacking order, next and previous window, active state.
- `hyprlite.hittest`: the window under a point or the cursor.
- `hyprlite.directions`: the neighbouring window or monitor in a direction.
- `hyprlite.focus`: lookup by class, title, address or pid, decoration values and fade-out cleanup.

## What it does not do

hyprlite is not a compositor: it does not open a display, draw anything, handle input devices or run a control socket server. Monitor rules, keybindings, animations and layouts are parsed and stored but not applied to any screen, and `hyprctl` needs a separately running compositor to answer it.

## Tests

```
pytest
```