"""Key bindings, bezier curves and the animation property tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .config_values import ConfigError
from .window import Vector

_MODIFIERS = (
    (("SHIFT",), 1),
    (("CAPS",), 2),
    (("CTRL", "CONTROL"), 4),
    (("ALT",), 8),
    (("MOD2",), 16),
    (("MOD3",), 32),
    (("SUPER", "WIN", "LOGO", "MOD4"), 64),
    (("MOD5",), 128),
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _mod_mask(text: str) -> int:
    """Combine every modifier named anywhere in ``text`` into a bit mask."""
    upper = text.upper()
    mask = 0
    for names, bit in _MODIFIERS:
        if any(name in upper for name in names):
            mask |= bit
    return mask


def _is_number(text: str, allow_float: bool = False) -> bool:
    return all(c.isdigit() or c == "-" or (allow_float and c == ".") for c in text)


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if not match:
        raise ValueError(f"no integer in {text!r}")
    return int(match.group(1))


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        raise ValueError(f"no number in {text!r}")
    return float(match.group(1))


def _split_pair(text: str, separator: str) -> tuple[str, str]:
    """Split at the first separator; with none, both halves are the whole text."""
    index = text.find(separator)
    head = text if index == -1 else text[:index]
    return head, text[index + 1 :]


@dataclass
class Keybind:
    """A key (by name or keycode) with modifiers bound to a dispatcher call."""

    key: str
    keycode: int
    modmask: int
    handler: str
    arg: str
    locked: bool = False
    submap: str = ""
    release: bool = False
    repeat: bool = False


@dataclass(frozen=True)
class Bezier:
    """A named cubic bezier curve given by its two control points."""

    name: str
    p1: Vector
    p2: Vector


@dataclass
class KeybindTable:
    """Bindings and bezier curves declared in the configuration."""

    dispatchers: frozenset[str] = frozenset()
    keybinds: list[Keybind] = field(default_factory=list)
    beziers: dict[str, Bezier] = field(default_factory=dict)
    current_submap: str = ""

    def clear(self) -> None:
        """Forget every binding and bezier curve."""
        self.keybinds.clear()
        self.beziers.clear()

    def handle_bind(self, command: str, value: str) -> None:
        """Apply a ``bind[flags]=MODS,KEY,dispatcher,args`` line.

        Raises ConfigError on bad flags, an unknown dispatcher or unknown modifiers.
        """
        locked = release = repeat = False
        for flag in command[4:]:
            if flag == "l":
                locked = True
            elif flag == "r":
                release = True
            elif flag == "e":
                repeat = True
            else:
                raise ConfigError("bind: invalid flag")

        if release and repeat:
            raise ConfigError("flags r and e are mutually exclusive")

        mod_text, rest = _split_pair(value, ",")
        key, rest = _split_pair(rest, ",")
        handler, arg = _split_pair(rest, ",")
        mod = _mod_mask(mod_text)

        if handler not in self.dispatchers:
            raise ConfigError(f'Invalid dispatcher, requested "{handler}" does not exist')

        if mod == 0 and mod_text != "":
            raise ConfigError(f'Invalid mod, requested mod "{mod_text}" is not a valid mod.')

        if key == "":
            return

        options = dict(
            modmask=mod,
            handler=handler,
            arg=arg,
            locked=locked,
            submap=self.current_submap,
            release=release,
            repeat=repeat,
        )
        if _is_number(key):
            try:
                code = _to_int(key)
            except ValueError as exc:
                raise ConfigError(f"Invalid key <{key}>.") from exc
            if code > 9:
                self.keybinds.append(Keybind(key="", keycode=code, **options))
                return
        self.keybinds.append(Keybind(key=key, keycode=-1, **options))

    def handle_unbind(self, value: str) -> None:
        """Remove the bindings for ``MODS,KEY``."""
        mod_text, key = _split_pair(value, ",")
        mod = _mod_mask(mod_text)
        self.keybinds = [
            bind
            for bind in self.keybinds
            if not (
                bind.modmask == mod
                and (bind.key == key or (bind.keycode != -1 and str(bind.keycode) == key))
            )
        ]

    def handle_submap(self, value: str) -> None:
        """Enter a submap for the bindings that follow; ``reset`` leaves it."""
        self.current_submap = "" if value == "reset" else value

    def handle_bezier(self, args: str) -> None:
        """Apply a ``bezier=name,x1,y1,x2,y2`` line."""
        parts = iter(args.split(","))
        name = next(parts, "")
        try:
            p1x, p1y, p2x, p2y = (_to_float(next(parts, "")) for _ in range(4))
        except ValueError as exc:
            raise ConfigError(f"Invalid bezier <{args}>.") from exc
        self.beziers[name] = Bezier(name, Vector(p1x, p1y), Vector(p2x, p2y))


@dataclass(eq=False)
class AnimationConfig:
    """One animation's settings; ``values`` names the entry whose settings apply."""

    overridden: bool = True
    bezier: str = ""
    style: str = ""
    speed: float = 0.0
    enabled: int = -1
    values: Optional["AnimationConfig"] = None
    parent: Optional["AnimationConfig"] = None

    @property
    def effective(self) -> "AnimationConfig":
        """The entry whose settings are in force for this animation."""
        return self.values if self.values is not None else self


_ANIMATION_TREE = (
    ("windows", "global"),
    ("fade", "global"),
    ("border", "global"),
    ("workspaces", "global"),
    ("windowsIn", "windows"),
    ("windowsOut", "windows"),
    ("windowsMove", "windows"),
    ("fadeIn", "fade"),
    ("fadeOut", "fade"),
    ("fadeSwitch", "fade"),
    ("fadeShadow", "fade"),
)


class AnimationTree:
    """Animations that inherit settings from their parents until overridden."""

    def __init__(self) -> None:
        self.configs: dict[str, AnimationConfig] = {}
        self.reset()

    def reset(self) -> None:
        """Restore the default tree, keeping existing entries as the same objects."""
        root = self.get("global")
        self._fill(root, AnimationConfig(False, "default", "", 8.0, 1, root, None))
        for name, parent in _ANIMATION_TREE:
            self._fill(
                self.get(name),
                AnimationConfig(False, "", "", 0.0, -1, root, self.get(parent)),
            )

    @staticmethod
    def _fill(target: AnimationConfig, source: AnimationConfig) -> None:
        target.overridden = source.overridden
        target.bezier = source.bezier
        target.style = source.style
        target.speed = source.speed
        target.enabled = source.enabled
        target.values = source.values
        target.parent = source.parent

    def get(self, name: str) -> AnimationConfig:
        """The entry for ``name``, created empty if unknown."""
        return self.configs.setdefault(name, AnimationConfig())

    def _propagate(self, anim: AnimationConfig) -> None:
        for child in self.configs.values():
            if child.parent is anim and not child.overridden:
                child.values = anim.values
                self._propagate(child)

    def handle_animation(self, args: str) -> None:
        """Apply an ``animation=name,on,speed,curve[,style]`` line.

        Raises ConfigError for an unknown animation or an invalid speed; in the
        latter case the speed falls back to 10 and the rest is still applied.
        """
        parts = iter(args.split(","))
        name = next(parts, "")
        anim = self.configs.get(name)
        if anim is None:
            raise ConfigError("no such animation")

        anim.overridden = True
        anim.values = anim
        anim.enabled = int(next(parts, "") == "1")

        error: Optional[str] = None
        speed = next(parts, "")
        if _is_number(speed, True):
            try:
                anim.speed = _to_float(speed)
            except ValueError:
                anim.speed = 10.0
                error = "Invalid speed"
        else:
            anim.speed = 10.0
            error = "Invalid speed"

        anim.bezier = next(parts, "")
        anim.style = next(parts, "")

        self._propagate(anim)

        if error is not None:
            raise ConfigError(error)