"""Monitor rules, window rules, reserved areas and blurred layer namespaces."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from .config_values import ConfigError
from .window import Vector

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_EXACT_RULES = frozenset(
    {"float", "tile", "nofocus", "noblur", "center", "opaque", "fullscreen"}
)
_PREFIX_RULES = (
    "opacity",
    "move",
    "size",
    "pseudo",
    "monitor",
    "animation",
    "rounding",
    "workspace",
)

_OLD_SYNTAX_ERROR = (
    "Error in setting monitor rule. Are you using the old syntax? Confront the wiki."
)


def _to_int(text: str) -> int:
    """Parse the leading integer of ``text``, rejecting values outside 32 bits."""
    match = _INT_PREFIX.match(text)
    if not match:
        raise ValueError(f"no integer in {text!r}")
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer out of range in {text!r}")
    return value


def _to_float(text: str) -> float:
    """Parse the leading float of ``text``."""
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
class MonitorRule:
    """How a named output should be configured."""

    name: str = ""
    resolution: Vector = Vector(1280, 720)
    offset: Vector = Vector(0, 0)
    scale: float = 1.0
    refresh_rate: float = 60.0
    default_workspace: str = ""
    disabled: bool = False
    transform: int = 0


@dataclass
class ReservedArea:
    """Extra space kept free on each edge of a monitor."""

    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


@dataclass
class WindowRule:
    """A rule and the class or ``title:`` pattern it applies to."""

    rule: str
    value: str


@dataclass
class RuleSet:
    """All rules collected from the configuration."""

    monitor_rules: list[MonitorRule] = field(default_factory=list)
    window_rules: list[WindowRule] = field(default_factory=list)
    reserved_areas: dict[str, ReservedArea] = field(default_factory=dict)
    blur_namespaces: list[str] = field(default_factory=list)

    def clear(self) -> None:
        """Forget every rule."""
        self.monitor_rules.clear()
        self.window_rules.clear()
        self.reserved_areas.clear()
        self.blur_namespaces.clear()

    def _store_monitor_rule(self, rule: MonitorRule) -> None:
        for index, existing in enumerate(self.monitor_rules):
            if existing.name == rule.name:
                self.monitor_rules[index] = rule
                return
        self.monitor_rules.append(rule)

    def handle_monitor(self, args: str) -> None:
        """Apply a ``monitor=`` line. Raises ConfigError on malformed input."""
        try:
            self._handle_monitor(args)
        except ValueError as exc:
            if isinstance(exc, ConfigError):
                raise
            raise ConfigError(f"Invalid monitor rule <{args}>.") from exc

    def _handle_monitor(self, args: str) -> None:
        parts = iter(args.split(","))

        def next_item() -> str:
            return next(parts, "")

        rule = MonitorRule(name=next_item())
        item = next_item()

        if item in ("disable", "disabled"):
            rule.disabled = True
            self._store_monitor_rule(rule)
            return

        if item == "transform":
            transform = _to_int(next_item())
            for existing in self.monitor_rules:
                if existing.name == rule.name:
                    existing.transform = transform
                    return
            return

        if item == "addreserved":
            top = _to_int(next_item())
            bottom = _to_int(next_item())
            left = _to_int(next_item())
            right = _to_int(next_item())
            self.reserved_areas[rule.name] = ReservedArea(top, bottom, left, right)
            return

        if item.startswith("pref"):
            rule.resolution = Vector()
        else:
            width_text, height_text = _split_pair(item, "x")
            rule.resolution = Vector(_to_int(width_text), _to_int(height_text))
            if "@" in item:
                rule.refresh_rate = _to_float(item[item.find("@") + 1 :])

        offset_x, offset_y = _split_pair(next_item(), "x")
        rule.offset = Vector(_to_int(offset_x), _to_int(offset_y))

        rule.scale = _to_float(next_item())

        if next_item() != "":
            raise ConfigError(_OLD_SYNTAX_ERROR)

        self._store_monitor_rule(rule)

    def handle_window_rule(self, value: str) -> None:
        """Apply a ``windowrule=`` line. Raises ConfigError on an unknown rule."""
        rule, pattern = _split_pair(value, ",")
        if not rule or not pattern:
            return
        if rule not in _EXACT_RULES and not rule.startswith(_PREFIX_RULES):
            raise ConfigError(f"Invalid rule found: {rule}")
        self.window_rules.append(WindowRule(rule, pattern))

    def handle_blur_ls(self, value: str) -> None:
        """Add a layer namespace to blur, or remove one with ``remove,<name>``."""
        if value.startswith("remove,"):
            target = value[7:]
            self.blur_namespaces = [ns for ns in self.blur_namespaces if ns != target]
            return
        self.blur_namespaces.append(value)

    def handle_default_workspace(self, value: str) -> None:
        """Set the default workspace of the monitor rule named before the comma."""
        display, workspace = _split_pair(value, ",")
        for rule in self.monitor_rules:
            if rule.name == display:
                rule.default_workspace = workspace
                break

    def monitor_rule_for(self, name: str) -> MonitorRule:
        """The rule for ``name``, else the unnamed rule, else a built-in default."""
        for wanted in (name, ""):
            for rule in self.monitor_rules:
                if rule.name == wanted:
                    return replace(rule)
        return MonitorRule(name="", resolution=Vector(1280, 720), offset=Vector(0, 0), scale=1.0)

    def matching_rules(self, title: str, app_class: str) -> list[WindowRule]:
        """Window rules whose pattern matches the title or class; bad patterns are skipped."""
        matches = []
        for rule in self.window_rules:
            if rule.value.startswith("title:"):
                pattern, subject = rule.value[6:], title
            else:
                pattern, subject = rule.value, app_class
            try:
                if not re.search(pattern, subject):
                    continue
            except re.error:
                continue
            matches.append(replace(rule))
        return matches

    def should_blur_ls(self, namespace: str) -> bool:
        return namespace in self.blur_namespaces