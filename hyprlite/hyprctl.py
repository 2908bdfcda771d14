"""Command-line client that sends requests to the compositor's control socket."""

from __future__ import annotations

import socket
import string
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

USAGE = "\n".join(
    [
        "usage: hyprctl [(opt)flags] [command] [(opt)args]",
        "    ",
        "commands:",
        "    monitors",
        "    workspaces",
        "    clients",
        "    activewindow",
        "    layers",
        "    devices",
        "    dispatch",
        "    keyword",
        "    version",
        "    kill",
        "    splash",
        "    hyprpaper",
        "    reload",
        "    ",
        "flags:",
        "    -j -> output in JSON",
        "    --batch -> execute a batch of commands, separated by ';'",
        "",
    ]
)

CONTROL_SOCKET = ".socket.sock"
HYPRPAPER_SOCKET = ".hyprpaper.sock"
_BUFFER_SIZE = 8192

_PLAIN_COMMANDS = (
    "monitors",
    "clients",
    "workspaces",
    "activewindow",
    "layers",
    "version",
    "kill",
    "splash",
    "devices",
    "reload",
)


class UsageError(Exception):
    """The arguments do not form a request; ``status`` is the exit code to use."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass(frozen=True)
class Request:
    """A payload and the socket it is sent to."""

    payload: str
    socket_name: str = CONTROL_SOCKET


def is_number(text: str, allow_float: bool = False) -> bool:
    """True if every character is a digit or '-' (or '.' when floats are allowed)."""
    return all(
        c in string.digits or c == "-" or (allow_float and c == ".") for c in text
    )


def socket_path(signature: str, name: str) -> str:
    return f"/tmp/hypr/{signature}/{name}"


def _two_params(args: Sequence[str], command: str) -> tuple[str, str]:
    if len(args) < 3:
        raise UsageError(f"{command} requires 2 params", status=0)
    return args[1], args[2]


def build_request(args: Sequence[str]) -> Request:
    """Turn command-line arguments into a request. Raises UsageError."""
    args = list(args)
    if not args:
        raise UsageError(USAGE)

    full_request = ""
    flags = ""
    for arg in args:
        if arg.startswith("-") and not is_number(arg, True):
            if arg == "-j" and "j" not in flags:
                flags += "j"
            elif arg == "--batch":
                full_request = "--batch "
            else:
                raise UsageError(USAGE)
            continue
        full_request += arg + " "

    if not full_request:
        raise UsageError(USAGE)

    full_request = flags + "/" + full_request[:-1]

    if "/--batch" in full_request:
        return Request("[[BATCH]]" + full_request[full_request.find(" ") + 1 :])
    if any("/" + command in full_request for command in _PLAIN_COMMANDS):
        return Request(full_request)
    if "/dispatch" in full_request:
        first, second = _two_params(args, "dispatch")
        return Request(f"/dispatch {first} {second}")
    if "/keyword" in full_request:
        first, second = _two_params(args, "keyword")
        return Request(f"keyword {first} {second}")
    if "/hyprpaper" in full_request:
        first, second = _two_params(args, "hyprpaper")
        return Request(f"{first} {second}", HYPRPAPER_SOCKET)
    if "/--help" in full_request:
        raise UsageError(USAGE, status=0)
    raise UsageError(USAGE)


def send_request(
    payload: str,
    socket_name: str = CONTROL_SOCKET,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Send a payload to the running instance and return its reply.

    Raises ConnectionError when the instance cannot be reached.
    """
    env = environ if environ is not None else __import_env()
    signature = env.get("HYPRLAND_INSTANCE_SIGNATURE")
    if signature is None:
        raise ConnectionError("HYPRLAND_INSTANCE_SIGNATURE was not set! (Is Hyprland running?)")

    path = socket_path(signature, socket_name)
    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    except OSError as exc:
        raise ConnectionError("Couldn't open a socket (1)") from exc

    with sock:
        try:
            sock.connect(path)
        except OSError as exc:
            raise ConnectionError(f"Couldn't connect to {path}. (3)") from exc
        try:
            sock.sendall(payload.encode())
        except OSError as exc:
            raise ConnectionError("Couldn't write (4)") from exc
        try:
            data = sock.recv(_BUFFER_SIZE)
        except OSError as exc:
            raise ConnectionError("Couldn't read (5)") from exc

    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def __import_env() -> Mapping[str, str]:
    import os

    return os.environ


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        request = build_request(args)
    except UsageError as exc:
        print(exc.message)
        return exc.status

    try:
        reply = send_request(request.payload, request.socket_name)
    except ConnectionError as exc:
        print(exc)
        return 0

    print(reply)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())