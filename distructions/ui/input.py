"""Single-key input from the controlling terminal.

Keys are returned as the abstract names the selection controller binds:
``up``, ``down``, ``home``, ``end``, ``enter``, ``esc``, ``ctrl+c`` or the typed
character. ``None`` means input is exhausted.
"""

from __future__ import annotations

import os
import select
import sys
import time
from typing import Optional

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - Windows
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

_ESC_SEQUENCE_TIMEOUT = 0.3
_ESC_POLL_INTERVAL = 0.05
_MAX_ESC_SEQUENCE = 16

_ESCAPE_KEYS = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "OA": "up",
    "OB": "down",
    "[H": "home",
    "[F": "end",
    "OH": "home",
    "OF": "end",
    "[1~": "home",
    "[7~": "home",
    "[4~": "end",
    "[8~": "end",
}


def translate_char(ch: str) -> str:
    if ch in {"\r", "\n"}:
        return "enter"
    if ch == "\x03":
        return "ctrl+c"
    if ch == "\x1b":
        return "esc"
    return ch


UNKNOWN_KEY = "unknown"


def translate_escape_sequence(sequence: str) -> str:
    if not sequence:
        return "esc"
    return _ESCAPE_KEYS.get(sequence, UNKNOWN_KEY)


def _read_byte(fd: int) -> Optional[str]:
    try:
        data = os.read(fd, 1)
    except OSError:
        return None
    if not data:
        return None
    return data.decode("latin-1")


def _read_escape_sequence(fd: int) -> str:
    chars = []
    deadline = time.monotonic() + _ESC_SEQUENCE_TIMEOUT
    while len(chars) < _MAX_ESC_SEQUENCE and time.monotonic() < deadline:
        try:
            rlist, _, _ = select.select([fd], [], [], _ESC_POLL_INTERVAL)
        except (OSError, ValueError):
            break
        if not rlist:
            break
        next_ch = _read_byte(fd)
        if not next_ch:
            break
        chars.append(next_ch)
        if len(chars) > 1 and (next_ch.isalpha() or next_ch == "~"):
            break
    return "".join(chars)


def read_keypress() -> Optional[str]:
    if termios is None or tty is None or not sys.stdin.isatty():
        ch = sys.stdin.read(1)
        return translate_char(ch) if ch else None

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = _read_byte(fd)
        if ch is None:
            return None
        if ch == "\x1b":
            return translate_escape_sequence(_read_escape_sequence(fd))
        return translate_char(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
