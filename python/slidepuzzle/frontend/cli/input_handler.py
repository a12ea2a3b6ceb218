"""Single-keypress reader for the terminal frontend.

Returns the same key names :meth:`GameSession.handle_key` understands:
``"up"``/``"down"``/``"left"``/``"right"`` for the arrow keys, ``"space"``
for the space bar, ``"quit"`` for Escape / Ctrl-C, ``"enter"``, and the
lower-cased character for everything else printable.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

_SPECIAL: dict[str, str] = {
    " ": "space",
    "\x03": "quit",  # Ctrl-C
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
}

# Final byte of the ESC [ x sequences sent by arrow keys.
_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# Second byte of the Windows 0xE0 / 0x00 arrow prefixes.
_WINDOWS_ARROWS: dict[str, str] = {
    "H": "up",
    "P": "down",
    "M": "right",
    "K": "left",
}


def _resolve(ch: str) -> str:
    if ch in _SPECIAL:
        return _SPECIAL[ch]
    return ch.lower() if ch.isprintable() else ""


# -- Windows ------------------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "")
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


# -- Unix ---------------------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def ready(wait: float | None) -> bool:
        return bool(select.select([fd], [], [], wait)[0])

    def read1() -> str:
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        if not ready(timeout):
            return None

        ch = read1()
        if ch != "\x1b":
            return _resolve(ch)

        # Arrow keys: ESC [ A/B/C/D; a bare ESC quits.
        if not ready(0.1) or read1() != "[":
            return "quit"
        if not ready(0.1):
            return ""
        return _ARROW_MAP.get(read1(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its name."""
    key = _read(None)
    return key or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` if nothing arrives within *timeout* s."""
    return _read(timeout)
