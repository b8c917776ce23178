"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens.
Polling is bounded so the loop can redraw between keys; I/O failures surface
as ``InputError``.
"""

from __future__ import annotations

import os
import select

from ..errors import InputError

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x03": "CTRL_C",
}

_ARROW_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _poll(fd: int, timeout_ms: int) -> bool:
    try:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    except (OSError, ValueError) as exc:
        raise InputError(f"failed to poll terminal input: {exc}") from exc
    return bool(ready)


def _read_byte(fd: int) -> bytes:
    try:
        return os.read(fd, 1)
    except OSError as exc:
        raise InputError(f"failed to read terminal input: {exc}") from exc


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if not _poll(fd, timeout_ms):
        return None
    ch = _read_byte(fd)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    first = lead[0]
    if first >= 0xF0:
        extra = 3
    elif first >= 0xE0:
        extra = 2
    elif first >= 0xC0:
        extra = 1
    else:
        extra = 0
    data = lead
    for _ in range(extra):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when the poll times out or input ends."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None and not _poll(fd, timeout_ms):
            return ""
        ch = _read_byte(fd)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]
    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROW_KEYS:
        return _ARROW_KEYS[seq]
    # Drain unsupported CSI sequences up to their final byte.
    while seq is not None and not (b"@" <= seq <= b"~"):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "ESC"
