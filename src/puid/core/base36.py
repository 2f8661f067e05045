"""Base-36 encoding of the time and process id parts of an identifier."""

from __future__ import annotations

import functools
import os
import string
import time

BASE36_DIGITS = string.digits + string.ascii_lowercase
BASE = len(BASE36_DIGITS)


def to_base36(value: int) -> str:
    """Encode a non-negative integer with ``0-9a-z``.

    No leading zeros and no sign; ``0`` encodes as ``"0"``.

    Raises:
        ValueError: if ``value`` is negative.
    """
    if value < 0:
        raise ValueError(f"Cannot base-36 encode negative value {value}")
    if value == 0:
        return "0"
    chars: list[str] = []
    while value:
        value, remainder = divmod(value, BASE)
        chars.append(BASE36_DIGITS[remainder])
    return "".join(reversed(chars))


def current_millis() -> int:
    """Whole milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def process_id() -> int:
    """OS process id, read on every call so forked children see their own."""
    return os.getpid()


def encode_time(millis: int) -> str:
    return to_base36(millis)


@functools.lru_cache(maxsize=8)
def encode_process_id(pid: int) -> str:
    return to_base36(pid)
