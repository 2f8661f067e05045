"""Process-wide 8-bit sequence counter.

Disambiguates identifiers minted within the same millisecond.  Every
``next()`` returns the value held before the increment and stores
``(value + 1) mod 256``, so no two calls see the same value until the
counter wraps.
"""

from __future__ import annotations

import logging
import threading

from puid.infra.singleton import singleton

from .metrics import COUNTER_WRAPS_TOTAL

logger = logging.getLogger(__name__)

COUNTER_MAX = 255


class SequenceCounter:
    """Thread-safe wrapping counter.

    The read-modify-write runs under a ``threading.Lock`` held only for
    the increment itself.
    """

    def __init__(self, start: int = 0) -> None:
        if not 0 <= start <= COUNTER_MAX:
            raise ValueError(f"start must be in [0, {COUNTER_MAX}], got {start}")
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the current value and advance, wrapping 255 -> 0."""
        with self._lock:
            value = self._value
            self._value = 0 if value == COUNTER_MAX else value + 1
        if value == COUNTER_MAX:
            COUNTER_WRAPS_TOTAL.inc()
            logger.debug("Sequence counter wrapped")
        return value

    @property
    def value(self) -> int:
        """The value the next call to ``next()`` will return."""
        return self._value


@singleton
def get_sequence_counter() -> SequenceCounter:
    """Return the counter shared by every default generator in the process."""
    return SequenceCounter()
