"""Identifier composition.

An identifier has the shape::

    <prefix>_<time_b36><counter_b36><pid_b36><random_suffix>

- ``time_b36``: milliseconds since the Unix epoch
- ``counter_b36``: the process-wide 8-bit sequence counter (1-2 chars)
- ``pid_b36``: the OS process id
- ``random_suffix``: ``entropy`` characters from ``A-Za-z0-9``

e.g. ``foo_mgx2c1k805jw9Xk2pQa7LmZr``.  Prefixes are 1 to 8 ASCII
alphanumeric characters, so the ``_`` after the prefix is the only one
in the identifier.

Usage::

    from puid import Puid, generate_id

    generate_id("foo")
    generate_id("bar", 24)
    Puid.builder().prefix("baz").entropy(6).build()
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from puid.configs.config import get_puid_config
from puid.configs.system import GeneratorConfig
from puid.infra.singleton import singleton

from .base36 import (
    current_millis,
    encode_process_id,
    encode_time,
    process_id,
    to_base36,
)
from .counter import SequenceCounter, get_sequence_counter
from .errors import InvalidEntropy, InvalidPrefix
from .metrics import IDS_GENERATED_TOTAL, REJECTIONS_TOTAL
from .suffix import random_suffix

logger = logging.getLogger(__name__)

SEPARATOR = "_"


class IdGenerator:
    """Compose identifiers from a clock, a counter, the pid and random chars.

    Parameters
    ----------
    counter
        Sequence counter to draw from.  Defaults to the process-wide one;
        pass a fresh ``SequenceCounter`` to isolate tests.
    default_entropy
        Random suffix length used when ``generate`` gets none.
    max_entropy
        Largest accepted random suffix length.
    max_prefix_length
        Longest accepted prefix.
    clock
        Returns milliseconds since the epoch.
    pid
        Returns the OS process id.
    """

    def __init__(
        self,
        counter: Optional[SequenceCounter] = None,
        default_entropy: int = 12,
        max_entropy: int = 255,
        max_prefix_length: int = 8,
        clock: Callable[[], int] = current_millis,
        pid: Callable[[], int] = process_id,
    ) -> None:
        self.counter = counter if counter is not None else get_sequence_counter()
        self.max_entropy = max_entropy
        self.max_prefix_length = max_prefix_length
        self.default_entropy = self.validate_entropy(default_entropy)
        self._clock = clock
        self._pid = pid

    @classmethod
    def from_config(
        cls, config: GeneratorConfig, counter: Optional[SequenceCounter] = None
    ) -> IdGenerator:
        return cls(
            counter=counter,
            default_entropy=config.default_entropy,
            max_entropy=config.max_entropy,
            max_prefix_length=config.max_prefix_length,
        )

    def validate_prefix(self, prefix: object) -> str:
        """Return ``prefix`` if it is 1..max ASCII alphanumeric characters.

        Raises:
            InvalidPrefix: otherwise.
        """
        if (
            not isinstance(prefix, str)
            or not 1 <= len(prefix) <= self.max_prefix_length
            or not (prefix.isascii() and prefix.isalnum())
        ):
            REJECTIONS_TOTAL.labels(reason="prefix").inc()
            logger.debug("Rejected prefix %r", prefix)
            raise InvalidPrefix(prefix, self.max_prefix_length)
        return prefix

    def validate_entropy(self, entropy: object) -> int:
        """Return ``entropy`` if it is an int in ``[0, max_entropy]``.

        Raises:
            InvalidEntropy: otherwise.
        """
        if (
            isinstance(entropy, bool)
            or not isinstance(entropy, int)
            or not 0 <= entropy <= self.max_entropy
        ):
            REJECTIONS_TOTAL.labels(reason="entropy").inc()
            logger.debug("Rejected random length %r", entropy)
            raise InvalidEntropy(entropy, self.max_entropy)
        return entropy

    def generate(self, prefix: str, random_length: Optional[int] = None) -> str:
        """Build a new identifier.

        Raises:
            InvalidPrefix: for an empty, too long or non-alphanumeric prefix.
            InvalidEntropy: for a negative or too large ``random_length``.
        """
        prefix = self.validate_prefix(prefix)
        entropy = (
            self.default_entropy
            if random_length is None
            else self.validate_entropy(random_length)
        )

        parts = [
            prefix,
            SEPARATOR,
            encode_time(self._clock()),
            to_base36(self.counter.next()),
            encode_process_id(self._pid()),
            random_suffix(entropy),
        ]
        IDS_GENERATED_TOTAL.inc()
        return "".join(parts)


class PuidBuilder:
    """Fluent front end to ``IdGenerator.generate``.

    ``prefix`` and ``entropy`` validate eagerly so a bad value is reported
    where it is set, not at ``build``.
    """

    def __init__(self, generator: IdGenerator) -> None:
        self._generator = generator
        self._prefix: Optional[str] = None
        self._entropy = generator.default_entropy

    def prefix(self, prefix: str) -> PuidBuilder:
        self._prefix = self._generator.validate_prefix(prefix)
        return self

    def entropy(self, entropy: int) -> PuidBuilder:
        self._entropy = self._generator.validate_entropy(entropy)
        return self

    def build(self) -> str:
        if self._prefix is None:
            raise InvalidPrefix("", self._generator.max_prefix_length)
        return self._generator.generate(self._prefix, self._entropy)


class Puid:
    """Entry point for the builder API."""

    @staticmethod
    def builder(generator: Optional[IdGenerator] = None) -> PuidBuilder:
        if generator is None:
            generator = get_default_generator()
        return PuidBuilder(generator)


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------


@singleton
def get_default_generator() -> IdGenerator:
    """Build the default generator from ``PuidConfig`` on first use."""
    config = get_puid_config().generator
    logger.info(
        "Default id generator ready (default_entropy=%d, max_prefix_length=%d)",
        config.default_entropy,
        config.max_prefix_length,
    )
    return IdGenerator.from_config(config)


def generate_id(prefix: str, random_length: Optional[int] = None) -> str:
    """Generate a prefixed identifier with the default generator.

    Args:
        prefix: Short ASCII alphanumeric tag (e.g. ``"ch"``, ``"user"``).
        random_length: Number of random characters at the end. Defaults
            to ``generator.default_entropy`` (12).

    Returns:
        ``"{prefix}_{time}{counter}{pid}{random}"`` string.
    """
    return get_default_generator().generate(prefix, random_length)
