"""Prefixed, practically-unique identifiers in the ``ch_xxxx`` style.

An identifier joins a caller prefix to a base-36 millisecond timestamp,
an 8-bit process-wide sequence counter, the base-36 process id and a
random alphanumeric tail::

    >>> generate_id("foo")       # doctest: +SKIP
    'foo_mgx2c1k805jw9Xk2pQa7LmZr'
    >>> generate_id("bar", 24)   # doctest: +SKIP
    'bar_mgx2c1l115jwOz1P7kecCTaqUGq1wgKfHGZC'
"""

from .core.base36 import to_base36
from .core.counter import SequenceCounter, get_sequence_counter
from .core.errors import InvalidEntropy, InvalidPrefix, PuidError
from .core.generator import (
    SEPARATOR,
    IdGenerator,
    Puid,
    PuidBuilder,
    generate_id,
    get_default_generator,
)
from .core.suffix import ALPHABET, random_suffix

__all__ = [
    "ALPHABET",
    "IdGenerator",
    "InvalidEntropy",
    "InvalidPrefix",
    "Puid",
    "PuidBuilder",
    "PuidError",
    "SEPARATOR",
    "SequenceCounter",
    "generate_id",
    "get_default_generator",
    "get_sequence_counter",
    "random_suffix",
    "to_base36",
]
