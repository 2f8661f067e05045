"""Identifier generation exceptions."""

from __future__ import annotations


class PuidError(Exception):
    """Base class for every error raised by puid."""


class InvalidPrefix(PuidError, ValueError):
    """Raised when a prefix is empty, too long, or not ASCII alphanumeric."""

    def __init__(self, prefix: object, max_length: int) -> None:
        super().__init__(
            f"Invalid prefix {prefix!r}: expected 1 to {max_length} "
            "ASCII alphanumeric characters."
        )
        self.prefix = prefix


class InvalidEntropy(PuidError, ValueError):
    """Raised when the random suffix length is not a non-negative int."""

    def __init__(self, entropy: object, max_entropy: int | None = None) -> None:
        expected = (
            "a non-negative integer"
            if max_entropy is None
            else f"an integer between 0 and {max_entropy}"
        )
        super().__init__(f"Invalid random length {entropy!r}: expected {expected}.")
        self.entropy = entropy
