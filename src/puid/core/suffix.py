"""Random alphanumeric tail of an identifier."""

import secrets
import string

from .errors import InvalidEntropy

ALPHABET = string.ascii_letters + string.digits  # a-z A-Z 0-9, ~5.95 bits/char


def random_suffix(length: int) -> str:
    """Draw ``length`` characters uniformly from ``ALPHABET``.

    ``secrets`` reads from the OS entropy source, so concurrent callers
    share no mutable state.

    Raises:
        InvalidEntropy: if ``length`` is negative or not an int.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise InvalidEntropy(length)
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
