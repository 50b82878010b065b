"""Random byte source used for salts, IVs and generated passwords.

The source is passed around as a plain callable so callers and tests can
inject deterministic bytes instead of the operating system CSPRNG.
"""

import logging
from typing import Callable
from Crypto.Random import get_random_bytes

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]

default_source: RandomSource = get_random_bytes


class EntropyError(RuntimeError):
    """Raised when the random source cannot supply the requested bytes."""


def read_entropy(n: int, source: RandomSource = default_source) -> bytes:
    """Read exactly n random bytes from the given source.

    Args:
        n (int): Number of bytes to read.
        source (RandomSource): Callable returning n random bytes.

    Returns:
        bytes: The random bytes.

    Raises:
        ValueError: If n is negative.
        EntropyError: If the source fails or returns the wrong number of bytes.
    """
    if n < 0:
        raise ValueError(f"Negative byte count: {n}")
    try:
        data = source(n)
    except OSError as e:
        raise EntropyError(f"Failed to read {n} random bytes.") from e
    if len(data) != n:
        raise EntropyError(f"Random source returned {len(data)} bytes, expected {n}.")
    return bytes(data)
