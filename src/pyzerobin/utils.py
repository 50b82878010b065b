"""Text helpers for the encrypted content fields.

to_web/from_web convert raw bytes to and from padding-stripped URL-safe
base64, and make_password builds an alphanumeric password from random bytes.
"""

import base64
from .const import PASSWORD_FILLER
from .entropy import RandomSource, default_source, read_entropy


def to_web(data: bytes) -> str:
    """Encode bytes as URL-safe base64 without trailing "=" padding.

    Args:
        data (bytes): Raw bytes to encode.

    Returns:
        str: The encoded text.
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def from_web(text: str) -> bytes:
    """Decode text produced by to_web back into raw bytes.

    Args:
        text (str): Padding-stripped URL-safe base64 text.

    Returns:
        bytes: The decoded bytes.

    Raises:
        binascii.Error: If the text is not valid base64.
    """
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def make_password(n: int, source: RandomSource = default_source) -> str:
    """Generate a password from n random bytes.

    The bytes are encoded with to_web and every non-alphanumeric character
    is replaced with a filler, so the result is easy to type.

    Args:
        n (int): Number of random bytes of entropy.
        source (RandomSource): Random byte source.

    Returns:
        str: The generated password.

    Raises:
        EntropyError: If the random source fails.
    """
    encoded = to_web(read_entropy(n, source))
    return "".join(c if c.isalnum() else PASSWORD_FILLER for c in encoded)
