"""Constants for the SJCL-compatible CCM construction.

This module defines the IntEnum SjclParam holding the fixed sizes and
counts shared with the JavaScript decryptor, and the password generator
defaults. Changing any SjclParam value breaks interoperability.
"""

from enum import IntEnum


class SjclParam(IntEnum):
    """Fixed parameters of the SJCL "ccm" encryption format.

    Attributes:
        BLOCK_SIZE (int): AES block size in bytes.
        KEY_LENGTH (int): Length of the PBKDF2-derived AES-128 key in bytes.
        PBKDF2_ITERATIONS (int): PBKDF2-HMAC-SHA256 iteration count.
        TAG_LENGTH (int): Length of the truncated CCM authentication tag in bytes.
        IV_LENGTH (int): Length of the random IV emitted in the output.
        SALT_LENGTH (int): Length of the random PBKDF2 salt.
        MIN_LENGTH_FIELD (int): Smallest size of the CCM length field (L).
    """

    BLOCK_SIZE = 16
    KEY_LENGTH = 16
    PBKDF2_ITERATIONS = 1000
    TAG_LENGTH = 8
    IV_LENGTH = 16
    SALT_LENGTH = 13
    MIN_LENGTH_FIELD = 2


PASSWORD_FILLER = "X"
DEFAULT_PASSWORD_ENTROPY = 18
