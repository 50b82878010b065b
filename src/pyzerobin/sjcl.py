"""SJCL-compatible password-based AES-CCM encryption.

This module produces output that the Stanford Javascript Crypto Library
(SJCL) decrypts with its default "ccm" mode: a 16-byte AES key derived by
PBKDF2-HMAC-SHA256 (1000 iterations), RFC 3610 CCM formatting with an
8-byte tag, and a 16-byte IV of which only the first 15 - L bytes form the
nonce.

Example:
    >>> content = encrypt("secret-word", b"hello")
    >>> sorted(content.to_dict())
    ['ct', 'iv', 'salt']
"""

from dataclasses import dataclass
import json
import logging
from Crypto.Cipher import AES
from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import PBKDF2
from Crypto.Util.strxor import strxor
from .const import SjclParam
from .entropy import RandomSource, default_source, read_entropy
from .utils import to_web

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Content:
    """Encrypted content. Each field is a to_web-encoded byte string.

    Attributes:
        iv (str): Random 16-byte initialization vector.
        salt (str): Random 13-byte PBKDF2 salt.
        ct (str): Ciphertext followed by the 8-byte authentication tag.
    """

    iv: str
    salt: str
    ct: str

    def to_dict(self) -> dict[str, str]:
        """Return the fields as a dict with keys in iv, salt, ct order."""
        return {"iv": self.iv, "salt": self.salt, "ct": self.ct}

    def to_json(self) -> str:
        """Serialize the content as a compact JSON object."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


def derive_key(password: str, salt: bytes) -> bytes:
    """Derive the AES key from a password and salt.

    Uses PBKDF2 with HMAC-SHA256, the same defaults as sjcl.misc.pbkdf2.
    The password is encoded as UTF-8.

    Args:
        password (str): The user password. May be empty.
        salt (bytes): Random salt.

    Returns:
        bytes: A 16-byte AES-128 key.
    """
    return PBKDF2(
        password.encode("utf-8"),
        salt,
        dkLen=SjclParam.KEY_LENGTH,
        count=SjclParam.PBKDF2_ITERATIONS,
        hmac_hash_module=SHA256,
    )


def length_field_size(length: int) -> int:
    """Return the CCM length field size L for a message length.

    L is the number of bytes needed to hold the length in big endian,
    but never less than 2.

    Args:
        length (int): Plaintext length in bytes.

    Returns:
        int: The length field size in bytes.

    Raises:
        ValueError: If length is negative.
    """
    if length < 0:
        raise ValueError(f"Negative message length: {length}")
    return max(SjclParam.MIN_LENGTH_FIELD, (length.bit_length() + 7) // 8)


def format_b0(nonce: bytes, length: int, length_size: int) -> bytes:
    """Build the first CBC-MAC block (B0) without associated data.

    Args:
        nonce (bytes): CCM nonce of 15 - length_size bytes.
        length (int): Plaintext length in bytes.
        length_size (int): Size of the length field (L).

    Returns:
        bytes: The 16-byte B0 block.
    """
    flags = 8 * ((SjclParam.TAG_LENGTH - 2) // 2) + (length_size - 1)
    return bytes([flags]) + nonce + length.to_bytes(length_size, "big")


def format_a0(nonce: bytes, length_size: int) -> bytes:
    """Build the counter block A0 that encrypts the tag."""
    return bytes([length_size - 1]) + nonce + bytes(length_size)


def increment_counter(block: bytes) -> bytes:
    """Add one to a block treated as a big endian integer, wrapping on overflow."""
    size = len(block)
    value = (int.from_bytes(block, "big") + 1) % (1 << (8 * size))
    return value.to_bytes(size, "big")


def cbc_mac(key: bytes, b0: bytes, plaintext: bytes) -> bytes:
    """Compute the CCM CBC-MAC over B0 and the zero-padded plaintext.

    Args:
        key (bytes): 16-byte AES key.
        b0 (bytes): The B0 block.
        plaintext (bytes): The message; the last chunk is padded with zeros.

    Returns:
        bytes: The full 16-byte MAC value before truncation.
    """
    block_size = SjclParam.BLOCK_SIZE
    cipher = AES.new(key, AES.MODE_ECB)
    mac = cipher.encrypt(b0)
    for i in range(0, len(plaintext), block_size):
        chunk = plaintext[i : i + block_size].ljust(block_size, b"\x00")
        mac = cipher.encrypt(strxor(mac, chunk))
    return mac


def ccm_encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """Encrypt and authenticate plaintext with AES-CCM as SJCL does.

    Only the first 15 - L bytes of iv are used as the nonce, where L is the
    length field size for the plaintext.

    Args:
        key (bytes): 16-byte AES key.
        iv (bytes): 16-byte IV.
        plaintext (bytes): The data to encrypt.

    Returns:
        bytes: Ciphertext followed by the 8-byte tag.
    """
    length = len(plaintext)
    length_size = length_field_size(length)
    nonce = iv[: 15 - length_size]
    logger.debug("CCM length=%d, L=%d, nonce_size=%d", length, length_size, len(nonce))

    ecb = AES.new(key, AES.MODE_ECB)
    b0 = format_b0(nonce, length, length_size)
    a0 = format_a0(nonce, length_size)
    tag = cbc_mac(key, b0, plaintext)[: SjclParam.TAG_LENGTH]
    encrypted_tag = strxor(ecb.encrypt(a0)[: SjclParam.TAG_LENGTH], tag)

    ctr = AES.new(key, AES.MODE_CTR, nonce=b"", initial_value=increment_counter(a0))
    return ctr.encrypt(plaintext) + encrypted_tag


def encrypt(
    password: str, plaintext: bytes, source: RandomSource = default_source
) -> Content:
    """Encrypt data with a password in the SJCL "ccm" format.

    A fresh IV and salt are drawn for every call, in that order.

    Args:
        password (str): The password.
        plaintext (bytes): The data to encrypt. May be empty.
        source (RandomSource): Random byte source for the IV and salt.

    Returns:
        Content: The encoded IV, salt and ciphertext.

    Raises:
        EntropyError: If the random source fails. No content is returned.
    """
    iv = read_entropy(SjclParam.IV_LENGTH, source)
    salt = read_entropy(SjclParam.SALT_LENGTH, source)
    key = derive_key(password, salt)
    ct = ccm_encrypt(key, iv, plaintext)
    logger.debug("Encrypted %d bytes into %d bytes.", len(plaintext), len(ct))
    return Content(iv=to_web(iv), salt=to_web(salt), ct=to_web(ct))
