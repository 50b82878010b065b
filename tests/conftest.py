import hashlib
import pytest
from Crypto.Cipher import AES
from pyzerobin.utils import from_web


class FixedSource:
    """Random source returning preset chunks in order."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = list(chunks)
        self.requests: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.requests.append(n)
        return self._chunks.pop(0)


def sjcl_decrypt(password: str, content: dict) -> bytes:
    """Decrypt content the way SJCL does, using pycryptodome's own CCM mode."""
    iv = from_web(content["iv"])
    salt = from_web(content["salt"])
    ct = from_web(content["ct"])
    key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 1000, 16)
    data, tag = ct[:-8], ct[-8:]
    length_size = max(2, (len(data).bit_length() + 7) // 8)
    cipher = AES.new(key, AES.MODE_CCM, nonce=iv[: 15 - length_size], mac_len=8)
    return cipher.decrypt_and_verify(data, tag)


@pytest.fixture
def make_source():
    return FixedSource


@pytest.fixture
def decrypt():
    return sjcl_decrypt
