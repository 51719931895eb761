from typing import Union

from pdf_encrypt_lite._crypt_providers._base import CryptBase
from pdf_encrypt_lite.errors import InvalidKeyError


class CryptRC4(CryptBase):
    """
    RC4 stream cipher.

    The permutation table and both cursors are kept on the instance, so
    consecutive calls to :meth:`process` continue one keystream. Build a new
    instance for every independent encryption.

    Raises:
        InvalidKeyError: If the key is empty or longer than 256 bytes.
    """

    def __init__(self, key: Union[bytes, bytearray]) -> None:
        if not 1 <= len(key) <= 256:
            raise InvalidKeyError(
                f"RC4 key must be 1 to 256 bytes long, got {len(key)}"
            )
        self.s = bytearray(range(256))
        j = 0
        for i in range(256):
            j = (j + self.s[i] + key[i % len(key)]) % 256
            self.s[i], self.s[j] = self.s[j], self.s[i]
        self.i = 0
        self.j = 0

    def process(self, data: bytes) -> bytes:
        s = self.s
        i, j = self.i, self.j
        out = bytearray(len(data))
        for n, byte in enumerate(data):
            i = (i + 1) % 256
            j = (j + s[i]) % 256
            s[i], s[j] = s[j], s[i]
            out[n] = byte ^ s[(s[i] + s[j]) % 256]
        self.i, self.j = i, j
        return bytes(out)

    def encrypt(self, data: bytes) -> bytes:
        return self.process(data)

    def decrypt(self, data: bytes) -> bytes:
        return self.process(data)


def rc4_encrypt(key: bytes, data: bytes) -> bytes:
    return CryptRC4(key).encrypt(data)


def rc4_decrypt(key: bytes, data: bytes) -> bytes:
    return CryptRC4(key).decrypt(data)
