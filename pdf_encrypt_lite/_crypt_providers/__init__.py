from pdf_encrypt_lite._crypt_providers._base import CryptBase
from pdf_encrypt_lite._crypt_providers._md5 import md5
from pdf_encrypt_lite._crypt_providers._rc4 import CryptRC4, rc4_decrypt, rc4_encrypt

__all__ = [
    "CryptBase",
    "CryptRC4",
    "md5",
    "rc4_decrypt",
    "rc4_encrypt",
]
