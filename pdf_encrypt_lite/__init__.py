"""
pdf_encrypt_lite password protects PDF files.

It implements the standard security handler with 128-bit RC4 (revision 3),
including the MD5 and RC4 primitives it is built from, and uses pypdf to
read and write the document.

You can read the full docs in README.md.
"""

from ._crypt_providers import CryptRC4, md5
from ._encryption import (
    AlgV4,
    CryptFilter,
    EncryptAlgorithm,
    Encryption,
    compute_object_key,
    derive_file_key,
    derive_owner_value,
    derive_user_value,
    encrypt_payload,
    pad_password,
)
from ._protect import encrypt_document, encrypt_pdf, generate_file_id
from ._version import __version__
from .constants import UserAccessPermissions
from .errors import (
    EncryptionFailedError,
    InvalidKeyError,
    PdfAlreadyEncryptedError,
    PdfEncryptLiteError,
)
from .generic import PdfObjectModel, PypdfObjectModel, bytes_to_hex, hex_to_bytes

RC4 = CryptRC4

__all__ = [
    "__version__",
    "AlgV4",
    "CryptFilter",
    "CryptRC4",
    "EncryptAlgorithm",
    "Encryption",
    "EncryptionFailedError",
    "InvalidKeyError",
    "PdfAlreadyEncryptedError",
    "PdfEncryptLiteError",
    "PdfObjectModel",
    "PypdfObjectModel",
    "RC4",
    "UserAccessPermissions",
    "bytes_to_hex",
    "compute_object_key",
    "derive_file_key",
    "derive_owner_value",
    "derive_user_value",
    "encrypt_document",
    "encrypt_payload",
    "encrypt_pdf",
    "generate_file_id",
    "hex_to_bytes",
    "md5",
    "pad_password",
]
