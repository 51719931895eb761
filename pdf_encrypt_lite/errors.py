"""
All errors/exceptions pdf_encrypt_lite raises.

The cryptographic core only raises :class:`InvalidKeyError`; everything that
goes wrong while loading, walking or saving a document surfaces as
:class:`EncryptionFailedError`.
"""


class PdfEncryptLiteError(Exception):
    """Base class for all exceptions raised by pdf_encrypt_lite."""


class InvalidKeyError(PdfEncryptLiteError, ValueError):
    """Raised when a cipher is constructed from unusable key material."""


class PdfAlreadyEncryptedError(PdfEncryptLiteError):
    """Raised when the input document already carries an /Encrypt entry."""


class EncryptionFailedError(PdfEncryptLiteError):
    """
    Raised when a document could not be encrypted.

    The underlying exception is available as ``__cause__``.
    """
