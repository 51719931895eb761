import random
import secrets
from typing import Optional, Union

from ._encryption import Encryption
from ._utils import logger_error, logger_warning
from .constants import UserAccessPermissions
from .errors import EncryptionFailedError
from .generic import PdfObjectModel, PypdfObjectModel, hex_to_bytes


def generate_file_id(length: int = 16) -> bytes:
    """
    Generate a file identifier for a document without a trailer /ID.

    The operating system's secure random source is used. When the platform
    has none, the identifier comes from :mod:`random` instead and a warning
    is logged: the identifier is only a salt for the key derivation, so a
    predictable one weakens the document but does not break it.
    """
    try:
        return secrets.token_bytes(length)
    except (NotImplementedError, OSError) as exc:
        logger_warning(
            f"No secure random source available ({exc}); "
            "the file identifier is generated with a non-cryptographic generator",
            __name__,
        )
        return bytes(random.getrandbits(8) for _ in range(length))


def encrypt_document(
    model: PdfObjectModel,
    user_password: str,
    owner_password: Optional[str] = None,
    *,
    permissions: int = UserAccessPermissions.all(),
    file_id: Optional[Union[bytes, str]] = None,
) -> Encryption:
    """
    Encrypt every string and stream of ``model`` with RC4 128-bit (revision 3).

    Args:
        model: The document.
        user_password: The password needed to open the document.
        owner_password: The password granting full access. Defaults to the
            user password when ``None`` or empty.
        permissions: The /P flags, see
            :class:`~pdf_encrypt_lite.constants.UserAccessPermissions`.
        file_id: Overrides the document's file identifier; bytes or a hex
            string. Without it the trailer's /ID is used, and generated
            when the document has none.

    Returns:
        The encryption parameters that were applied.
    """
    if file_id is not None:
        id1_entry = hex_to_bytes(file_id) if isinstance(file_id, str) else bytes(file_id)
        model.set_file_id(id1_entry)
    else:
        existing = model.get_file_id()
        if existing is None:
            id1_entry = generate_file_id()
            model.set_file_id(id1_entry)
        else:
            id1_entry = existing

    encryption = Encryption.make(user_password, owner_password, permissions, id1_entry)

    for idnum, generation, obj in model.enumerate_objects():
        encrypted = encryption.encrypt_object(obj, idnum, generation)
        if encrypted is not obj:
            model.replace_object(idnum, generation, encrypted)

    model.set_encryption_entry(encryption.write_entry())
    return encryption


def encrypt_pdf(
    pdf_bytes: bytes,
    user_password: str,
    owner_password: Optional[str] = None,
    *,
    permissions: int = UserAccessPermissions.all(),
    file_id: Optional[Union[bytes, str]] = None,
) -> bytes:
    """
    Password protect a PDF.

    Args:
        pdf_bytes: The PDF file.
        user_password: The password needed to open the document.
        owner_password: The password granting full access.
        permissions: The /P flags.
        file_id: Overrides the document's file identifier.

    Returns:
        The encrypted PDF file.

    Raises:
        EncryptionFailedError: If the document could not be loaded,
            encrypted or saved. The original exception is chained.
    """
    try:
        model = PypdfObjectModel.from_bytes(pdf_bytes)
        encrypt_document(
            model,
            user_password,
            owner_password,
            permissions=permissions,
            file_id=file_id,
        )
        data = model.save()
    except Exception as exc:
        logger_error(f"PDF encryption error: {exc!r}", __name__)
        raise EncryptionFailedError(f"Failed to encrypt PDF: {exc}") from exc
    return data
