import logging
from io import BytesIO
from typing import Dict, Iterator, Optional, Tuple

import pytest
from pypdf import PasswordType, PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
    PdfObject,
    TextStringObject,
)

from pdf_encrypt_lite import (
    EncryptionFailedError,
    PdfAlreadyEncryptedError,
    PypdfObjectModel,
    UserAccessPermissions,
    encrypt_document,
    encrypt_payload,
    encrypt_pdf,
    generate_file_id,
)
from pdf_encrypt_lite import _protect

from . import CONTENT, TITLE, make_pdf


class InMemoryObjectModel:
    def __init__(self, objects: Dict[Tuple[int, int], PdfObject], file_id: Optional[bytes] = None):
        self.objects = objects
        self.file_id = file_id
        self.encryption_entry: Optional[DictionaryObject] = None

    def enumerate_objects(self) -> Iterator[Tuple[int, int, PdfObject]]:
        for (idnum, generation) in sorted(self.objects):
            yield idnum, generation, self.objects[(idnum, generation)]

    def replace_object(self, idnum: int, generation: int, value: PdfObject) -> None:
        self.objects[(idnum, generation)] = value

    def get_file_id(self) -> Optional[bytes]:
        return self.file_id

    def set_file_id(self, file_id: bytes) -> None:
        self.file_id = file_id

    def set_encryption_entry(self, entry: DictionaryObject) -> None:
        self.encryption_entry = entry

    def save(self) -> bytes:
        raise NotImplementedError


def _sample_objects() -> Dict[Tuple[int, int], PdfObject]:
    info = DictionaryObject()
    info[NameObject("/Title")] = TextStringObject("Hello")
    info[NameObject("/Kids")] = ArrayObject(
        [
            ByteStringObject(b"abc"),
            NumberObject(3),
            ArrayObject([ByteStringObject(b"nested")]),
            IndirectObject(2, 0, None),
        ]
    )
    info[NameObject("/Filter")] = ByteStringObject(b"keep filter")
    info[NameObject("/DecodeParms")] = ByteStringObject(b"keep parms")

    stream = DecodedStreamObject()
    stream.set_data(b"stream data")
    stream[NameObject("/Length")] = NumberObject(11)
    stream[NameObject("/Note")] = ByteStringObject(b"note")

    standard = DictionaryObject()
    standard[NameObject("/Filter")] = NameObject("/Standard")
    standard[NameObject("/O")] = ByteStringObject(b"owner")

    return {
        (1, 0): info,
        (2, 0): ByteStringObject(b"top level"),
        (3, 1): stream,
        (4, 0): standard,
        (5, 0): NumberObject(42),
    }


def test_encrypt_document_walks_objects():
    model = InMemoryObjectModel(_sample_objects(), file_id=bytes(16))
    encryption = encrypt_document(model, "secret123")
    key = encryption.key
    objects = model.objects

    info = objects[(1, 0)]
    assert info["/Title"] == ByteStringObject(encrypt_payload(b"Hello", key, 1, 0))
    kids = info["/Kids"]
    assert kids[0] == ByteStringObject(encrypt_payload(b"abc", key, 1, 0))
    assert kids[1] == NumberObject(3)
    assert kids[2][0] == ByteStringObject(encrypt_payload(b"nested", key, 1, 0))
    assert isinstance(kids[3], IndirectObject)
    assert info["/Filter"] == ByteStringObject(b"keep filter")
    assert info["/DecodeParms"] == ByteStringObject(b"keep parms")

    assert objects[(2, 0)] == ByteStringObject(encrypt_payload(b"top level", key, 2, 0))

    stream = objects[(3, 1)]
    assert stream.get_data() == encrypt_payload(b"stream data", key, 3, 1)
    assert stream["/Length"] == NumberObject(11)
    assert stream["/Note"] == ByteStringObject(encrypt_payload(b"note", key, 3, 1))

    assert objects[(4, 0)]["/O"] == ByteStringObject(b"owner")
    assert objects[(5, 0)] == NumberObject(42)

    entry = model.encryption_entry
    assert entry is not None
    assert entry["/Filter"] == "/Standard"
    assert bytes(entry["/O"]) == encryption.O
    assert bytes(entry["/U"]) == encryption.U


def test_encrypt_document_skips_existing_encryption_dictionary(caplog):
    model = InMemoryObjectModel(_sample_objects(), file_id=bytes(16))
    with caplog.at_level(logging.WARNING):
        encrypt_document(model, "pw")
    assert "Object 4 0 is a /Standard encryption dictionary" in caplog.text


def test_encrypt_document_file_id_resolution():
    model = InMemoryObjectModel({}, file_id=b"existing")
    assert encrypt_document(model, "pw").id1_entry == b"existing"
    assert model.file_id == b"existing"

    model = InMemoryObjectModel({}, file_id=b"existing")
    encryption = encrypt_document(model, "pw", file_id="00" * 16)
    assert encryption.id1_entry == bytes(16)
    assert model.file_id == bytes(16)

    model = InMemoryObjectModel({})
    encryption = encrypt_document(model, "pw")
    assert len(encryption.id1_entry) == 16
    assert model.file_id == encryption.id1_entry


def test_generate_file_id():
    assert len(generate_file_id()) == 16
    assert len(generate_file_id(8)) == 8
    assert generate_file_id() != generate_file_id()


def test_generate_file_id_falls_back_without_secure_source(monkeypatch, caplog):
    def no_secure_source(length):
        raise NotImplementedError("no urandom")

    monkeypatch.setattr(_protect.secrets, "token_bytes", no_secure_source)
    with caplog.at_level(logging.WARNING):
        file_id = generate_file_id()
    assert len(file_id) == 16
    assert "non-cryptographic generator" in caplog.text


def test_encrypt_pdf_user_password():
    encrypted = encrypt_pdf(make_pdf(), "secret123")
    reader = PdfReader(BytesIO(encrypted))
    assert reader.is_encrypted
    assert reader.decrypt("wrong") == PasswordType.NOT_DECRYPTED
    assert reader.decrypt("secret123") != PasswordType.NOT_DECRYPTED
    assert reader.metadata.title == TITLE
    assert reader.pages[0]["/Contents"].get_data() == CONTENT


def test_encrypt_pdf_owner_password():
    encrypted = encrypt_pdf(make_pdf(), "user123", "owner456")

    reader = PdfReader(BytesIO(encrypted))
    assert reader.decrypt("user123") == PasswordType.USER_PASSWORD
    assert reader.pages[0]["/Contents"].get_data() == CONTENT

    reader = PdfReader(BytesIO(encrypted))
    assert reader.decrypt("owner456") == PasswordType.OWNER_PASSWORD
    assert reader.metadata.title == TITLE


def test_encrypt_pdf_empty_user_password():
    encrypted = encrypt_pdf(make_pdf(), "", "owner456")
    reader = PdfReader(BytesIO(encrypted))
    assert reader.decrypt("") == PasswordType.USER_PASSWORD
    assert reader.pages[0]["/Contents"].get_data() == CONTENT


def test_encrypt_pdf_hides_plaintext():
    encrypted = encrypt_pdf(make_pdf(), "secret123")
    assert CONTENT not in encrypted
    assert TITLE.encode() not in encrypted


def test_encrypt_pdf_encryption_dictionary():
    permissions = int(UserAccessPermissions.all()) & ~int(UserAccessPermissions.MODIFY)
    encrypted = encrypt_pdf(make_pdf(), "pw", permissions=permissions)
    reader = PdfReader(BytesIO(encrypted))
    assert reader.decrypt("pw") != PasswordType.NOT_DECRYPTED
    encrypt = reader.trailer["/Encrypt"].get_object()
    assert encrypt["/Filter"] == "/Standard"
    assert encrypt["/V"] == 2
    assert encrypt["/R"] == 3
    assert encrypt["/Length"] == 128
    assert encrypt["/P"] == -4 - 8


def test_encrypt_pdf_explicit_file_id_is_deterministic():
    source = make_pdf()
    first = encrypt_pdf(source, "secret123", file_id=bytes(16))
    second = encrypt_pdf(source, "secret123", file_id=bytes(16))
    assert first == second


def test_encrypt_pdf_reuses_existing_file_id():
    source = make_pdf(file_id=b"\x11" * 16)
    first = encrypt_pdf(source, "secret123")
    assert first == encrypt_pdf(source, "secret123")
    reader = PdfReader(BytesIO(first))
    assert reader.decrypt("secret123") != PasswordType.NOT_DECRYPTED
    assert reader.metadata.title == TITLE


def test_encrypt_pdf_generates_file_id():
    reader = PdfReader(BytesIO(encrypt_pdf(make_pdf(), "secret123")))
    assert "/ID" in reader.trailer
    assert reader.decrypt("secret123") != PasswordType.NOT_DECRYPTED


def test_encrypt_pdf_wraps_load_errors(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(EncryptionFailedError, match="Failed to encrypt PDF") as exc_info:
            encrypt_pdf(b"this is not a pdf", "pw")
    assert exc_info.value.__cause__ is not None
    assert "PDF encryption error" in caplog.text


def test_encrypt_pdf_rejects_encrypted_input():
    encrypted = encrypt_pdf(make_pdf(), "pw")
    with pytest.raises(EncryptionFailedError) as exc_info:
        encrypt_pdf(encrypted, "pw")
    assert isinstance(exc_info.value.__cause__, PdfAlreadyEncryptedError)


def test_encrypt_document_on_pypdf_writer():
    writer = PdfWriter(clone_from=PdfReader(BytesIO(make_pdf())))
    model = PypdfObjectModel.from_writer(writer)
    assert model.writer is writer

    encryption = encrypt_document(model, "user123", "owner456", file_id=bytes(16))
    assert model.get_file_id() == bytes(16)

    reader = PdfReader(BytesIO(model.save()))
    assert reader.decrypt("owner456") == PasswordType.OWNER_PASSWORD
    assert reader.pages[0]["/Contents"].get_data() == CONTENT
    assert bytes(encryption.U[16:]) == bytes(16)
