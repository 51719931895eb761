"""
The boundary between the security handler and a PDF object model.

The handler needs very little from a document: the list of indirect
objects, a way to tell strings, streams, dictionaries and arrays apart, a
way to swap a top-level value, and access to the trailer's file identifier
and /Encrypt entry. :class:`PdfObjectModel` states exactly that;
:class:`PypdfObjectModel` satisfies it on top of pypdf.
"""

from enum import Enum
from io import BytesIO
from typing import Iterator, Optional, Protocol, Tuple

from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    IndirectObject,
    PdfObject,
    StreamObject,
    TextStringObject,
)

from ..constants import Core
from ..errors import PdfAlreadyEncryptedError


class ValueKind(Enum):
    STRING = "string"
    STREAM = "stream"
    DICTIONARY = "dictionary"
    ARRAY = "array"
    OTHER = "other"


def classify(value: PdfObject) -> ValueKind:
    """Tell which kind of value the security handler sees in ``value``."""
    if isinstance(value, (ByteStringObject, TextStringObject)):
        return ValueKind.STRING
    # StreamObject is a DictionaryObject too; test it first
    if isinstance(value, StreamObject):
        return ValueKind.STREAM
    if isinstance(value, DictionaryObject):
        return ValueKind.DICTIONARY
    if isinstance(value, ArrayObject):
        return ValueKind.ARRAY
    return ValueKind.OTHER


def string_bytes(value: PdfObject) -> bytes:
    """Return the bytes a string object is serialized from."""
    if isinstance(value, TextStringObject):
        return value.get_encoded_bytes()
    return bytes(value)  # type: ignore[arg-type]


class PdfObjectModel(Protocol):
    def enumerate_objects(self) -> Iterator[Tuple[int, int, PdfObject]]:
        """Yield ``(object number, generation number, value)`` triples."""
        ...

    def replace_object(self, idnum: int, generation: int, value: PdfObject) -> None:
        ...

    def get_file_id(self) -> Optional[bytes]:
        """Return the first element of the trailer /ID array, if any."""
        ...

    def set_file_id(self, file_id: bytes) -> None:
        ...

    def set_encryption_entry(self, entry: DictionaryObject) -> None:
        ...

    def save(self) -> bytes:
        ...


class PypdfObjectModel:
    """
    :class:`PdfObjectModel` over a :class:`pypdf.PdfWriter`.

    The writer renumbers objects on output, so every object is addressed
    with its position in the writer and generation 0, which is what ends up
    in the saved file.

    Args:
        writer: A writer holding the document to protect.
    """

    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer

    @classmethod
    def from_bytes(cls, data: bytes) -> "PypdfObjectModel":
        """
        Load a document.

        Raises:
            PdfAlreadyEncryptedError: If the document is already encrypted.
        """
        reader = PdfReader(BytesIO(data))
        if reader.is_encrypted:
            raise PdfAlreadyEncryptedError("PDF is already encrypted")
        model = cls(PdfWriter(clone_from=reader))
        id_entry = reader.trailer.get(Core.ID)
        if id_entry:
            id_entry = id_entry.get_object()
            model._writer._ID = ArrayObject(
                ByteStringObject(string_bytes(x.get_object())) for x in id_entry
            )
        return model

    @classmethod
    def from_writer(cls, writer: PdfWriter) -> "PypdfObjectModel":
        return cls(writer)

    @property
    def writer(self) -> PdfWriter:
        return self._writer

    def enumerate_objects(self) -> Iterator[Tuple[int, int, PdfObject]]:
        for i, obj in enumerate(list(self._writer._objects)):
            if obj is not None:
                yield i + 1, 0, obj

    def replace_object(self, idnum: int, generation: int, value: PdfObject) -> None:
        value.indirect_reference = IndirectObject(idnum, generation, self._writer)
        self._writer._objects[idnum - 1] = value

    def get_file_id(self) -> Optional[bytes]:
        id_entry = getattr(self._writer, "_ID", None)
        if not id_entry:
            return None
        return string_bytes(id_entry[0].get_object())

    def set_file_id(self, file_id: bytes) -> None:
        self._writer._ID = ArrayObject(
            [ByteStringObject(file_id), ByteStringObject(file_id)]
        )

    def set_encryption_entry(self, entry: DictionaryObject) -> None:
        self._writer._add_object(entry)
        self._writer._encrypt_entry = entry

    def save(self) -> bytes:
        stream = BytesIO()
        self._writer.write(stream)
        return stream.getvalue()
