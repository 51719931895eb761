"""Glue between pypdf's generic objects and the security handler."""

from ._model import (
    PdfObjectModel,
    PypdfObjectModel,
    ValueKind,
    classify,
    string_bytes,
)
from ._utils import bytes_to_hex, hex_to_bytes

__all__ = [
    "PdfObjectModel",
    "PypdfObjectModel",
    "ValueKind",
    "bytes_to_hex",
    "classify",
    "hex_to_bytes",
    "string_bytes",
]
