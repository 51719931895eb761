from io import BytesIO
from typing import Optional

from pypdf import PdfWriter
from pypdf.generic import ArrayObject, ByteStringObject, DecodedStreamObject, NameObject

CONTENT = b"BT /F1 12 Tf 72 712 Td (Hello, world) Tj ET"
TITLE = "Quarterly report"


def make_pdf(
    content: bytes = CONTENT, title: str = TITLE, file_id: Optional[bytes] = None
) -> bytes:
    """Build a one page PDF with a content stream and a document title."""
    writer = PdfWriter()
    page = writer.add_blank_page(width=200, height=200)
    stream = DecodedStreamObject()
    stream.set_data(content)
    page[NameObject("/Contents")] = writer._add_object(stream)
    writer.add_metadata({"/Title": title})
    if file_id is not None:
        writer._ID = ArrayObject([ByteStringObject(file_id), ByteStringObject(file_id)])
    out = BytesIO()
    writer.write(out)
    return out.getvalue()
