"""Base64 wire encoding for documents sent to the analysis service."""

import base64
import binascii
from pathlib import Path

from docanalyzer.ingestion.exceptions import EncodingError
from docanalyzer.ingestion.models import EncodedDocument

GENERIC_MIME_TYPE = "application/octet-stream"

EXTENSION_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".txt": "text/plain",
    ".csv": "text/csv",
}

# Multiple of 3 so chunk boundaries never introduce padding.
_CHUNK_SIZE = 3 * 256 * 1024


def resolve_mime_type(filename: str, declared_mime: str) -> str:
    """Return the declared mime type, or resolve it from the file extension."""
    declared = declared_mime.strip().lower()
    if declared and declared != GENERIC_MIME_TYPE:
        return declared
    return EXTENSION_MIME_TYPES.get(Path(filename).suffix.lower(), GENERIC_MIME_TYPE)


def encode(content: bytes, declared_mime: str, filename: str = "") -> EncodedDocument:
    """Encode raw bytes as base64 text, chunk by chunk."""
    view = memoryview(content)
    chunks = [
        base64.b64encode(view[offset : offset + _CHUNK_SIZE]).decode("ascii")
        for offset in range(0, len(view), _CHUNK_SIZE)
    ]
    return EncodedDocument(
        data="".join(chunks),
        mime_type=resolve_mime_type(filename, declared_mime),
        size=len(content),
    )


def decode(data: str) -> bytes:
    """Decode base64 text produced by :func:`encode`.

    Raises:
        EncodingError: if the payload is not valid base64.
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError(f"Invalid base64 payload: {exc}") from exc


def decoded_size(data: str) -> int:
    """Byte length of the payload once decoded, without decoding it."""
    length = len(data)
    if length == 0:
        return 0
    padding = data[-2:].count("=")
    return (length // 4) * 3 - padding
