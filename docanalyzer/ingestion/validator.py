"""Upload policy checks applied before any network call."""

from docanalyzer.ingestion.exceptions import FileTooLargeError, UnsupportedTypeError
from docanalyzer.ingestion.models import UploadedFile

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/msword",
        "text/plain",
        "text/csv",
    }
)
ALLOWED_EXTENSIONS = frozenset({".pdf", ".docx", ".doc", ".txt", ".csv"})


def _format_size(size_bytes: int) -> str:
    if size_bytes % (1024 * 1024) == 0:
        return f"{size_bytes // (1024 * 1024)}MB"
    if size_bytes % 1024 == 0:
        return f"{size_bytes // 1024}KB"
    return f"{size_bytes} bytes"


class UploadValidator:
    """Rejects files that fail the type or size policy."""

    def __init__(self, max_size_bytes: int) -> None:
        if max_size_bytes <= 0:
            raise ValueError("max_size_bytes must be positive")
        self._max_size_bytes = max_size_bytes

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def validate(self, file: UploadedFile) -> None:
        """Check a single file against the upload policy.

        Raises:
            UnsupportedTypeError: if neither mime type nor extension is allowed.
            FileTooLargeError: if the file exceeds the size ceiling.
        """
        mime_type = file.declared_mime_type.strip().lower()
        if mime_type not in ALLOWED_MIME_TYPES and file.extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedTypeError(
                f"{file.filename} is not supported. "
                "Please upload PDF, DOCX, DOC, TXT, or CSV files."
            )
        size = max(file.declared_size, len(file.content))
        if size > self._max_size_bytes:
            raise FileTooLargeError(
                f"{file.filename} is larger than {_format_size(self._max_size_bytes)}. "
                "Please upload a smaller file."
            )
