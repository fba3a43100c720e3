class IngestionError(Exception):
    """Base exception for all ingestion pipeline errors."""


class UploadValidationError(IngestionError):
    """Raised when a file fails the upload policy."""

    title = "Upload rejected"


class UnsupportedTypeError(UploadValidationError):
    """Raised when neither the mime type nor the extension is allowed."""

    title = "Unsupported file type"


class FileTooLargeError(UploadValidationError):
    """Raised when a file exceeds the configured size ceiling."""

    title = "File too large"


class EncodingError(IngestionError):
    """Raised when a payload cannot be encoded or decoded."""


class AnalysisError(IngestionError):
    """Raised when the remote analysis service call does not succeed.

    ``status`` is the HTTP status code, or one of ``"timeout"`` / ``"network"``
    when no response was received.
    """

    def __init__(self, status: int | str, body: str = "") -> None:
        self.status = status
        self.body = body
        message = f"Analysis service error: {status}"
        if body:
            message = f"{message} - {body}"
        super().__init__(message)


class PersistError(IngestionError):
    """Base exception for persistence failures."""


class BlobWriteError(PersistError):
    """Raised when the original bytes cannot be written to blob storage."""


class RecordWriteError(PersistError):
    """Raised when the document row cannot be inserted."""


class DocumentNotFoundError(IngestionError):
    """Raised when a document cannot be found in the database."""


class InvalidTransitionError(IngestionError):
    """Raised when a status tracker is driven into an illegal state."""
