from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePosixPath

import psycopg

from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.database.models import DocumentRecord, NewDocument
from docanalyzer.database.repositories.documents_repository import DocumentsRepository
from docanalyzer.ingestion.exceptions import BlobWriteError, RecordWriteError
from docanalyzer.ingestion.extracted_text import format_extracted_text
from docanalyzer.ingestion.models import UploadedFile
from docanalyzer.logging.logger import Log
from docanalyzer.storage.base import BaseBlobStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def blob_key(filename: str, now: datetime, file_id: str) -> str:
    """Key of the form {epoch_millis}-{file id prefix}-{basename}.

    The file id part keeps same-named files stored in the same millisecond apart.
    """
    basename = PurePosixPath(filename.replace("\\", "/")).name or "upload"
    return f"{int(now.timestamp() * 1000)}-{file_id[:12]}-{basename}"


class PersistenceWriter:
    """Stores the original bytes, then writes the document row.

    The blob is always written first. When the row insert fails the blob is
    left in place and logged as an orphan.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        documents_repo: DocumentsRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._blob_store = blob_store
        self._documents_repo = documents_repo
        self._clock = clock

    async def persist(
        self,
        file: UploadedFile,
        mime_type: str,
        result: AnalysisResult,
    ) -> DocumentRecord:
        """Write blob then row.

        Raises:
            BlobWriteError: if the blob write fails; no row is written.
            RecordWriteError: if the row insert fails after the blob was written.
        """
        key = blob_key(file.filename, self._clock(), file.id)
        try:
            file_path = await self._blob_store.put(key, file.content, mime_type)
        except OSError as exc:
            raise BlobWriteError(f"File upload failed: {exc}") from exc

        document = NewDocument(
            filename=file.filename,
            file_path=file_path,
            mime_type=mime_type,
            file_size=file.declared_size,
            summary=result.summary,
            extracted_text=format_extracted_text(result),
            processed_at=self._clock(),
        )
        try:
            record = await self._documents_repo.insert(document)
        except (psycopg.Error, RuntimeError) as exc:
            Log.warning(f"Blob {file_path} left without a document row")
            raise RecordWriteError(f"Database error: {exc}") from exc

        Log.info(f"Document {record.id} saved for {file.filename}")
        return record
