"""Entry point of the ingestion pipeline: submit files, observe trackers."""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from docanalyzer.analysis.factory import AnalyzerFactory
from docanalyzer.config.settings import Settings
from docanalyzer.database.models import DocumentRecord
from docanalyzer.database.repositories.documents_repository import DocumentsRepository
from docanalyzer.ingestion.exceptions import UploadValidationError
from docanalyzer.ingestion.models import UploadedFile
from docanalyzer.ingestion.notifications import BaseNotifier, LogNotifier, Notification
from docanalyzer.ingestion.persistence import PersistenceWriter
from docanalyzer.ingestion.pipeline import PipelineContext
from docanalyzer.ingestion.processor import Processor, build_processor
from docanalyzer.ingestion.status import FileStatus, StatusTracker
from docanalyzer.ingestion.validator import UploadValidator
from docanalyzer.logging.logger import Log
from docanalyzer.storage.base import BaseBlobStore
from docanalyzer.storage.local_blob_store import LocalBlobStore


@dataclass(frozen=True)
class FileHandle:
    """What the caller gets back per submitted file."""

    file_id: str
    filename: str
    tracker: StatusTracker
    task: "asyncio.Task[FileStatus] | None" = None

    @property
    def status(self) -> FileStatus:
        return self.tracker.snapshot

    async def wait(self) -> FileStatus:
        if self.task is not None:
            return await self.task
        return self.tracker.snapshot


class IngestionService:
    """Validates each submitted file and runs accepted ones concurrently.

    One asyncio task per accepted file. Rejected files never reach processing.
    """

    def __init__(
        self,
        *,
        validator: UploadValidator,
        processor: Processor,
        notifier: BaseNotifier,
        documents_repo: DocumentsRepository,
        blob_store: BaseBlobStore,
    ) -> None:
        self._validator = validator
        self._processor = processor
        self._notifier = notifier
        self._documents_repo = documents_repo
        self._blob_store = blob_store
        self._tasks: set[asyncio.Task[FileStatus]] = set()

    def submit(self, files: Iterable[UploadedFile]) -> list[FileHandle]:
        """Start a pipeline run per file and return immediately.

        Must be called from a running event loop.
        """
        return [self._submit_one(file) for file in files]

    async def wait_all(self) -> list[FileStatus]:
        """Wait for every in-flight run and return their final snapshots."""
        if not self._tasks:
            return []
        return list(await asyncio.gather(*self._tasks))

    async def list_documents(self, limit: int = 100) -> list[DocumentRecord]:
        return await self._documents_repo.list_processed(limit)

    async def get_document(self, document_id: str) -> DocumentRecord:
        return await self._documents_repo.find_by_id(document_id)

    async def download(self, record: DocumentRecord) -> bytes:
        return await self._blob_store.get(record.file_path)

    def _submit_one(self, file: UploadedFile) -> FileHandle:
        tracker = StatusTracker(file.id, file.filename)
        try:
            self._validator.validate(file)
        except UploadValidationError as exc:
            tracker.mark_failed(str(exc))
            Log.warning(f"Rejected {file.filename}: {exc}")
            self._notifier.notify(
                Notification(title=exc.title, description=str(exc), variant="destructive")
            )
            return FileHandle(file_id=file.id, filename=file.filename, tracker=tracker)

        context = PipelineContext(file=file, tracker=tracker)
        task = asyncio.get_running_loop().create_task(
            self._processor.process(context),
            name=f"ingest-{file.id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return FileHandle(file_id=file.id, filename=file.filename, tracker=tracker, task=task)


def build_ingestion_service(
    settings: Settings,
    notifier: BaseNotifier | None = None,
    blob_store: BaseBlobStore | None = None,
) -> IngestionService:
    """Wire validator, analyzer, blob store and repository from settings."""
    notifier = notifier or LogNotifier()
    store = blob_store if blob_store is not None else LocalBlobStore(Path(settings.blob_root))
    documents_repo = DocumentsRepository()
    writer = PersistenceWriter(blob_store=store, documents_repo=documents_repo)
    processor = build_processor(
        analyzer=AnalyzerFactory.create(settings),
        writer=writer,
        notifier=notifier,
    )
    return IngestionService(
        validator=UploadValidator(settings.max_upload_size_bytes),
        processor=processor,
        notifier=notifier,
        documents_repo=documents_repo,
        blob_store=store,
    )
