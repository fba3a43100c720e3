import asyncio
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import psycopg
import pytest

from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.database.models import DocumentRecord, NewDocument
from docanalyzer.database.repositories.documents_repository import DocumentsRepository
from docanalyzer.ingestion.exceptions import BlobWriteError, RecordWriteError
from docanalyzer.ingestion.models import UploadedFile
from docanalyzer.ingestion.persistence import PersistenceWriter, blob_key
from docanalyzer.storage.local_blob_store import LocalBlobStore

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
NOW_MILLIS = int(NOW.timestamp() * 1000)
FILE_ID = "0123456789abcdef0123456789abcdef"
KEY = f"{NOW_MILLIS}-0123456789ab-report.txt"


def _file() -> UploadedFile:
    return UploadedFile(
        filename="report.txt", content=b"hello", declared_mime_type="text/plain", id=FILE_ID
    )


def _result() -> AnalysisResult:
    return AnalysisResult(summary="A report.", author="J. Doe", entity="Acme")


def _stored(document: NewDocument) -> DocumentRecord:
    return DocumentRecord(
        id="doc-1",
        filename=document.filename,
        file_path=document.file_path,
        mime_type=document.mime_type,
        file_size=document.file_size,
        summary=document.summary,
        extracted_text=document.extracted_text,
        status=document.status,
        created_at=NOW,
        processed_at=document.processed_at,
    )


def _make_writer(tmp_path: Path) -> tuple[PersistenceWriter, MagicMock]:
    repo = MagicMock(spec=DocumentsRepository)
    repo.insert = AsyncMock(side_effect=_stored)
    writer = PersistenceWriter(
        blob_store=LocalBlobStore(blob_root=tmp_path),
        documents_repo=repo,
        clock=lambda: NOW,
    )
    return writer, repo


class TestBlobKey:
    def test_prefixes_epoch_millis(self) -> None:
        assert blob_key("report.txt", NOW, FILE_ID) == KEY

    def test_strips_directories(self) -> None:
        assert blob_key("../../etc/passwd", NOW, "abc") == f"{NOW_MILLIS}-abc-passwd"
        assert blob_key("C:\\docs\\memo.doc", NOW, "abc") == f"{NOW_MILLIS}-abc-memo.doc"

    def test_empty_name_gets_placeholder(self) -> None:
        assert blob_key("", NOW, "abc") == f"{NOW_MILLIS}-abc-upload"

    def test_same_name_same_instant_differs_by_file(self) -> None:
        first = blob_key("report.txt", NOW, "aaaaaaaaaaaaaaaa")
        second = blob_key("report.txt", NOW, "bbbbbbbbbbbbbbbb")
        assert first != second


class TestSuccessfulPersist:
    def test_writes_blob_then_row(self, tmp_path: Path) -> None:
        writer, repo = _make_writer(tmp_path)

        record = asyncio.run(writer.persist(_file(), "text/plain", _result()))

        key = KEY
        assert (tmp_path / key).read_bytes() == b"hello"
        repo.insert.assert_awaited_once()
        document = repo.insert.await_args.args[0]
        assert document == NewDocument(
            filename="report.txt",
            file_path=key,
            mime_type="text/plain",
            file_size=5,
            summary="A report.",
            extracted_text="Author: J. Doe\nEntity: Acme\nKey Info: See summary",
            processed_at=NOW,
            status="processed",
        )
        assert record.status == "processed"
        assert record.file_path == key

    def test_blob_exists_when_row_is_inserted(self, tmp_path: Path) -> None:
        writer, repo = _make_writer(tmp_path)
        blob_present: list[bool] = []

        async def _insert(document: NewDocument) -> DocumentRecord:
            blob_present.append((tmp_path / document.file_path).exists())
            return _stored(document)

        repo.insert = AsyncMock(side_effect=_insert)

        asyncio.run(writer.persist(_file(), "text/plain", _result()))

        assert blob_present == [True]


class TestBlobWriteFailure:
    def test_no_row_written(self, tmp_path: Path) -> None:
        writer, repo = _make_writer(tmp_path)
        (tmp_path / KEY).write_bytes(b"someone else")

        with pytest.raises(BlobWriteError):
            asyncio.run(writer.persist(_file(), "text/plain", _result()))

        repo.insert.assert_not_awaited()

    def test_wraps_raw_os_error_from_store(self, tmp_path: Path) -> None:
        repo = MagicMock(spec=DocumentsRepository)
        repo.insert = AsyncMock()
        store = MagicMock()
        store.put = AsyncMock(side_effect=PermissionError("denied"))
        writer = PersistenceWriter(blob_store=store, documents_repo=repo, clock=lambda: NOW)

        with pytest.raises(BlobWriteError, match="denied"):
            asyncio.run(writer.persist(_file(), "text/plain", _result()))

        repo.insert.assert_not_awaited()


class TestRecordWriteFailure:
    def test_blob_left_in_place_and_no_row(self, tmp_path: Path) -> None:
        writer, repo = _make_writer(tmp_path)
        repo.insert = AsyncMock(side_effect=psycopg.OperationalError("connection lost"))

        with pytest.raises(RecordWriteError, match="connection lost"):
            asyncio.run(writer.persist(_file(), "text/plain", _result()))

        assert (tmp_path / KEY).read_bytes() == b"hello"

    def test_uninitialized_pool_is_a_record_write_error(self, tmp_path: Path) -> None:
        writer, repo = _make_writer(tmp_path)
        repo.insert = AsyncMock(side_effect=RuntimeError("Connection pool not initialized"))

        with pytest.raises(RecordWriteError):
            asyncio.run(writer.persist(_file(), "text/plain", _result()))
