import asyncio
from pathlib import Path

from docanalyzer.ingestion.exceptions import BlobWriteError
from docanalyzer.logging.logger import Log
from docanalyzer.storage.base import BaseBlobStore


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files under a root directory.

    Keys map to flat file names; a key is never overwritten.
    """

    BLOB_ROOT = Path("/app/blobs")

    def __init__(self, blob_root: Path | None = None) -> None:
        self._blob_root = blob_root if blob_root is not None else self.BLOB_ROOT

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        try:
            path = self._resolve_path(key)
        except ValueError as exc:
            raise BlobWriteError(f"File upload failed: {exc}") from exc
        try:
            await asyncio.to_thread(self._write_new, path, data)
        except FileExistsError as exc:
            raise BlobWriteError(f"File upload failed: {key} already exists") from exc
        except OSError as exc:
            raise BlobWriteError(f"File upload failed: {exc}") from exc
        Log.info(f"Stored blob {key} ({len(data)} bytes, {content_type})")
        return key

    async def get(self, key: str) -> bytes:
        path = self._resolve_path(key)
        if not path.exists():
            raise FileNotFoundError(f"Blob not found: {key}")
        return await asyncio.to_thread(path.read_bytes)

    async def exists(self, key: str) -> bool:
        return self._resolve_path(key).exists()

    def _resolve_path(self, key: str) -> Path:
        name = Path(key).name
        if not name or name != key:
            raise ValueError(f"Invalid blob key: {key!r}")
        return self._blob_root / name

    @staticmethod
    def _write_new(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("xb") as fh:
            fh.write(data)
