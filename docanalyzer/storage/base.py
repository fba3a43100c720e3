from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for all blob storage adapters."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under a new key.

        Returns:
            The stored object's path, recorded as the document's file_path.

        Raises:
            BlobWriteError: if the key already exists or the write fails.
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Read stored bytes.

        Raises:
            FileNotFoundError: if no object exists under the key.
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True if an object is stored under the key."""
