import uuid
from dataclasses import dataclass, field
from pathlib import Path


def _new_file_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class UploadedFile:
    """A file selected for ingestion. Never mutated once created."""

    filename: str
    content: bytes = field(repr=False)
    declared_mime_type: str = ""
    declared_size: int = -1
    id: str = field(default_factory=_new_file_id)

    def __post_init__(self) -> None:
        if self.declared_size < 0:
            object.__setattr__(self, "declared_size", len(self.content))

    @property
    def extension(self) -> str:
        """Lowercased extension including the dot, or empty string."""
        return Path(self.filename).suffix.lower()

    @classmethod
    def from_path(cls, path: Path, declared_mime_type: str = "") -> "UploadedFile":
        content = path.read_bytes()
        return cls(
            filename=path.name,
            content=content,
            declared_mime_type=declared_mime_type,
            declared_size=len(content),
        )


@dataclass(frozen=True)
class EncodedDocument:
    """Wire payload for the remote analysis service."""

    data: str = field(repr=False)
    mime_type: str
    size: int
