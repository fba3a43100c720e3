from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NewDocument:
    """Column values for a documents row about to be inserted."""

    filename: str
    file_path: str
    mime_type: str
    file_size: int
    summary: str
    extracted_text: str
    processed_at: datetime
    status: str = "processed"


@dataclass(frozen=True)
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    filename: str
    file_path: str
    mime_type: str | None
    file_size: int | None
    summary: str | None
    extracted_text: str | None
    status: str | None
    created_at: datetime | None = None
    processed_at: datetime | None = None
    department_id: str | None = None
    category_id: str | None = None
