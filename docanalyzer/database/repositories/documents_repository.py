from typing import Any

from psycopg.rows import dict_row

from docanalyzer.database.connection import get_connection
from docanalyzer.database.models import DocumentRecord, NewDocument
from docanalyzer.ingestion.exceptions import DocumentNotFoundError

_COLUMNS = """
    id, filename, file_path, mime_type, file_size, summary, extracted_text,
    status, created_at, processed_at, department_id, category_id
"""


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    department_id = row.get("department_id")
    category_id = row.get("category_id")
    return DocumentRecord(
        id=str(row["id"]),
        filename=row["filename"],
        file_path=row["file_path"],
        mime_type=row["mime_type"],
        file_size=row["file_size"],
        summary=row["summary"],
        extracted_text=row["extracted_text"],
        status=row["status"],
        created_at=row.get("created_at"),
        processed_at=row.get("processed_at"),
        department_id=str(department_id) if department_id is not None else None,
        category_id=str(category_id) if category_id is not None else None,
    )


class DocumentsRepository:
    """Database operations for the documents table."""

    async def insert(self, document: NewDocument) -> DocumentRecord:
        """Insert one document row and return it as stored.

        department_id and category_id are left unset.
        """
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    INSERT INTO documents
                    (filename, file_path, mime_type, file_size, summary,
                     extracted_text, status, processed_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document.filename,
                        document.file_path,
                        document.mime_type,
                        document.file_size,
                        document.summary,
                        document.extracted_text,
                        document.status,
                        document.processed_at,
                    ),
                )
                row = await cur.fetchone()
            await conn.commit()

        if row is None:
            raise RuntimeError("INSERT into documents returned no row")
        return _to_record(row)

    async def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = await cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    async def list_processed(self, limit: int = 100) -> list[DocumentRecord]:
        """Processed documents, newest first."""
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE status = 'processed'
                    ORDER BY created_at DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                rows = await cur.fetchall()
        return [_to_record(row) for row in rows]
