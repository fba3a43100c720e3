import argparse
import asyncio
from pathlib import Path

from docanalyzer.config.settings import Settings
from docanalyzer.database.connection import close_pool, init_pool
from docanalyzer.ingestion.extracted_text import parse_extracted_text
from docanalyzer.ingestion.models import UploadedFile
from docanalyzer.ingestion.service import IngestionService, build_ingestion_service
from docanalyzer.logging.logger import Log


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docanalyzer",
        description="Analyze documents and store summary, author and entity.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="PDF, DOCX, DOC, TXT or CSV files")
    parser.add_argument("--list", action="store_true", help="list processed documents")
    parser.add_argument("--limit", type=int, default=20)
    args = parser.parse_args(argv)
    if not args.files and not args.list:
        parser.error("give at least one FILE or --list")
    return args


async def _ingest(service: IngestionService, paths: list[Path]) -> int:
    uploads = [UploadedFile.from_path(path) for path in paths]
    handles = service.submit(uploads)
    failed = 0
    for handle in handles:
        status = await handle.wait()
        if status.result is not None:
            Log.info(
                f"{status.filename}: {status.state.value} | author={status.result.author} "
                f"| entity={status.result.entity}"
            )
        else:
            failed += 1
            Log.info(f"{status.filename}: {status.state.value} | {status.error_message}")
    return 1 if failed else 0


async def _list(service: IngestionService, limit: int) -> int:
    for record in await service.list_documents(limit):
        author, entity, _key_info = parse_extracted_text(record.extracted_text)
        Log.info(f"{record.created_at} {record.filename} | author={author} | entity={entity}")
    return 0


async def run(argv: list[str] | None = None) -> int:
    """Entry point: init pool -> build service -> ingest or list."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    await init_pool(settings)

    try:
        service = build_ingestion_service(settings)
        if args.list:
            return await _list(service, args.limit)
        return await _ingest(service, args.files)
    finally:
        await close_pool()


def main() -> None:
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
