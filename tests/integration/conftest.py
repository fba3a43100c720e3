import os
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path

import pytest

from docanalyzer.config.settings import Settings
from docanalyzer.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "docanalyzer" / "database" / "schema.sql"
FILENAME_PREFIX = "itest-"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docanalyzer_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture
def db_session(
    test_settings: Settings,
) -> Callable[[], AbstractAsyncContextManager[None]]:
    """Open the pool inside the running loop, create the schema, clean up after.

    The async pool is bound to the event loop that opened it, so each test
    opens and closes it within its own asyncio.run().
    """

    @asynccontextmanager
    async def _session() -> AsyncIterator[None]:
        try:
            await init_pool(test_settings, timeout=3.0)
        except Exception as e:
            pytest.skip(
                f"PostgreSQL test DB not available: {e}. "
                "Set DB_* env to point at a disposable database"
            )
        try:
            async with get_connection() as conn:
                await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
                await conn.commit()
            yield
        finally:
            try:
                async with get_connection() as conn:
                    await conn.execute(
                        "DELETE FROM documents WHERE filename LIKE %s",
                        (f"{FILENAME_PREFIX}%",),
                    )
                    await conn.commit()
            finally:
                await close_pool()

    return _session
