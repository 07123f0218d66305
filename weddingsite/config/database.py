import contextlib
import logging
import sys
from collections.abc import AsyncIterator
from pathlib import Path

from alembic import command, config
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from weddingsite.config.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # ON DELETE CASCADE is ignored by SQLite unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(url: str) -> AsyncEngine:
    url = make_url(str(url))
    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(
            url,
            echo=settings.LOG_DB,
            connect_args={"timeout": 15},
            # aiosqlite connections must not outlive the event loop that opened them
            poolclass=NullPool,
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(url, echo=settings.LOG_DB, pool_pre_ping=True)


def testing_database_url(url: str) -> str:
    """Same server (or directory for SQLite), database name prefixed with `test_`."""
    raw = str(url)
    url = make_url(raw)
    if not url.database or url.database == ":memory:":
        return raw
    database = Path(url.database)
    return url.set(database=str(database.with_name(f"test_{database.name}"))).render_as_string(
        hide_password=False
    )


engine = create_engine(settings.database_url)
if "pytest" in sys.modules:
    # never let a test run touch the real guest list
    engine = create_engine(testing_database_url(settings.database_url))


def alembic_config() -> config.Config:
    cfg = config.Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    return cfg


def _upgrade(connection, cfg: config.Config) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def run_migrations() -> None:
    logger.info("Applying database migrations")
    async with engine.begin() as conn:
        await conn.run_sync(_upgrade, alembic_config())


async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    if session_overwrite:
        yield session_overwrite
    else:
        async with async_session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            else:
                if auto_commit:
                    await session.commit()


async def ping_database() -> bool:
    """True when the database answers a trivial query."""
    try:
        async with async_session_manager(auto_commit=False) as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database did not answer")
        return False
    return True
