import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

# every ORM module has to be imported so autogenerate sees all tables
import weddingsite.guests.repository.orm_models  # noqa: F401
import weddingsite.messages.orm_models  # noqa: F401
import weddingsite.photos.orm_models  # noqa: F401
from weddingsite.config.database import create_engine
from weddingsite.config.settings import settings
from weddingsite.models import BaseModel

config = context.config

# Only configure logging when run from the command line; the app has its own setup
if config.config_file_name is not None and "connection" not in config.attributes:
    fileConfig(config.config_file_name)

target_metadata = BaseModel.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=str(settings.database_url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = create_engine(settings.database_url)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    # run_migrations() on app startup hands over an open connection
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
    else:
        asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
