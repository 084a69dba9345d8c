import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from restaurant_orders.db.base import Base
from restaurant_orders.config import settings
from restaurant_orders import models  # noqa: F401  регистрирует таблицы в Base.metadata

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def migrate(connection):
    context.configure(connection=connection, target_metadata=Base.metadata)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_accounts_db():
    """Миграции учётных записей через async-движок из настроек."""
    engine = create_async_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(migrate)
    await engine.dispose()


if context.is_offline_mode():
    # SQL-скрипт без подключения: драйвер async здесь не нужен
    context.configure(
        url=settings.DATABASE_URL.replace("+asyncpg", "").replace("+aiosqlite", ""),
        target_metadata=Base.metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(migrate_accounts_db())
