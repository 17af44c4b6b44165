# app/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import (
    APP_ENV,
    DATABASE_URL,
    DB_ECHO_POOL,
    DB_MAX_OVERFLOW,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_TYPE,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _engine_options() -> dict:
    if DB_TYPE == "sqlite":
        return {"connect_args": {"check_same_thread": False}}

    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    return {
        "connect_args": {
            "ssl": ssl_ctx,
            # pooled Postgres (pgbouncer/Supabase) breaks asyncpg prepared statements
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        },
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    **_engine_options(),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


if DB_TYPE == "sqlite":
    # ledger rows rely on ON DELETE CASCADE, which SQLite ignores by default
    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_pragmas(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; anything not committed by the service is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


import app.models  # noqa: E402,F401  register tables on Base.metadata


async def init_models():
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"tables": len(Base.metadata.tables)})


async def reset_models():
    """Drop and recreate every table. Used by the test-suite and local resets."""
    if APP_ENV == "production":
        raise RuntimeError("reset_models() is forbidden in production")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
