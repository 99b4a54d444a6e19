# wakemeup/utils/database.py
import asyncio
import logging
from typing import Optional
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from wakemeup import config
from wakemeup.errors import Internal

logger = logging.getLogger("wakemeup.database")

Base = declarative_base()

# Backends that understand CREATE DATABASE IF NOT EXISTS
_SERVER_BACKENDS = ("mysql", "mariadb")


def database_url() -> URL:
    """URL of the application database, from DATABASE_URL or the DB_* settings."""
    if config.DATABASE_URL:
        return make_url(config.DATABASE_URL)
    return URL.create(
        "mysql+aiomysql",
        username=config.DB_USER,
        password=config.DB_PASSWORD,
        host=config.DB_HOST,
        port=config.DB_PORT,
        database=config.DB_NAME,
    )


def server_url(url: URL) -> URL:
    """Same server and credentials with no database selected."""
    # URL.set() ignores None, so rebuild without the database part
    return URL.create(
        url.drivername,
        username=url.username,
        password=url.password,
        host=url.host,
        port=url.port,
        query=url.query,
    )


def _engine_options(url: URL) -> dict:
    if url.get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": config.DB_POOL_TIMEOUT,
    }


class _DatabaseState:
    """Process-wide engine and session factory, built once by init_database()."""

    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self.lock = asyncio.Lock()


_state = _DatabaseState()


async def _create_database(url: URL):
    bootstrap = create_async_engine(server_url(url))
    try:
        name = bootstrap.dialect.identifier_preparer.quote_identifier(url.database)
        async with bootstrap.begin() as conn:
            await conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {name}"))
    finally:
        await bootstrap.dispose()


async def init_database() -> AsyncEngine:
    """
    Ensure the database and its tables exist, then publish the shared pool.
    Safe to call from concurrent first requests: only one caller bootstraps.
    """
    if _state.engine is not None:
        return _state.engine
    async with _state.lock:
        if _state.engine is not None:
            return _state.engine

        url = database_url()
        logger.info(f"Bootstrapping database '{url.database}' on {url.get_backend_name()}...")
        if url.get_backend_name() in _SERVER_BACKENDS and url.database:
            await _create_database(url)

        engine = create_async_engine(url, **_engine_options(url))
        try:
            # registers the tables on Base.metadata
            from wakemeup.models import destination, user  # noqa: F401
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise

        _state.session_factory = async_sessionmaker(engine, expire_on_commit=False)
        _state.engine = engine
        tables = ", ".join(sorted(Base.metadata.tables))
        logger.info(f"Database '{url.database}' ready (tables: {tables})")
        return engine


async def get_engine() -> AsyncEngine:
    return await init_database()


async def dispose_database():
    """Close the pool and forget it; the next caller bootstraps again."""
    engine = _state.engine
    _state.engine = None
    _state.session_factory = None
    _state.lock = asyncio.Lock()
    if engine is not None:
        await engine.dispose()
        logger.info("Database pool closed.")


# Dependency for route injection
async def get_db():
    try:
        await init_database()
    except SQLAlchemyError as e:
        logger.error(f"Database unavailable: {e}")
        raise Internal(str(e))
    async with _state.session_factory() as session:
        yield session
