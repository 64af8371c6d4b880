from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from hrplatform.infrastructure.config.settings import Settings


# Modern SQLAlchemy 2.0 pattern
class Base(DeclarativeBase):
    """Base class for control-plane catalog models"""

    pass


def build_database_url(
    settings: Settings,
    database_name: str,
    *,
    admin: bool = False,
    must_exist: bool = False,
) -> URL:
    """
    Assemble the connection URL for one database on the configured server.

    The same function serves the catalog, the administrative ("master")
    connection and every tenant database. With admin=True the admin
    credentials are used, falling back to the regular ones.

    For SQLite each database is a file in settings.sqlite_directory.
    must_exist opens the file read-write without creating it, so a missing
    tenant database fails to connect instead of appearing empty.
    """
    if settings.is_sqlite:
        path = Path(settings.sqlite_directory).resolve() / f"{database_name}.db"
        if must_exist:
            return URL.create(
                settings.database_driver,
                database=f"file:{path}",
                query={"mode": "rw", "uri": "true"},
            )
        return URL.create(settings.database_driver, database=str(path))

    username = settings.database_user
    password = settings.database_password
    if admin:
        username = settings.admin_database_user or username
        password = settings.admin_database_password or password

    return URL.create(
        settings.database_driver,
        username=username,
        password=password or None,
        host=settings.database_host,
        port=settings.database_port,
        database=database_name,
    )


def create_database_engine(
    settings: Settings, url: URL, *, pooled: bool = True, **kwargs: Any
) -> AsyncEngine:
    """
    Create an async engine for one database.

    Short-lived tenant connections pass pooled=False so nothing lingers
    after the engine is disposed.
    """
    options: dict[str, Any] = {"echo": settings.database_echo}
    if not pooled or settings.is_sqlite:
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_pre_ping=True,
            pool_size=20,
            max_overflow=30,
            pool_recycle=3600,
        )
    if settings.is_postgres:
        options["connect_args"] = {
            "server_settings": {"jit": "off"},
            "command_timeout": 60,
        }
    options.update(kwargs)
    return create_async_engine(url, **options)


def create_catalog_engine(settings: Settings) -> AsyncEngine:
    return create_database_engine(
        settings, build_database_url(settings, settings.catalog_database_name)
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class TenantConnectionFactory:
    """
    Opens connections to individual tenant databases.

    Every call builds its own engine from the tenant's database name and
    disposes it on exit; tenant engines are never cached.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def url_for(self, db_name: str) -> URL:
        return build_database_url(self.settings, db_name, must_exist=True)

    @asynccontextmanager
    async def engine(self, db_name: str) -> AsyncIterator[AsyncEngine]:
        engine = create_database_engine(self.settings, self.url_for(db_name), pooled=False)
        try:
            yield engine
        finally:
            await engine.dispose()

    @asynccontextmanager
    async def session(self, db_name: str) -> AsyncIterator[AsyncSession]:
        async with self.engine(db_name) as engine:
            async with create_session_factory(engine)() as session:
                yield session
