import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from todo_api.config import Settings
from todo_api.credentials import CredentialResolver, DatabaseCredentials
from todo_api.exceptions import CredentialRetrievalError, DatabaseConnectionError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_ssl_context(settings: Settings) -> ssl.SSLContext | bool:
    if not settings.db_ssl:
        return False
    context = ssl.create_default_context(cafile=settings.db_ssl_root_cert)
    if not settings.db_ssl_verify:
        logger.warning("Database certificate verification is disabled")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_connect_params(credentials: DatabaseCredentials, settings: Settings) -> dict:
    """asyncpg keyword arguments for one physical connection."""
    return {
        "host": credentials.host,
        "port": credentials.port,
        "user": credentials.username,
        "password": credentials.password.get_secret_value(),
        "database": settings.db_name,
        "ssl": build_ssl_context(settings),
    }


def create_engine_from_settings(settings: Settings, resolver: CredentialResolver | None = None) -> AsyncEngine:
    if settings.database_url is not None:
        url = make_url(settings.database_url)
    else:
        # host and credentials are filled in per connection, see _inject_credentials
        url = URL.create("postgresql+asyncpg", database=settings.db_name)

    options = {"pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
        )
    engine = create_async_engine(url, **options)

    if settings.database_url is None:
        if resolver is None:
            raise ValueError("a credential resolver is required when DATABASE_URL is not set")

        # Runs inside the pool checkout, so the boto3 call blocks the event loop
        # while Secrets Manager answers. Only new physical connections pay for it,
        # and a Lambda instance serves one request at a time.
        @event.listens_for(engine.sync_engine, "do_connect")
        def _inject_credentials(dialect, conn_rec, cargs, cparams):
            cparams.update(build_connect_params(resolver.resolve(), settings))

    return engine


class Database:
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session whose connection is already checked out.

        Connection failures surface here as DatabaseConnectionError, so
        anything raised inside the block is a statement failure.
        """
        async with self.session_factory() as session:
            try:
                await session.connection()
            except CredentialRetrievalError:
                raise
            except Exception as exc:
                logger.exception("Database connection failed")
                raise DatabaseConnectionError() from exc
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
