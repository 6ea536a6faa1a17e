"""Database Engine and Session Management"""

import re
import ssl
from typing import Any, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from seiva.config import Settings
from seiva.core.exceptions import BackendConfigurationError

# Base class for declarative models
Base = declarative_base()


def normalize_database_url(url: str) -> Tuple[str, Dict[str, Any]]:
    """
    Convert a postgresql:// URL to the asyncpg dialect and build connect_args.

    asyncpg takes ``ssl=SSLContext`` rather than ``sslmode``, so sslmode is
    stripped from the query string and turned into an encrypting context.
    """
    database_url = url.replace("postgresql://", "postgresql+asyncpg://")
    connect_args: Dict[str, Any] = {}
    if re.search(r"[?&]sslmode=(require|required|verify-full)", database_url, re.I):
        ssl_ctx = ssl.create_default_context()
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_ctx
        database_url = re.sub(r"sslmode=[^&]*&?", "", database_url, flags=re.I).rstrip("?&")
    return database_url, connect_args


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the relational backend"""
    if not settings.DATABASE_URL:
        raise BackendConfigurationError("DATA_BACKEND=database requires DATABASE_URL")

    database_url, connect_args = normalize_database_url(settings.DATABASE_URL)
    # pool_pre_ping detects stale connections after idle periods
    return create_async_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        echo=settings.DEBUG,
        future=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory used by the database persistence backend"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
