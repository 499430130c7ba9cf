# order_store/db/connection.py
"""
ConnectionProvider: database connection handles for the repositories.

Produces a new connection handle on every call. Pooling, when enabled,
is SQLAlchemy's; nothing here caches connections.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from order_store.core.config import get_settings

logger = logging.getLogger(__name__)

# Dialects that can invoke a stored procedure with EXEC or CALL
PROCEDURE_DIALECTS = frozenset({"mssql", "mysql", "mariadb", "postgresql"})


class ConnectionProvider:
    """
    Hands out connection handles for a single connection string.

    The engine is created lazily on first use. ``get_connection()`` returns
    an unopened ``AsyncConnection``; entering it with ``async with`` opens it
    and guarantees it is released on every exit path.
    """

    def __init__(
        self,
        connection_string: str,
        *,
        echo: bool = False,
        pool_enabled: bool = False,
        pool_size: int = 5,
        connect_timeout: Optional[int] = None,
    ):
        """
        Initialize the provider.

        Args:
            connection_string: SQLAlchemy async URL (e.g. mssql+aioodbc://...)
            echo: Log every SQL statement
            pool_enabled: Let SQLAlchemy pool DBAPI connections
            pool_size: Pool size when pooling is enabled
            connect_timeout: Login timeout in seconds (SQL Server only)
        """
        self.connection_string = connection_string
        self.echo = echo
        self.pool_enabled = pool_enabled
        self.pool_size = pool_size
        self.connect_timeout = connect_timeout
        self._engine: Optional[AsyncEngine] = None

    @property
    def dialect_name(self) -> str:
        """Dialect of the configured connection string (mssql, sqlite, ...)."""
        return make_url(self.connection_string).get_backend_name()

    @property
    def supports_procedures(self) -> bool:
        return self.dialect_name in PROCEDURE_DIALECTS

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.echo}

        if self.pool_enabled:
            options.update(
                poolclass=AsyncAdaptedQueuePool,
                pool_size=self.pool_size,
                pool_pre_ping=True,  # Verificar conexiones antes de usar
            )
        else:
            options["poolclass"] = NullPool

        if self.connect_timeout and self.dialect_name == "mssql":
            options["connect_args"] = {"timeout": self.connect_timeout}

        return options

    @property
    def engine(self) -> AsyncEngine:
        """The underlying engine, created on first access."""
        if self._engine is None:
            logger.info(f"Creating database engine for dialect '{self.dialect_name}'")
            self._engine = create_async_engine(self.connection_string, **self._engine_options())
        return self._engine

    def get_connection(self) -> AsyncConnection:
        """
        Return a new, not yet opened connection handle.

        Returns:
            AsyncConnection: Open it with ``async with``
        """
        return self.engine.connect()

    async def test_connection(self) -> bool:
        """
        Check that a connection can be opened and used.

        Returns:
            bool: True if ``SELECT 1`` succeeded
        """
        try:
            async with self.get_connection() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"Connection test failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose of the engine and any pooled connections."""
        if self._engine is not None:
            logger.info("Closing database engine...")
            await self._engine.dispose()
            self._engine = None

    def __repr__(self) -> str:
        status = "initialized" if self._engine is not None else "not_initialized"
        return f"ConnectionProvider(dialect={self.dialect_name}, status={status})"


# Instancia global
_provider_instance: Optional[ConnectionProvider] = None


def get_connection_provider() -> ConnectionProvider:
    """
    Return the process-wide provider built from settings.

    Returns:
        ConnectionProvider: Shared provider instance
    """
    global _provider_instance

    if _provider_instance is None:
        settings = get_settings()
        _provider_instance = ConnectionProvider(
            settings.async_connection_string,
            echo=settings.DB_ECHO,
            pool_enabled=settings.DB_POOL_ENABLED,
            pool_size=settings.DB_POOL_SIZE,
            connect_timeout=settings.DB_CONNECTION_TIMEOUT,
        )

    return _provider_instance


async def close_connection_provider() -> None:
    """Close and forget the process-wide provider."""
    global _provider_instance

    if _provider_instance is not None:
        await _provider_instance.close()
        _provider_instance = None
