"""
Base Repository for database operations.

This module provides an abstract base class for the repository classes,
implementing the shared pieces: connection acquisition per call, error
translation into the data-access taxonomy, operation logging and table
access verification.
"""

import functools
import logging
from abc import ABC, abstractmethod
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from order_store.db.connection import ConnectionProvider, get_connection_provider
from order_store.domain.models import WriteOutcome
from order_store.utils.error_handler import convert_db_exception

logger = logging.getLogger(__name__)


def log_operation(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator for logging database operations.

    Args:
        operation_name: Optional custom name for the operation

    Returns:
        Decorated function with logging
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")

            try:
                result = await func(self, *args, **kwargs)
                logger.debug(f"Operation successful: {op_name}")
                return result
            except Exception as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise

        return wrapper

    return decorator


class BaseRepository(ABC):
    """
    Abstract base repository.

    Every operation opens its own connection through ``connection()`` and
    releases it before returning. Nothing is shared between calls besides
    the provider.
    """

    def __init__(self, provider: Optional[ConnectionProvider] = None):
        """
        Initialize the base repository.

        Args:
            provider: Connection provider. If not provided, uses the global one.
        """
        self.provider: ConnectionProvider = provider or get_connection_provider()
        self._repository_name: str = self.__class__.__name__

    @asynccontextmanager
    async def connection(self, operation: str) -> AsyncIterator[AsyncConnection]:
        """
        Open a connection for one operation.

        Errors raised while opening the connection become ``ConnectivityError``.
        Errors raised while using it are classified by
        ``convert_db_exception``. Both are chained to the original.

        Args:
            operation: Operation name used in error messages
        """
        name = f"{self._repository_name}.{operation}"

        async with AsyncExitStack() as stack:
            try:
                conn = await stack.enter_async_context(self.provider.get_connection())
            except SQLAlchemyError as e:
                raise convert_db_exception(e, operation=name, while_connecting=True) from e

            try:
                yield conn
            except SQLAlchemyError as e:
                raise convert_db_exception(e, operation=name) from e

    @staticmethod
    def _write_outcome(rows_affected: int, found: WriteOutcome) -> WriteOutcome:
        """Map an affected-row count to ``found`` or ``NOT_FOUND``."""
        return found if rows_affected > 0 else WriteOutcome.NOT_FOUND

    @abstractmethod
    async def _verify_table_access(self, conn: AsyncConnection) -> None:
        """
        Verify access to the tables required by this repository.

        Raises:
            SQLAlchemyError: If a table cannot be read
        """

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform a health check on the repository.

        Returns:
            Dict containing health status information
        """
        try:
            async with self.connection("health_check") as conn:
                await self._verify_table_access(conn)

            return {"status": "healthy", "repository": self._repository_name, "error": None}

        except Exception as e:
            return {"status": "unhealthy", "repository": self._repository_name, "error": str(e)}

    def __repr__(self) -> str:
        """String representation of the repository."""
        return f"{self._repository_name}(provider={self.provider!r})"
