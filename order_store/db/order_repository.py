"""
OrderRepository: CRUD and filtered bulk operations on the [Order] table.

Statuses are stored as integer ordinals. Filtered fetch and bulk delete are
delegated to stored procedures; bulk delete runs inside an explicit
transaction and is all-or-nothing.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Integer, bindparam, text
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncTransaction
from sqlalchemy.sql.elements import TextClause

from order_store.core.config import get_settings
from order_store.db.base import BaseRepository, log_operation
from order_store.domain.models import OrderFilter, OrderStatus, WriteOutcome, to_ordinal
from order_store.domain.repositories import OrderOperations
from order_store.utils.error_handler import TransactionFailure

logger = logging.getLogger(__name__)

# Typed so drivers without native datetime binding (sqlite) still round-trip
_DATE_PARAMS = (
    bindparam("created_date", type_=DateTime()),
    bindparam("updated_date", type_=DateTime()),
)

# Unset filters must reach the driver as typed NULLs
_FILTER_PARAMS = (
    bindparam("year", type_=Integer()),
    bindparam("month", type_=Integer()),
    bindparam("status", type_=Integer()),
    bindparam("product_id", type_=Integer()),
)


class OrderRepository(BaseRepository, OrderOperations):
    """Repository for order operations."""

    async def _verify_table_access(self, conn: AsyncConnection) -> None:
        """Verify access to the [Order] table."""
        result = await conn.execute(text("SELECT COUNT(*) FROM [Order]"))
        _ = result.scalar()

    # ------------------------- Write operations -------------------------
    @log_operation()
    async def create_order(
        self, status: OrderStatus, created_date: datetime, updated_date: datetime, product_id: int
    ) -> None:
        """
        Insert a new order.

        ``product_id`` is not checked against Product; the database enforces
        the reference only if a foreign key exists.
        """
        query = text(
            """
            INSERT INTO [Order] (Status, CreatedDate, UpdatedDate, ProductId)
            VALUES (:status, :created_date, :updated_date, :product_id)
            """
        ).bindparams(*_DATE_PARAMS)
        params = {
            "status": to_ordinal(status),
            "created_date": created_date,
            "updated_date": updated_date,
            "product_id": product_id,
        }

        async with self.connection("create_order") as conn:
            await conn.execute(query, params)
            await conn.commit()

        logger.info(f"Order created successfully with status: {OrderStatus(status).name}")

    @log_operation()
    async def update_order(
        self,
        order_id: int,
        status: OrderStatus,
        created_date: datetime,
        updated_date: datetime,
        product_id: int,
    ) -> WriteOutcome:
        """
        Rewrite every column of an order. No status transition is enforced.

        Returns:
            WriteOutcome: UPDATED, or NOT_FOUND if no order has ``order_id``
        """
        query = text(
            """
            UPDATE [Order]
            SET Status = :status, CreatedDate = :created_date,
                UpdatedDate = :updated_date, ProductId = :product_id
            WHERE Id = :id
            """
        ).bindparams(*_DATE_PARAMS)
        params = {
            "id": order_id,
            "status": to_ordinal(status),
            "created_date": created_date,
            "updated_date": updated_date,
            "product_id": product_id,
        }

        async with self.connection("update_order") as conn:
            result = await conn.execute(query, params)
            rows_affected = result.rowcount
            await conn.commit()

        outcome = self._write_outcome(rows_affected, WriteOutcome.UPDATED)
        if outcome.found:
            logger.info(f"Order with ID {order_id} updated successfully.")
        else:
            logger.warning(f"No order found with ID {order_id} to update.")
        return outcome

    @log_operation()
    async def delete_order(self, order_id: int) -> WriteOutcome:
        """
        Delete an order by id.

        Returns:
            WriteOutcome: DELETED, or NOT_FOUND if no order has ``order_id``
        """
        async with self.connection("delete_order") as conn:
            result = await conn.execute(text("DELETE FROM [Order] WHERE Id = :id"), {"id": order_id})
            rows_affected = result.rowcount
            await conn.commit()

        outcome = self._write_outcome(rows_affected, WriteOutcome.DELETED)
        if outcome.found:
            logger.info(f"Order with ID {order_id} deleted successfully.")
        else:
            logger.warning(f"No order found with ID {order_id} to delete.")
        return outcome

    # ------------------------- Read operations -------------------------
    @log_operation()
    async def fetch_orders_by_status(self, status: OrderStatus) -> List[int]:
        """Ids of orders whose stored ordinal equals ``status``'s."""
        async with self.connection("fetch_orders_by_status") as conn:
            result = await conn.execute(
                text("SELECT Id FROM [Order] WHERE Status = :status"), {"status": to_ordinal(status)}
            )
            return list(result.scalars().all())

    @log_operation()
    async def fetch_order_by_id(self, order_id: int) -> List[int]:
        """Zero or one id, as a list."""
        async with self.connection("fetch_order_by_id") as conn:
            result = await conn.execute(text("SELECT Id FROM [Order] WHERE Id = :id"), {"id": order_id})
            return list(result.scalars().all())

    @log_operation()
    async def get_all_orders(self) -> List[int]:
        """Ids of all orders. No ordering is applied."""
        async with self.connection("get_all_orders") as conn:
            result = await conn.execute(text("SELECT Id FROM [Order]"))
            return list(result.scalars().all())

    # ------------------------- Stored procedures -------------------------
    @staticmethod
    def _procedure_statement(name: str, dialect_name: str) -> TextClause:
        """Build the call to ``name`` for the connection's dialect."""
        if dialect_name == "mssql":
            sql = f"EXEC {name} @Year = :year, @Month = :month, @Status = :status, @ProductId = :product_id"
        else:
            sql = f"CALL {name}(:year, :month, :status, :product_id)"
        return text(sql).bindparams(*_FILTER_PARAMS)

    async def _call_procedure(self, conn: AsyncConnection, name: str, order_filter: OrderFilter) -> CursorResult:
        """Execute stored procedure ``name`` with every filter, NULL when unset."""
        statement = self._procedure_statement(name, conn.dialect.name)
        return await conn.execute(statement, order_filter.to_params())

    @log_operation()
    async def fetch_filtered_orders(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        product_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Full order rows matching the filters, via the filtered-orders procedure.

        Returns:
            List of rows as dicts keyed by the procedure's result-set columns
        """
        order_filter = OrderFilter(year=year, month=month, status=status, product_id=product_id)
        procedure = get_settings().FILTERED_ORDERS_PROCEDURE

        async with self.connection("fetch_filtered_orders") as conn:
            result = await self._call_procedure(conn, procedure, order_filter)
            rows = [dict(row._mapping) for row in result]

        logger.debug(f"{procedure} returned {len(rows)} orders ({order_filter.describe()})")
        return rows

    @log_operation()
    async def delete_orders_in_bulk(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        product_id: Optional[int] = None,
    ) -> int:
        """
        Delete every order matching the filters inside one transaction.

        On failure the transaction is rolled back before the error leaves
        this method, so a partial delete is never visible.

        Returns:
            int: Rows deleted, as reported by the driver

        Raises:
            TransactionFailure: The procedure failed; nothing was deleted
        """
        order_filter = OrderFilter(year=year, month=month, status=status, product_id=product_id)
        procedure = get_settings().BULK_DELETE_PROCEDURE

        if order_filter.is_unfiltered:
            logger.warning("Bulk delete requested without filters: every order will be deleted")

        async with self.connection("delete_orders_in_bulk") as conn:
            transaction = await conn.begin()
            try:
                result = await self._call_procedure(conn, procedure, order_filter)
                rows_affected = result.rowcount
                await transaction.commit()
            except Exception as e:
                await self._rollback(transaction)
                logger.error(f"Error occurred: {e}")
                raise TransactionFailure(
                    message=f"Bulk delete ({order_filter.describe()}) failed and was rolled back: {e}",
                    operation=f"{self._repository_name}.delete_orders_in_bulk",
                ) from e

        logger.info(f"{rows_affected} orders deleted successfully.")
        return rows_affected

    @staticmethod
    async def _rollback(transaction: AsyncTransaction) -> None:
        """Roll back; a failed rollback is logged, the connection close discards the work."""
        try:
            await transaction.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Rollback failed: {rollback_error}")
