"""
Fixtures compartidos para los tests del order store.

Los tests de integración corren contra un archivo SQLite temporal. SQLite
no tiene procedimientos almacenados, así que ``SQLiteOrderRepository``
ejecuta en línea el mismo SQL que los procedimientos de SQL Server.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import DateTime, Integer, bindparam, text

from order_store.core.config import get_settings
from order_store.db import ConnectionProvider, OrderRepository, ProductRepository, create_schema
from order_store.domain.models import OrderStatus

_FILTER_PREDICATE = """
    (:year IS NULL OR CAST(strftime('%Y', CreatedDate) AS INTEGER) = :year)
    AND (:month IS NULL OR CAST(strftime('%m', CreatedDate) AS INTEGER) = :month)
    AND (:status IS NULL OR Status = :status)
    AND (:product_id IS NULL OR ProductId = :product_id)
"""


def _filter_statement(sql: str):
    return text(sql).bindparams(
        bindparam("year", type_=Integer()),
        bindparam("month", type_=Integer()),
        bindparam("status", type_=Integer()),
        bindparam("product_id", type_=Integer()),
    )


class SQLiteOrderRepository(OrderRepository):
    """OrderRepository that runs the procedures' SQL inline on SQLite."""

    fail_bulk_delete = False

    async def _call_procedure(self, conn, name, order_filter):
        settings = get_settings()
        params = order_filter.to_params()

        if name == settings.FILTERED_ORDERS_PROCEDURE:
            statement = _filter_statement(
                f"SELECT Id, Status, CreatedDate, UpdatedDate, ProductId FROM [Order] WHERE {_FILTER_PREDICATE}"
            ).columns(Id=Integer, Status=Integer, CreatedDate=DateTime, UpdatedDate=DateTime, ProductId=Integer)
            return await conn.execute(statement, params)

        if name == settings.BULK_DELETE_PROCEDURE:
            result = await conn.execute(_filter_statement(f"DELETE FROM [Order] WHERE {_FILTER_PREDICATE}"), params)
            if self.fail_bulk_delete:
                # Falla a mitad del procedimiento, después del DELETE
                await conn.execute(text("SELECT * FROM MissingTable"))
            return result

        raise AssertionError(f"Unexpected procedure {name}")


@pytest.fixture
def database_url(tmp_path):
    """URL de una base SQLite nueva por test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}"


@pytest_asyncio.fixture
async def provider(database_url):
    """Provider con el esquema ya creado."""
    provider = ConnectionProvider(database_url)
    await create_schema(provider)
    yield provider
    await provider.close()


@pytest.fixture
def product_repository(provider):
    return ProductRepository(provider)


@pytest.fixture
def order_repository(provider):
    return SQLiteOrderRepository(provider)


@pytest_asyncio.fixture
async def product_id(provider, product_repository):
    """Id de un producto existente."""
    await product_repository.create_product("Pallet", "Wood pallet", 20.0, 15.0, 120.0, 80.0)
    async with provider.get_connection() as conn:
        result = await conn.execute(text("SELECT Id FROM Product WHERE Name = 'Pallet'"))
        return result.scalar_one()


@pytest_asyncio.fixture
async def seeded_orders(order_repository, product_id):
    """
    Cinco órdenes: tres de 2023 (dos InProgress, una Done) y dos de 2022.

    Returns:
        Dict con los ids de las órdenes por año
    """
    rows = [
        (OrderStatus.InProgress, datetime(2023, 3, 10, 9, 30)),
        (OrderStatus.InProgress, datetime(2023, 7, 1, 12, 0)),
        (OrderStatus.Done, datetime(2023, 7, 15, 8, 0)),
        (OrderStatus.NotStarted, datetime(2022, 11, 2, 14, 0)),
        (OrderStatus.Cancelled, datetime(2022, 12, 24, 18, 45)),
    ]
    for status, created in rows:
        await order_repository.create_order(status, created, created, product_id)

    ids = await order_repository.get_all_orders()
    return {"2023": sorted(ids)[:3], "2022": sorted(ids)[3:]}


# ------------------------- Mocks para los tests unitarios -------------------------
@pytest.fixture
def procedure_settings(monkeypatch):
    """Nombres de procedimientos fijos para los tests unitarios."""
    settings = SimpleNamespace(FILTERED_ORDERS_PROCEDURE="GetFilteredOrders", BULK_DELETE_PROCEDURE="BulkDeleteOrders")
    monkeypatch.setattr("order_store.db.order_repository.get_settings", lambda: settings)
    return settings


@pytest.fixture
def mock_connection():
    """AsyncConnection simulada sobre SQL Server con una transacción explícita."""
    conn = MagicMock()
    conn.dialect.name = "mssql"
    conn.execute = AsyncMock()
    conn.commit = AsyncMock()

    transaction = MagicMock()
    transaction.commit = AsyncMock()
    transaction.rollback = AsyncMock()
    conn.begin = AsyncMock(return_value=transaction)
    conn.transaction = transaction
    return conn


@pytest.fixture
def mock_provider(mock_connection):
    """Provider cuyo ``get_connection()`` entrega ``mock_connection``."""
    provider = MagicMock(spec=ConnectionProvider)
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=mock_connection)
    context.__aexit__ = AsyncMock(return_value=False)
    provider.get_connection.return_value = context
    return provider
