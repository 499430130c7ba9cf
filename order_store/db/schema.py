"""
Table definitions and schema bootstrap.

The repositories issue raw SQL; these tables exist so the schema can be
created from Python (``create_schema``) and kept in one place.
"""

import logging

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, MetaData, String, Table

from order_store.core.config import get_settings
from order_store.db.connection import ConnectionProvider
from order_store.db.procedures import procedure_definitions

logger = logging.getLogger(__name__)

metadata = MetaData()

product_table = Table(
    "Product",
    metadata,
    Column("Id", Integer, primary_key=True, autoincrement=True),
    Column("Name", String(255), nullable=False),
    Column("Description", String(1000), nullable=False),
    Column("Weight", Float, nullable=False),
    Column("Height", Float, nullable=False),
    Column("Width", Float, nullable=False),
    Column("Length", Float, nullable=False),
)

order_table = Table(
    "Order",
    metadata,
    Column("Id", Integer, primary_key=True, autoincrement=True),
    Column("Status", Integer, nullable=False),
    Column("CreatedDate", DateTime, nullable=False),
    Column("UpdatedDate", DateTime, nullable=False),
    Column("ProductId", Integer, ForeignKey("Product.Id"), nullable=False),
)


async def create_schema(provider: ConnectionProvider) -> None:
    """
    Create the tables if missing and, on SQL Server, install the procedures.

    Args:
        provider: Provider for the target database
    """
    settings = get_settings()

    async with provider.get_connection() as conn:
        await conn.run_sync(metadata.create_all)

        if provider.dialect_name == "mssql":
            definitions = procedure_definitions(settings.FILTERED_ORDERS_PROCEDURE, settings.BULK_DELETE_PROCEDURE)
            for name, definition in definitions.items():
                await conn.exec_driver_sql(definition)
                logger.info(f"Stored procedure {name} installed")
        elif provider.supports_procedures:
            logger.warning(
                f"Dialect '{provider.dialect_name}' has no procedure definitions; "
                f"install {settings.FILTERED_ORDERS_PROCEDURE} and {settings.BULK_DELETE_PROCEDURE} manually"
            )
        else:
            logger.warning(
                f"Dialect '{provider.dialect_name}' has no stored procedures; "
                "filtered fetch and bulk delete are unavailable on this database"
            )

        await conn.commit()

    logger.info("Schema created")
