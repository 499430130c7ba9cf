"""
ProductRepository: CRUD operations on the Product table.

Lookups return only the ``Name`` column; there is no full-record read.
"""

import logging
from typing import List

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from order_store.db.base import BaseRepository, log_operation
from order_store.domain.models import WriteOutcome
from order_store.domain.repositories import ProductOperations

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository, ProductOperations):
    """Repository for product operations."""

    async def _verify_table_access(self, conn: AsyncConnection) -> None:
        """Verify access to the Product table."""
        result = await conn.execute(text("SELECT COUNT(*) FROM Product"))
        _ = result.scalar()

    # ------------------------- Write operations -------------------------
    @log_operation()
    async def create_product(
        self, name: str, description: str, weight: float, height: float, width: float, length: float
    ) -> None:
        """Insert a new product. The database assigns its Id."""
        query = """
        INSERT INTO Product (Name, Description, Weight, Height, Width, Length)
        VALUES (:name, :description, :weight, :height, :width, :length)
        """
        params = {
            "name": name,
            "description": description,
            "weight": weight,
            "height": height,
            "width": width,
            "length": length,
        }

        async with self.connection("create_product") as conn:
            await conn.execute(text(query), params)
            await conn.commit()

        logger.info("Product created successfully.")

    @log_operation()
    async def update_product(
        self, product_id: int, name: str, description: str, weight: float, height: float, width: float, length: float
    ) -> WriteOutcome:
        """
        Rewrite every column of a product.

        Returns:
            WriteOutcome: UPDATED, or NOT_FOUND if no product has ``product_id``
        """
        query = """
        UPDATE Product
        SET Name = :name, Description = :description, Weight = :weight,
            Height = :height, Width = :width, Length = :length
        WHERE Id = :id
        """
        params = {
            "id": product_id,
            "name": name,
            "description": description,
            "weight": weight,
            "height": height,
            "width": width,
            "length": length,
        }

        async with self.connection("update_product") as conn:
            result = await conn.execute(text(query), params)
            rows_affected = result.rowcount
            await conn.commit()

        outcome = self._write_outcome(rows_affected, WriteOutcome.UPDATED)
        if outcome.found:
            logger.info(f"Product with ID {product_id} was successfully updated.")
        else:
            logger.warning(f"No product with ID {product_id} was found or updated.")
        return outcome

    @log_operation()
    async def delete_product(self, product_id: int) -> WriteOutcome:
        """
        Delete a product by id.

        Returns:
            WriteOutcome: DELETED, or NOT_FOUND if no product has ``product_id``
        """
        async with self.connection("delete_product") as conn:
            result = await conn.execute(text("DELETE FROM Product WHERE Id = :id"), {"id": product_id})
            rows_affected = result.rowcount
            await conn.commit()

        outcome = self._write_outcome(rows_affected, WriteOutcome.DELETED)
        if outcome.found:
            logger.info(f"Product with ID {product_id} was successfully deleted.")
        else:
            logger.warning(f"No product with ID {product_id} was found.")
        return outcome

    # ------------------------- Read operations -------------------------
    @log_operation()
    async def fetch_product(self, name: str) -> List[str]:
        """Names of products named exactly ``name``; empty if none."""
        async with self.connection("fetch_product") as conn:
            result = await conn.execute(text("SELECT Name FROM Product WHERE Name = :name"), {"name": name})
            return list(result.scalars().all())

    @log_operation()
    async def get_all_products(self) -> List[str]:
        """Names of all products. No ordering is applied."""
        async with self.connection("get_all_products") as conn:
            result = await conn.execute(text("SELECT Name FROM Product"))
            return list(result.scalars().all())
