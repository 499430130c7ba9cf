"""Repository interfaces for orders and products."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import OrderStatus, WriteOutcome


class ProductOperations(ABC):
    """Persistence operations on products."""

    @abstractmethod
    async def create_product(
        self, name: str, description: str, weight: float, height: float, width: float, length: float
    ) -> None:
        """Insert one product; the database assigns its id."""

    @abstractmethod
    async def fetch_product(self, name: str) -> List[str]:
        """Names of products whose name matches exactly."""

    @abstractmethod
    async def get_all_products(self) -> List[str]:
        """Names of all products, in no guaranteed order."""

    @abstractmethod
    async def update_product(
        self, product_id: int, name: str, description: str, weight: float, height: float, width: float, length: float
    ) -> WriteOutcome:
        """Replace every column of a product."""

    @abstractmethod
    async def delete_product(self, product_id: int) -> WriteOutcome:
        """Delete a product by id."""


class OrderOperations(ABC):
    """Persistence operations on orders."""

    @abstractmethod
    async def create_order(
        self, status: OrderStatus, created_date: datetime, updated_date: datetime, product_id: int
    ) -> None:
        """Insert one order; the database assigns its id."""

    @abstractmethod
    async def fetch_orders_by_status(self, status: OrderStatus) -> List[int]:
        """Ids of orders in ``status``."""

    @abstractmethod
    async def fetch_order_by_id(self, order_id: int) -> List[int]:
        """Zero or one id."""

    @abstractmethod
    async def get_all_orders(self) -> List[int]:
        """Ids of all orders, in no guaranteed order."""

    @abstractmethod
    async def update_order(
        self,
        order_id: int,
        status: OrderStatus,
        created_date: datetime,
        updated_date: datetime,
        product_id: int,
    ) -> WriteOutcome:
        """Replace every column of an order."""

    @abstractmethod
    async def delete_order(self, order_id: int) -> WriteOutcome:
        """Delete an order by id."""

    @abstractmethod
    async def fetch_filtered_orders(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        product_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Full order rows matching the given filters."""

    @abstractmethod
    async def delete_orders_in_bulk(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        product_id: Optional[int] = None,
    ) -> int:
        """Delete every order matching the filters, all or nothing."""
