"""
Data-access package for the order store.

Repository Structure:
- ConnectionProvider: Hands out one connection handle per operation
- BaseRepository: Abstract base with connection and error translation
- ProductRepository: Product CRUD operations
- OrderRepository: Order CRUD, filtered fetch and bulk delete
- create_schema: Table and stored procedure bootstrap
"""

from .base import BaseRepository
from .connection import ConnectionProvider, close_connection_provider, get_connection_provider
from .order_repository import OrderRepository
from .product_repository import ProductRepository
from .schema import create_schema

__all__ = [
    "BaseRepository",
    "ConnectionProvider",
    "get_connection_provider",
    "close_connection_provider",
    "ProductRepository",
    "OrderRepository",
    "create_schema",
]
