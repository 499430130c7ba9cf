"""
Domain models for orders and products.

These models hold the status mapping, write outcomes and filter
value objects used by the repositories.
"""

from .order_filter import OrderFilter
from .order_status import STATUS_ORDINALS, OrderStatus, from_ordinal, to_ordinal
from .outcome import WriteOutcome

__all__ = ["OrderFilter", "OrderStatus", "STATUS_ORDINALS", "WriteOutcome", "from_ordinal", "to_ordinal"]
