"""
Order status enumeration and its storage mapping.

Statuses are persisted as raw integer ordinals in ``[Order].Status``. The
ordinals below are part of the stored data: reordering or renumbering them
requires a data migration.
"""

from enum import IntEnum
from typing import Dict


class OrderStatus(IntEnum):
    """Order lifecycle label. Values are the persisted ordinals."""

    NotStarted = 0
    Loading = 1
    InProgress = 2
    Arrived = 3
    Unloading = 4
    Cancelled = 5
    Done = 6


# Explicit label -> ordinal table; never derived from declaration order
STATUS_ORDINALS: Dict[str, int] = {
    "NotStarted": 0,
    "Loading": 1,
    "InProgress": 2,
    "Arrived": 3,
    "Unloading": 4,
    "Cancelled": 5,
    "Done": 6,
}

ORDINAL_STATUSES: Dict[int, OrderStatus] = {ordinal: OrderStatus[label] for label, ordinal in STATUS_ORDINALS.items()}


def to_ordinal(status: OrderStatus) -> int:
    """Return the integer stored for ``status``."""
    return STATUS_ORDINALS[OrderStatus(status).name]


def from_ordinal(value: int) -> OrderStatus:
    """
    Map a stored integer back to its status.

    Raises:
        ValueError: If ``value`` is not a known ordinal
    """
    try:
        return ORDINAL_STATUSES[int(value)]
    except KeyError:
        raise ValueError(f"Unknown order status ordinal: {value}") from None
