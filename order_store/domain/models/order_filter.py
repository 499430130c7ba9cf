"""
OrderFilter value object.

Carries the optional filters shared by the filtered-fetch and bulk-delete
stored procedures.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from order_store.domain.models.order_status import OrderStatus, to_ordinal
from order_store.utils.error_handler import ValidationException


@dataclass(frozen=True)
class OrderFilter:
    """
    Immutable set of optional order filters.

    An unset field is sent to the stored procedure as NULL, which the
    procedure reads as "no constraint on this column".

    Attributes:
        year: Year component of CreatedDate
        month: Month component of CreatedDate (1-12)
        status: Order status, sent as its ordinal
        product_id: Referenced product id
    """

    year: Optional[int] = None
    month: Optional[int] = None
    status: Optional[OrderStatus] = None
    product_id: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate filter values after initialization."""
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValidationException(
                message=f"Month filter must be between 1 and 12, got {self.month}",
                field="month",
                invalid_value=self.month,
            )

    @property
    def is_unfiltered(self) -> bool:
        """True when no field is set, i.e. the filter matches every order."""
        return self.year is None and self.month is None and self.status is None and self.product_id is None

    def to_params(self) -> Dict[str, Any]:
        """Return stored-procedure parameters, ``None`` for unset filters."""
        return {
            "year": self.year,
            "month": self.month,
            "status": to_ordinal(self.status) if self.status is not None else None,
            "product_id": self.product_id,
        }

    def describe(self) -> str:
        """Human-readable summary for log messages."""
        parts = [
            f"{name}={value}"
            for name, value in (
                ("year", self.year),
                ("month", self.month),
                ("status", self.status.name if self.status is not None else None),
                ("product_id", self.product_id),
            )
            if value is not None
        ]
        return ", ".join(parts) if parts else "no filters"
