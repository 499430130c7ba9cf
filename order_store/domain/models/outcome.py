"""Outcome of an update or delete addressed by primary key."""

from enum import Enum


class WriteOutcome(Enum):
    """
    Result of an update/delete by id.

    ``NOT_FOUND`` means zero rows were affected. It is reported, never
    raised; callers that need strictness can check ``found``.
    """

    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"

    @property
    def found(self) -> bool:
        return self is not WriteOutcome.NOT_FOUND
