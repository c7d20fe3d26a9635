"""Typed operation results.

Every public store operation returns ``Ok(value)`` or ``Err(error)``.
Expected negative outcomes that are not faults (an ownership mismatch)
are ``Ok(WriteOutcome.DENIED)``; validation and storage failures are
``Err`` carrying a ``DataAccessError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeAlias, TypeVar

from .errors import DataAccessError


T = TypeVar("T")


class WriteOutcome(str, Enum):
    """Result of a mutating operation that was processed by the store."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    DENIED = "denied"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failed result carrying the error instead of raising it."""

    error: DataAccessError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error, for callers that prefer exceptions."""
        raise self.error


Result: TypeAlias = Ok[T] | Err


@dataclass(frozen=True, slots=True)
class DeleteAcknowledgement:
    """Outcome of a delete request as reported by the storage layer.

    ``acknowledged`` says whether the replicas confirmed the request;
    ``deleted_count`` says whether anything was actually removed. A
    request that found nothing to delete is still acknowledged.
    """

    acknowledged: bool
    deleted_count: int = 0
