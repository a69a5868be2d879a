"""Operation Result — explicit success/failure values returned by the registry.

Invariants:
    - Exactly one of value / error is meaningful: Ok carries value, Err carries error
    - Err.error is always an ErrorCode (never a bare int)

Design Decisions:
    - Return values over exceptions in the core: callers treat non-success as
      final for that call, and the error path has the same shape as success
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from product_registry.core.errors import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ErrorCode

    @property
    def ok(self) -> bool:
        return False


Result = Ok[T] | Err
