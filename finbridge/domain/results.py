"""Result type shared by every service operation"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers"""

    UPSTREAM_DATA = "upstream_data_failure"
    VALIDATION = "validation_failure"
    AUTHORIZATION = "authorization_failure"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service call: either `data` (success) or `error` + `error_kind`.

    Services never let domain exceptions escape; they convert them with
    `Result.fail` so route handlers can render one uniform envelope.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: T) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: Exception) -> "Result[T]":
        kind = getattr(error, "kind", ErrorKind.UPSTREAM_DATA)
        return cls(success=False, error=str(error), error_kind=kind)
