from dataclasses import dataclass
from typing import Generic, TypeVar

from app.infrastructure.errors.base import AppError


T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Expected failures (not found, invalid transition, bad input) travel as
    `error` instead of being raised, so callers can branch on them. Routers
    call `unwrap()` and let the global handler render the error.
    """
    value: T | None = None
    error: AppError | None = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error: AppError) -> "ServiceResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value
