"""Result types for fetch operations that may fail without raising."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorType(str, Enum):
    EXTERNAL_API_ERROR = "external_api_error"    # network failure or non-2xx status
    MALFORMED_RESPONSE = "malformed_response"    # not JSON / no `response` list
    API_ERROR = "api_error"                      # API answered with an `errors` payload


@dataclass(frozen=True)
class FetchError:
    """Structured error information the page can show or act on."""

    error_type: ErrorType
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class Result(Generic[T]):
    """
    Either a success value or a `FetchError`.

    Lets the view model report a failed fetch to the page without throwing,
    while still keeping its last-good collections in place.
    """

    def __init__(self, value: Optional[T] = None, error: Optional[FetchError] = None):
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        self._value = value
        self._error = error

    @property
    def value(self) -> T:
        """Get the success value. Raises if the result is a failure."""
        if self._error is not None:
            raise ValueError(f"Cannot access value on failed result: {self._error.message}")
        return self._value

    @property
    def error(self) -> FetchError:
        """Get the error. Raises if the result is a success."""
        if self._error is None:
            raise ValueError("Cannot access error on successful result")
        return self._error

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FetchError) -> "Result[T]":
        return cls(error=error)

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        """Apply `func` to the value of a success; pass failures through."""
        if self.is_failure:
            return Result.failure(self._error)
        return Result.success(func(self._value))

    def __repr__(self) -> str:
        if self.is_failure:
            return f"Result.failure({self._error.error_type.value}: {self._error.message})"
        return f"Result.success({self._value!r})"
