from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from pypolar.services.errors import ApiError, ErrorKind, PolarApiError

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


class ResultAccessError(RuntimeError):
    """Raised when `value` is read on a failure or `error` on a success."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    A uniform outcome object for every API operation.
      - Result.ok(value): the call succeeded, `value` holds the decoded payload
      - Result.fail(error): an expected failure, `error` holds an ApiError
    Reading the wrong side is a programming error and raises ResultAccessError.
    """

    _value: Any = _MISSING
    _error: Optional[ApiError] = None

    def __post_init__(self):
        if self._error is None and self._value is _MISSING:
            raise TypeError("Build a Result with Result.ok(value) or Result.fail(error)")

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        """Use when the request succeeded and the payload was decoded."""
        return cls(_value=value)

    @classmethod
    def fail(cls, error: ApiError) -> Result[Any]:
        """Use when the request failed; the error kind tells callers why."""
        if not isinstance(error, ApiError):
            raise TypeError(f"Result.fail expects an ApiError, got {type(error).__name__}")
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ResultAccessError(
                f"Cannot access value on a failed result: {self._error.message}"
            )
        return self._value

    @property
    def error(self) -> ApiError:
        if self._error is None:
            raise ResultAccessError("Cannot access error on a successful result")
        return self._error

    # kind shortcuts, False on success
    @property
    def is_not_found(self) -> bool:
        return self._error is not None and self._error.kind is ErrorKind.NOT_FOUND

    @property
    def is_validation_error(self) -> bool:
        return self._error is not None and self._error.kind is ErrorKind.VALIDATION

    @property
    def is_permission_error(self) -> bool:
        return self._error is not None and self._error.kind is ErrorKind.PERMISSION

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Transform the value of a success, pass a failure through untouched."""
        if self._error is not None:
            return self  # type: ignore[return-value]
        return Result.ok(fn(self._value))

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Chain another Result-returning step onto a success."""
        if self._error is not None:
            return self  # type: ignore[return-value]
        return fn(self._value)

    def match(
        self, on_success: Callable[[T], U], on_failure: Callable[[ApiError], U]
    ) -> U:
        if self._error is not None:
            return on_failure(self._error)
        return on_success(self._value)

    def value_or_raise(self) -> T:
        """Return the value, or raise PolarApiError for callers preferring exceptions."""
        if self._error is not None:
            raise PolarApiError(self._error)
        return self._value

    def __repr__(self) -> str:
        if self._error is not None:
            return f"<Result failure kind={self._error.kind.value!r} message={self._error.message!r}>"
        # represent presence of data with an ellipsis, absence with None
        value_repr = "…" if self._value is not None else "None"
        return f"<Result success value={value_repr}>"
