# result.py
"""
Single success-or-failure value returned by the simulator's editing
operations, so callers never mix boolean returns with raised errors.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import ErrorKind, LifeError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[LifeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: LifeError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> Optional[T]:
        """Return the value, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        return self.ok


def attempt(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """
    Call func and capture a LifeError as a failed Result.
    Any other exception propagates.
    """
    try:
        return Result.success(func(*args, **kwargs))
    except LifeError as e:
        return Result.failure(e)
