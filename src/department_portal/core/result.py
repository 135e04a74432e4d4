from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a read-only reporting call.

    ``value`` is always usable: on failure it holds the empty/zeroed result,
    so callers that only render data can ignore ``error``.
    """

    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, value: T, error: str) -> "Result[T]":
        return cls(value=value, error=error)
