from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from consultation_scheduler.application.exceptions import NetworkError

T = TypeVar("T")


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """Outcome of a single remote attempt: either a value or the NetworkError."""

    value: T | None = None
    error: NetworkError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "RemoteResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NetworkError) -> "RemoteResult[T]":
        return cls(error=error)
