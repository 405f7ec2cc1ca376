"""
outcome.py

Responsibility: a tiny result type for best-effort steps.

Steps that are allowed to fail without aborting the run return an `Outcome`
instead of raising. Callers decide whether the error branch is logged as a
warning or discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    ok: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Outcome[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> Outcome[T]:
        return cls(ok=False, error=error)
