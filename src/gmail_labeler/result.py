"""Result type returned at component boundaries.

Every component hands back a usable value. ``Ok`` means it was produced
normally; ``Degraded`` means a fallback was substituted and carries the
reason, so callers never need a separate failure branch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Degraded(Generic[T]):
    value: T
    reason: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Degraded[T]]
