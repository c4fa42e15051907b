"""Tagged results returned by validation and construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``reason``.

    ``reason`` is either an exception instance with a rich diagnostic or a
    plain value such as :class:`~blueprint.options.fallback.InvalidKeys`.
    """

    reason: E

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> None:
        if isinstance(self.reason, BaseException):
            raise self.reason
        raise ValueError(f"called unwrap() on an error result: {self.reason!r}")


Result = Ok[T] | Err[E]
