"""Python type expressions used for schema type tags without a builtin equivalent."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, NewType

Keyword = list[tuple[str, Any]]
"""Ordered ``(name, value)`` pairs, the shape of an input configuration."""

NonEmptyKeyword = NewType("NonEmptyKeyword", Keyword)  # type: ignore[valid-newtype]
NonNegativeInt = NewType("NonNegativeInt", int)
PositiveInt = NewType("PositiveInt", int)
Pid = NewType("Pid", int)
Reference = Hashable

__all__ = ["Keyword", "NonEmptyKeyword", "NonNegativeInt", "Pid", "PositiveInt", "Reference"]
