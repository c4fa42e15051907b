"""Process-wide registry of construction functions keyed by record type."""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from typing import Any

from blueprint.exceptions import qualified_name
from blueprint.logging import get_logger
from blueprint.result import Err, Ok

logger = get_logger(__name__)

Constructor = Callable[[Any], Ok[Any] | Err[Any]]


class BlueprintRegistry:
    """Maps record types to the function that builds them.

    Entries are written once per type at declaration time and read on
    every ``build`` call. Registering a type again replaces its entry, so a
    later registration overrides the generated constructor.

    Types that were never registered but define a callable ``__blueprint__``
    class attribute are still buildable; :meth:`get` returns that attribute.
    """

    def __init__(self) -> None:
        self._constructors: dict[type, Constructor] = {}
        self._lock = Lock()

    def register(self, cls: type, constructor: Constructor) -> None:
        """Register (or replace) the construction function for ``cls``.

        Raises
        ------
        TypeError
            If ``cls`` is not a class or ``constructor`` is not callable
        """
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered, got {cls!r}")
        if not callable(constructor):
            raise TypeError(f"Constructor for {qualified_name(cls)} must be callable")

        with self._lock:
            if cls in self._constructors:
                logger.debug("Overriding constructor for {name}", name=qualified_name(cls))
            self._constructors[cls] = constructor
        logger.debug("Registered blueprint {name}", name=qualified_name(cls))

    override = register

    def unregister(self, cls: type) -> None:
        with self._lock:
            self._constructors.pop(cls, None)

    def get(self, cls: type) -> Constructor | None:
        """Return the construction function for ``cls``, or None."""
        if (constructor := self._constructors.get(cls)) is not None:
            return constructor
        own = getattr(cls, "__blueprint__", None)
        return own if callable(own) else None

    def __contains__(self, cls: object) -> bool:
        return cls in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)

    def _reset_for_testing(self) -> None:
        with self._lock:
            self._constructors.clear()


registry = BlueprintRegistry()
