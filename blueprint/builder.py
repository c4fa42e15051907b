"""Building records from types, instances and key/value input."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, TypeVar

from blueprint.exceptions import ConstructionError, NoBlueprintError, qualified_name
from blueprint.logging import get_logger
from blueprint.options.base import config_pairs
from blueprint.registry import registry
from blueprint.result import Err, Ok

logger = get_logger(__name__)

T = TypeVar("T")


def build(target: type[T] | T, values: Any = None) -> Ok[T] | Err[Any]:
    """Build a record, returning ``Ok(record)`` or ``Err(reason)``.

    Accepted shapes, tried in order:

    1. an instance and no (or empty) values: the instance is returned as is
    2. an instance and override values: the instance's fields are merged
       with the overrides (overrides win) and built again from its type
    3. a type and an instance of exactly that type: the instance is returned
    4. a type and values: the type's construction function is called; a
       record of another declared blueprint type is passed as its fields

    Validation failures are returned, never raised.

    Parameters
    ----------
    target : type | object
        Record type, or an existing record instance
    values : Any
        Mapping or ``(key, value)`` pairs; custom construction functions may
        accept anything

    Returns
    -------
    Ok | Err
        ``Err(NoBlueprintError(target))`` when the type has no construction
        function

    Raises
    ------
    TypeError
        If ``target`` is an instance and ``values`` are not key/value input,
        or a generated construction function is given neither a mapping, a
        sequence of pairs nor a declared record

    Examples
    --------
    >>> result = build(Sample, {"number": 1})  # doctest: +SKIP
    >>> build(result.value, {"number": 2})  # doctest: +SKIP
    Ok(value=Sample(number=2, string='a'))
    """
    if not isinstance(target, type):
        if _is_empty(values):
            return Ok(target)
        overrides = config_pairs(values)
        overridden = {key for key, _ in overrides}
        merged = [pair for pair in _instance_pairs(target) if pair[0] not in overridden]
        return build(type(target), [*merged, *overrides])

    if type(values) is target:
        return Ok(values)
    if _is_declared_record(values):
        values = _instance_pairs(values)

    constructor = registry.get(target)
    if constructor is None:
        logger.debug("No blueprint registered for {name}", name=qualified_name(target))
        return Err(NoBlueprintError(target))

    return constructor([] if values is None else values)


def build_or_raise(target: type[T] | T, values: Any = None) -> T:
    """Like :func:`build` but raises on failure.

    Exceptions carried by the error are raised unchanged. Any other reason is
    wrapped in :class:`ConstructionError`.

    Raises
    ------
    BlueprintError
        Whatever structured error the construction produced
    ConstructionError
        ``unable to construct <type>: <reason>`` for non-exception reasons
    """
    result = build(target, values)
    if isinstance(result, Ok):
        return result.value

    if isinstance(result.reason, BaseException):
        raise result.reason
    raise ConstructionError(target if isinstance(target, type) else type(target), result.reason)


def _is_empty(values: Any) -> bool:
    return values is None or (isinstance(values, (Mapping, list, tuple)) and len(values) == 0)


def _is_declared_record(values: Any) -> bool:
    return not isinstance(values, type) and hasattr(type(values), "__blueprint_schema__")


def _instance_pairs(instance: Any) -> list[tuple[str, Any]]:
    if dataclasses.is_dataclass(instance):
        return [
            (field.name, getattr(instance, field.name)) for field in dataclasses.fields(instance)
        ]
    return list(vars(instance).items())
