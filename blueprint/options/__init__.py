"""Functions to validate config against a given schema.

Relies on pydantic. If pydantic isn't installed (or ``validator = "fallback"``
is configured) it falls back to a minimal implementation that only checks the
presence of required keys.

The implementation is chosen once per process by :func:`get_validator`; the
module-level functions below delegate to it.

Examples
--------
>>> from blueprint import options
>>> schema = options.compile_schema({"some_field": {"type": "string", "required": True}})
>>> options.raw(schema)
{'some_field': {'type': 'string', 'required': True}}
"""

from __future__ import annotations

import importlib.util
from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

from blueprint.config import load_config
from blueprint.logging import get_logger
from blueprint.options.base import FieldSpec, Schema, SchemaValidator
from blueprint.options.fallback import FallbackValidator, InvalidKeys
from blueprint.result import Err, Ok

logger = get_logger(__name__)

A = TypeVar("A")
M = TypeVar("M")


@lru_cache(maxsize=1)
def get_validator() -> SchemaValidator:
    """Return the validator used for the lifetime of the process.

    ``auto`` (the default) picks pydantic when it can be imported and the
    fallback otherwise; ``pydantic`` and ``fallback`` force a choice.
    """
    choice = load_config().validator
    if choice == "auto":
        choice = "pydantic" if importlib.util.find_spec("pydantic") is not None else "fallback"

    validator: SchemaValidator
    if choice == "pydantic":
        from blueprint.options.pydantic import PydanticValidator  # lazy: optional dependency

        validator = PydanticValidator()
    else:
        validator = FallbackValidator()

    logger.debug("Using {name} schema validator", name=validator.name)
    return validator


def reset_validator() -> None:
    """Forget the selected validator so the next call re-reads configuration."""
    get_validator.cache_clear()


def compile_schema(raw_schema: Any) -> Schema:
    return get_validator().compile_schema(raw_schema)


def raw(schema: Schema) -> Any:
    """Return the original schema definition passed to :func:`compile_schema`."""
    return get_validator().raw(schema)


def fields(schema: Schema) -> list[tuple[str, FieldSpec]]:
    return get_validator().fields(schema)


def docs(schema: Schema) -> str:
    return get_validator().docs(schema)


def typespec(schema: Schema, field: str | None = None) -> Any:
    return get_validator().typespec(schema, field)


def validate(config: Any, schema: Schema) -> Ok[Any] | Err[Any]:
    return get_validator().validate(config, schema)


def validate_or_raise(config: Any, schema: Schema) -> Any:
    return get_validator().validate_or_raise(config, schema)


def reduce_fields(
    schema: Schema,
    accumulator: A,
    reducer: Callable[[str, FieldSpec, A], A],
    validator: SchemaValidator | None = None,
) -> A:
    """Fold ``reducer(name, spec, acc)`` over the schema's fields in order.

    Examples
    --------
    >>> schema = {"some_field": {"type": "string"}, "another_field": {"type": "integer"}}
    >>> reduce_fields(schema, {}, lambda key, spec, acc: {**acc, key: spec["type"]})
    {'some_field': 'string', 'another_field': 'integer'}
    """
    validator = validator or get_validator()
    for name, spec in validator.fields(schema):
        accumulator = reducer(name, spec, accumulator)
    return accumulator


def map_fields(
    schema: Schema,
    mapper: Callable[[str, FieldSpec], M],
    validator: SchemaValidator | None = None,
) -> list[M]:
    """Apply ``mapper(name, spec)`` to each field, keeping schema order.

    Examples
    --------
    >>> schema = {"some_field": {"type": "string"}, "another_field": {"type": "integer"}}
    >>> map_fields(schema, lambda key, spec: key)
    ['some_field', 'another_field']
    """
    validator = validator or get_validator()
    return [mapper(name, spec) for name, spec in validator.fields(schema)]


def required_fields(schema: Schema, validator: SchemaValidator | None = None) -> list[str]:
    """Names of the fields marked ``required``, in schema order."""
    return reduce_fields(
        schema,
        [],
        lambda name, spec, names: [*names, name] if spec.get("required") else names,
        validator,
    )


__all__ = [
    "FallbackValidator",
    "FieldSpec",
    "InvalidKeys",
    "Schema",
    "SchemaValidator",
    "compile_schema",
    "docs",
    "fields",
    "get_validator",
    "map_fields",
    "raw",
    "reduce_fields",
    "required_fields",
    "reset_validator",
    "typespec",
    "validate",
    "validate_or_raise",
]
