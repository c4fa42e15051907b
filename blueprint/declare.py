"""The ``@blueprint`` class decorator.

Declaring a blueprint turns a plain class into a frozen, keyword-only
dataclass whose fields come from a schema, and wires a construction function
that validates input before instantiating it::

    @blueprint(schema={
        "number": {"type": "integer", "required": True},
        "string": {"type": "string", "default": ""},
    })
    class Sample:
        pass

    build(Sample, {"number": 1})  # Ok(value=Sample(number=1, string=''))

A class that defines its own ``__blueprint__`` classmethod keeps it: the
decorator still generates the fields and metadata but registers the custom
constructor instead of the generated one.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, Literal, TypeVar

from blueprint.exceptions import SchemaError, qualified_name
from blueprint.logging import get_logger
from blueprint.options import get_validator
from blueprint.options.base import SchemaValidator, config_pairs
from blueprint.registry import registry
from blueprint.result import Err, Ok

logger = get_logger(__name__)

T = TypeVar("T", bound=type)


def blueprint(
    *,
    schema: Any,
    typespecs_for: Iterable[str] | Literal["all"] = (),
    validator: SchemaValidator | None = None,
    frozen: bool = True,
) -> Callable[[T], T]:
    """Declare a class as a blueprint for ``schema``.

    Parameters
    ----------
    schema : Any
        Raw schema (mapping or ``(name, spec)`` pairs) or a compiled handle
    typespecs_for : Iterable[str] | "all", default=()
        Fields whose type expressions are published in ``__blueprint_types__``
    validator : SchemaValidator | None
        Validator to compile and validate with; defaults to the process-wide one
    frozen : bool, default=True
        Whether generated instances are immutable

    Returns
    -------
    Callable[[type], type]
        Class decorator

    Raises
    ------
    SchemaError
        If the schema is malformed or ``typespecs_for`` names unknown fields

    The decorated class gains:

    - ``__blueprint_schema__``: the compiled schema handle
    - ``__blueprint_validator__``: the validator the schema was compiled with
    - ``__blueprint_required__``: frozenset of required field names
    - ``__blueprint_types__``: field name → type expression, for ``typespecs_for``
    - ``__blueprint_signature__``: type expression for the whole record
    - ``__blueprint__``: classmethod validating values and returning a result
    """

    def decorate(cls: T) -> T:
        return _declare(cls, schema, typespecs_for, validator or get_validator(), frozen)

    return decorate


def _declare(
    cls: T,
    raw_schema: Any,
    typespecs_for: Iterable[str] | Literal["all"],
    validator: SchemaValidator,
    frozen: bool,
) -> T:
    schema = validator.compile_schema(raw_schema)
    specs = validator.fields(schema)
    field_names = [name for name, _ in specs]

    selected = field_names if typespecs_for == "all" else list(typespecs_for)
    if unknown := [name for name in selected if name not in field_names]:
        raise SchemaError(unknown[0], f"typespecs_for names a field missing from {cls.__name__}")

    cls.__annotations__ = {name: validator.typespec(schema, name) for name in field_names}
    for name, spec in specs:
        if spec.get("required"):
            if name in cls.__dict__:
                delattr(cls, name)
            continue
        setattr(cls, name, _default_for(spec.get("default")))

    docs = validator.docs(schema)
    cls.__doc__ = f"{cls.__doc__.rstrip()}\n\n{docs}" if cls.__doc__ else docs

    cls.__blueprint_schema__ = schema  # type: ignore[attr-defined]
    cls.__blueprint_validator__ = validator  # type: ignore[attr-defined]
    cls.__blueprint_required__ = frozenset(  # type: ignore[attr-defined]
        name for name, spec in specs if spec.get("required")
    )
    cls.__blueprint_types__ = {  # type: ignore[attr-defined]
        name: cls.__annotations__[name] for name in selected
    }
    cls.__blueprint_signature__ = validator.typespec(schema)  # type: ignore[attr-defined]

    if "__blueprint__" not in cls.__dict__:

        def __blueprint__(klass: type, values: Any) -> Ok[Any] | Err[Any]:
            return _construct(klass, values, validator)

        cls.__blueprint__ = classmethod(__blueprint__)  # type: ignore[attr-defined]

    cls = dataclasses.dataclass(cls, kw_only=True, frozen=frozen)  # type: ignore[assignment]
    registry.register(cls, cls.__blueprint__)  # type: ignore[attr-defined]
    logger.debug(
        "Declared blueprint {name} with fields {fields}",
        name=qualified_name(cls),
        fields=field_names,
    )
    return cls


def _construct(cls: type, values: Any, validator: SchemaValidator) -> Ok[Any] | Err[Any]:
    """Generated construction function: validate, then instantiate."""
    result = validator.validate(values, cls.__blueprint_schema__)  # type: ignore[attr-defined]
    if isinstance(result, Err):
        return result

    known = {field.name for field in dataclasses.fields(cls)}
    kwargs = {key: value for key, value in config_pairs(result.value) if key in known}
    return Ok(cls(**kwargs))


def _default_for(default: Any) -> Any:
    # Unhashable defaults (lists, dicts, sets) are copied per instance
    if type(default).__hash__ is None:
        return dataclasses.field(default_factory=partial(copy.deepcopy, default))
    return default
