"""Presence-only schema validator used when pydantic is not in play.

The fallback never checks value types: it only verifies that every field
marked ``required`` appears among the config keys. Wrong-typed values,
unknown keys and repeated keys all pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Required, TypedDict

from blueprint.exceptions import InvalidKeysError
from blueprint.options.base import (
    FieldSpec,
    config_pairs,
    normalize_fields,
    render_docs,
)
from blueprint.result import Err, Ok
from blueprint.types import (
    Keyword,
    NonEmptyKeyword,
    NonNegativeInt,
    Pid,
    PositiveInt,
    Reference,
)


@dataclass(frozen=True, slots=True)
class InvalidKeys:
    """Failure reason: the required keys versus the keys actually supplied."""

    expected: list[Any]
    found: list[Any]


_TYPES_1TO1: dict[str, Any] = {
    "any": Any,
    "atom": str,
    "boolean": bool,
    "float": float,
    "integer": int,
    "non_neg_integer": NonNegativeInt,
    "pos_integer": PositiveInt,
    "pid": Pid,
    "map": dict[Any, Any],
    "reference": Reference,
    "string": str,
    "keyword_list": Keyword,
    "non_empty_keyword_list": NonEmptyKeyword,
}


def type_for(tag: Any) -> Any:
    """Map a type tag to a Python type; unsupported tags map to ``Any``.

    Examples
    --------
    >>> type_for("string")
    <class 'str'>
    >>> type_for(("map", "string", "integer"))
    dict[str, int]
    >>> type_for(("or", ["map", "keyword_list"]))
    typing.Any
    """
    if isinstance(tag, str):
        return _TYPES_1TO1.get(tag, Any)
    if isinstance(tag, tuple) and len(tag) == 3 and tag[0] == "map":
        return dict[type_for(tag[1]), type_for(tag[2])]  # type: ignore[misc]
    return Any


class FallbackValidator:
    """Minimal :class:`~blueprint.options.base.SchemaValidator`.

    The schema handle is the raw schema itself, so compiling never fails.
    """

    name = "fallback"

    def compile_schema(self, raw_schema: Any) -> Any:
        return raw_schema

    def raw(self, schema: Any) -> Any:
        return schema

    def fields(self, schema: Any) -> list[tuple[str, FieldSpec]]:
        return normalize_fields(schema)

    def docs(self, schema: Any) -> str:
        """Generate a minimal summary of the schema's fields.

        Examples
        --------
        >>> schema = {"some_string": {"type": "string", "doc": "a cool string, yo!"},
        ...           "a_number": {"type": "integer"}}
        >>> print(FallbackValidator().docs(schema), end="")
        * some_string (type: string) - a cool string, yo!
        * a_number (type: integer)
        """
        return render_docs(self.fields(schema))

    def typespec(self, schema: Any, field: str | None = None) -> Any:
        """Generate a minimal type for the record or one of its fields.

        Only a fixed set of tags is understood, see :func:`type_for`. The
        whole-record type is a non-total ``TypedDict`` with required fields
        marked ``Required``.
        """
        specs = dict(self.fields(schema))
        if field is not None:
            return type_for(specs.get(field, {}).get("type"))

        annotations = {}
        for name, spec in specs.items():
            annotation = type_for(spec.get("type"))
            annotations[name] = Required[annotation] if spec.get("required") else annotation
        return TypedDict("Record", annotations, total=False)  # type: ignore[operator]

    def validate(self, config: Any, schema: Any) -> Ok[Any] | Err[InvalidKeys]:
        """Only check that ``config`` holds every required key.

        Examples
        --------
        >>> schema = {"string": {"type": "string", "required": True}, "number": {"type": "integer"}}
        >>> FallbackValidator().validate({"string": 42}, schema)
        Ok(value={'string': 42})
        >>> FallbackValidator().validate([("number", 42)], schema)
        Err(reason=InvalidKeys(expected=['string'], found=['number']))
        """
        config_keys = [key for key, _ in config_pairs(config)]
        required_keys = [name for name, spec in self.fields(schema) if spec.get("required")]

        if all(key in config_keys for key in required_keys):
            return Ok(config)
        return Err(InvalidKeys(expected=required_keys, found=config_keys))

    def validate_or_raise(self, config: Any, schema: Any) -> Any:
        """Only check required keys, raising :class:`InvalidKeysError` when one is missing."""
        result = self.validate(config, schema)
        if isinstance(result, Err):
            raise InvalidKeysError(result.reason)
        return result.value
