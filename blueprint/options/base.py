"""Schema validator interface and helpers shared by its implementations."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from blueprint.result import Err, Ok

FieldSpec = dict[str, Any]
Schema = Any  # opaque handle, implementation specific


@runtime_checkable
class SchemaValidator(Protocol):
    """Turns raw schemas into handles and validates configs against them.

    Two implementations exist: ``PydanticValidator`` performs full type and
    required-field checking, ``FallbackValidator`` only checks that required
    keys are present. Callers get one through
    :func:`blueprint.options.get_validator` and never branch on which one.
    """

    name: str

    @abstractmethod
    def compile_schema(self, raw_schema: Any) -> Schema:
        """Compile a raw schema into a handle. Compiling a handle returns it unchanged."""
        ...

    @abstractmethod
    def raw(self, schema: Schema) -> Any:
        """Return the raw schema a handle was compiled from."""
        ...

    @abstractmethod
    def fields(self, schema: Schema) -> list[tuple[str, FieldSpec]]:
        """Return ``(name, spec)`` pairs in schema order, specs as plain dicts."""
        ...

    @abstractmethod
    def docs(self, schema: Schema) -> str:
        """Render one ``* name (type: tag) - doc`` line per field."""
        ...

    @abstractmethod
    def typespec(self, schema: Schema, field: str | None = None) -> Any:
        """Return a type expression for the whole record, or for one field."""
        ...

    @abstractmethod
    def validate(self, config: Any, schema: Schema) -> Ok[Any] | Err[Any]:
        """Validate a config, returning ``Ok(config)`` or ``Err(reason)``."""
        ...

    @abstractmethod
    def validate_or_raise(self, config: Any, schema: Schema) -> Any:
        """Like :meth:`validate` but raises on failure."""
        ...


def normalize_fields(raw_schema: Any) -> list[tuple[str, FieldSpec]]:
    """Normalize a mapping or a sequence of pairs into ``(name, dict)`` pairs.

    Examples
    --------
    >>> normalize_fields({"count": {"type": "integer"}})
    [('count', {'type': 'integer'})]
    >>> normalize_fields([("count", [("type", "integer"), ("required", True)])])
    [('count', {'type': 'integer', 'required': True})]
    """
    return [
        (name, dict(spec.items() if isinstance(spec, Mapping) else spec))
        for name, spec in config_pairs(raw_schema)
    ]


def config_pairs(config: Any) -> list[tuple[Any, Any]]:
    """Return the ``(key, value)`` pairs of a mapping or pair sequence, in order.

    Raises
    ------
    TypeError
        If ``config`` is neither a mapping nor a list/tuple of pairs
    """
    if isinstance(config, Mapping):
        return list(config.items())
    if isinstance(config, (list, tuple)):
        try:
            return [(key, value) for key, value in config]
        except (TypeError, ValueError) as e:
            raise TypeError(f"expected key/value pairs, got {config!r}") from e
    raise TypeError(f"expected a mapping or a list of key/value pairs, got {config!r}")


def format_type_tag(tag: Any) -> str:
    """Render a type tag for docs: strings bare, compound tags as their repr."""
    return tag if isinstance(tag, str) else repr(tag)


def render_docs(fields: list[tuple[str, FieldSpec]]) -> str:
    """Render field docs, one newline-terminated bullet per field.

    Field names and string tags are written as plain Python strings, so a
    field reads ``* some_string (type: string)`` with no symbol prefixes.
    Fields without a type tag are documented as ``any``.

    Examples
    --------
    >>> print(render_docs([("name", {"type": "string", "doc": "who"}), ("age", {})]), end="")
    * name (type: string) - who
    * age (type: any)
    """
    lines = []
    for name, spec in fields:
        line = f"* {name} (type: {format_type_tag(spec.get('type', 'any'))})"
        if spec.get("doc"):
            line += f" - {spec['doc']}"
        lines.append(line)
    return "\n".join(lines) + "\n"
