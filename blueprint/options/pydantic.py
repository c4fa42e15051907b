"""Full schema validator backed by pydantic.

Each schema compiles into a pydantic model generated with ``create_model``.
Validation runs in strict mode: values are never coerced, unknown keys are
rejected, required fields are enforced and defaults are filled in.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    InstanceOf,
    NonNegativeInt,
    PositiveInt,
    create_model,
)
from pydantic import ValidationError as PydanticValidationError

from blueprint.exceptions import SchemaError, ValidationError
from blueprint.logging import get_logger
from blueprint.options.base import (
    FieldSpec,
    config_pairs,
    format_type_tag,
    normalize_fields,
    render_docs,
)
from blueprint.result import Err, Ok

logger = get_logger(__name__)

_MODEL_CONFIG = ConfigDict(
    strict=True,
    extra="forbid",
    arbitrary_types_allowed=True,
)

_KEYWORD = list[tuple[str, Any]]

_SIMPLE_TYPES: dict[str, Any] = {
    "any": Any,
    "atom": str,
    "boolean": bool,
    "float": float,
    "integer": int,
    "non_neg_integer": NonNegativeInt,
    "pos_integer": PositiveInt,
    "pid": PositiveInt,
    "map": dict[Any, Any],
    "reference": Hashable,
    "string": str,
    "keyword_list": _KEYWORD,
    "non_empty_keyword_list": Annotated[_KEYWORD, Field(min_length=1)],
    "callable": Callable[..., Any],
    "timeout": Union[NonNegativeInt, Literal["infinity"]],
}


class _FieldSpecModel(BaseModel):
    """Shape of a single field spec."""

    model_config = ConfigDict(extra="forbid", strict=True, arbitrary_types_allowed=True)

    type: Any = "any"
    required: bool = False
    default: Any = None
    doc: str | None = None


@dataclass(frozen=True)
class CompiledSchema:
    """Schema handle produced by :meth:`PydanticValidator.compile_schema`.

    Attributes
    ----------
    raw : Any
        The schema exactly as it was passed in
    specs : tuple[tuple[str, FieldSpec], ...]
        Normalized field specs, in schema order
    model : type[BaseModel]
        Generated pydantic model; its fields are aliased to the schema names
    """

    raw: Any
    specs: tuple[tuple[str, FieldSpec], ...]
    model: type[BaseModel]

    def attribute(self, field: str) -> str:
        """Return the model attribute that holds ``field``."""
        for attribute, info in self.model.model_fields.items():
            if info.alias == field:
                return attribute
        raise KeyError(field)


def annotation_for(tag: Any, field: str) -> Any:
    """Translate a type tag into a pydantic-ready annotation.

    Raises
    ------
    SchemaError
        If the tag is not part of the supported vocabulary
    """
    if isinstance(tag, str):
        if tag in _SIMPLE_TYPES:
            return _SIMPLE_TYPES[tag]
    elif isinstance(tag, tuple) and tag:
        kind, *args = tag
        match kind, args:
            case "map", [key_tag, value_tag]:
                key_type = annotation_for(key_tag, field)
                return dict[key_type, annotation_for(value_tag, field)]  # type: ignore[valid-type]
            case "list", [item_tag]:
                return list[annotation_for(item_tag, field)]  # type: ignore[misc]
            case "in", [choices] if choices:
                return Literal[tuple(choices)]  # type: ignore[valid-type]
            case "or", [tags] if tags:
                members = tuple(annotation_for(t, field) for t in tags)
                return Union[members]  # type: ignore[valid-type]
            case "struct", [cls] if isinstance(cls, type):
                return InstanceOf[cls]
    raise SchemaError(field, f"unknown type tag {format_type_tag(tag)}")


class PydanticValidator:
    """Full :class:`~blueprint.options.base.SchemaValidator` delegating to pydantic."""

    name = "pydantic"

    def compile_schema(self, raw_schema: Any) -> CompiledSchema:
        """Check the schema's shape and build its pydantic model.

        Raises
        ------
        SchemaError
            On duplicate field names, unknown spec keys, badly typed spec
            values or unknown type tags
        """
        if isinstance(raw_schema, CompiledSchema):
            return raw_schema

        try:
            specs = normalize_fields(raw_schema)
        except (TypeError, ValueError) as e:
            raise SchemaError(None, str(e)) from e

        definitions: dict[str, Any] = {}
        seen: set[str] = set()
        for index, (name, spec) in enumerate(specs):
            if not isinstance(name, str):
                raise SchemaError(None, f"field names must be strings, got {name!r}")
            if name in seen:
                raise SchemaError(name, "duplicate field name")
            seen.add(name)

            try:
                checked = _FieldSpecModel.model_validate(spec)
            except PydanticValidationError as e:
                first = e.errors(include_url=False)[0]
                key = ".".join(str(part) for part in first["loc"])
                raise SchemaError(name, f"{key}: {first['msg']}") from e

            annotation = annotation_for(checked.type, name)
            if not checked.required and checked.default is None and annotation is not Any:
                # Unset optional fields hold None on the record
                annotation = Optional[annotation]
            if checked.required:
                field_info = Field(alias=name, description=checked.doc)
            else:
                field_info = Field(default=checked.default, alias=name, description=checked.doc)
            # Positional attribute names avoid clashes with BaseModel's own attributes
            definitions[f"field_{index}"] = (annotation, field_info)

        model = create_model("Record", __config__=_MODEL_CONFIG, **definitions)
        logger.debug("Compiled schema with {count} fields", count=len(specs))
        return CompiledSchema(raw=raw_schema, specs=tuple(specs), model=model)

    def raw(self, schema: Any) -> Any:
        if isinstance(schema, CompiledSchema):
            return schema.raw
        return schema

    def fields(self, schema: Any) -> list[tuple[str, FieldSpec]]:
        return list(self.compile_schema(schema).specs)

    def docs(self, schema: Any) -> str:
        compiled = self.compile_schema(schema)
        model_fields = compiled.model.model_fields
        return render_docs([
            (
                name,
                {**spec, "doc": model_fields[compiled.attribute(name)].description},
            )
            for name, spec in compiled.specs
        ])

    def typespec(self, schema: Any, field: str | None = None) -> Any:
        """Return the generated model, or the annotation of a single field.

        Raises
        ------
        KeyError
            If ``field`` is not part of the schema
        """
        compiled = self.compile_schema(schema)
        if field is None:
            return compiled.model
        return compiled.model.model_fields[compiled.attribute(field)].annotation

    def validate(self, config: Any, schema: Any) -> Ok[dict[str, Any]] | Err[ValidationError]:
        """Validate ``config`` strictly, returning every schema field on success.

        Repeated keys are merged with the last occurrence winning.
        """
        compiled = self.compile_schema(schema)
        data = dict(config_pairs(config))

        try:
            instance = compiled.model.model_validate(data)
        except PydanticValidationError as e:
            return Err(_to_validation_error(e, compiled))

        return Ok({
            info.alias: getattr(instance, attribute)
            for attribute, info in compiled.model.model_fields.items()
        })

    def validate_or_raise(self, config: Any, schema: Any) -> dict[str, Any]:
        result = self.validate(config, schema)
        if isinstance(result, Err):
            raise result.reason
        return result.value


def _to_validation_error(
    error: PydanticValidationError, compiled: CompiledSchema
) -> ValidationError:
    """Convert a pydantic error into a :class:`ValidationError` naming the first failure."""
    specs = dict(compiled.specs)
    errors = [
        {
            "field": details["loc"][0] if details["loc"] else None,
            "type": details["type"],
            "message": details["msg"],
        }
        for details in error.errors(include_url=False)
    ]

    first = error.errors(include_url=False)[0]
    field = first["loc"][0] if first["loc"] else "<root>"
    if first["type"] == "missing":
        return ValidationError(str(field), "required field missing", errors=errors)
    if first["type"] == "extra_forbidden":
        return ValidationError(str(field), "unknown field", value=first["input"], errors=errors)

    tag = specs.get(field, {}).get("type", "any")
    message = first["msg"]
    constraint = f"expected {format_type_tag(tag)}, {message[0].lower()}{message[1:]}"
    return ValidationError(str(field), constraint, value=first["input"], errors=errors)
