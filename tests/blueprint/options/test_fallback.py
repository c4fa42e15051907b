"""Tests for the presence-only fallback validator."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, get_type_hints

import pytest

from blueprint.exceptions import InvalidKeysError
from blueprint.options.base import SchemaValidator
from blueprint.options.fallback import FallbackValidator, InvalidKeys, type_for
from blueprint.options.pydantic import PydanticValidator
from blueprint.result import Err, Ok
from blueprint.types import Keyword, NonEmptyKeyword, NonNegativeInt, Pid, PositiveInt

SCHEMA = {
    "number": {"type": "integer", "required": True},
    "string": {"type": "string"},
}


@pytest.fixture
def validator() -> FallbackValidator:
    return FallbackValidator()


class TestSchemaHandle:
    """Compiling and unwrapping schemas."""

    def test_satisfies_protocol(self, validator: FallbackValidator) -> None:
        """Test that the fallback implements SchemaValidator."""
        assert isinstance(validator, SchemaValidator)
        assert validator.name == "fallback"

    def test_compile_returns_raw_schema(self, validator: FallbackValidator) -> None:
        """Test that compiling is the identity."""
        assert validator.compile_schema(SCHEMA) is SCHEMA

    def test_compile_never_checks_shape(self, validator: FallbackValidator) -> None:
        """Test that malformed schemas are accepted as is."""
        malformed = {"x": {"typ": "nonsense", "required": "maybe"}}
        assert validator.compile_schema(malformed) is malformed

    def test_raw_round_trip(self, validator: FallbackValidator) -> None:
        """Test raw(compile_schema(s)) == s."""
        assert validator.raw(validator.compile_schema(SCHEMA)) == SCHEMA

    def test_fields_accepts_pairs(self, validator: FallbackValidator) -> None:
        """Test that schemas given as pairs normalize to dict specs."""
        schema = [("number", [("type", "integer"), ("required", True)])]
        assert validator.fields(schema) == [("number", {"type": "integer", "required": True})]


class TestDocs:
    """Rendering field documentation."""

    def test_docs_without_doc_strings(self, validator: FallbackValidator) -> None:
        """Test one bullet per field in schema order."""
        schema = {"some_string": {"type": "string"}, "a_number": {"type": "integer"}}
        assert validator.docs(schema) == (
            "* some_string (type: string)\n"
            "* a_number (type: integer)\n"
        )

    def test_docs_with_doc_string(self, validator: FallbackValidator) -> None:
        """Test that doc strings follow the type after a dash."""
        schema = {
            "some_string": {"type": "string", "doc": "a cool string, yo!"},
            "a_number": {"type": "integer"},
        }
        assert validator.docs(schema) == (
            "* some_string (type: string) - a cool string, yo!\n"
            "* a_number (type: integer)\n"
        )

    def test_docs_renders_compound_tags(self, validator: FallbackValidator) -> None:
        """Test that tuple tags are rendered with their repr."""
        schema = {"lookup": {"type": ("map", "reference", "pid")}}
        assert validator.docs(schema) == "* lookup (type: ('map', 'reference', 'pid'))\n"

    def test_docs_without_type(self, validator: FallbackValidator) -> None:
        """Test that untyped fields are documented as any, like the full validator."""
        schema = {"value": {"doc": "free form"}}
        assert validator.docs(schema) == "* value (type: any) - free form\n"
        assert validator.docs(schema) == PydanticValidator().docs(schema)


class TestTypespec:
    """Deriving type expressions."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("any", Any),
            ("atom", str),
            ("boolean", bool),
            ("float", float),
            ("integer", int),
            ("non_neg_integer", NonNegativeInt),
            ("pos_integer", PositiveInt),
            ("pid", Pid),
            ("map", dict[Any, Any]),
            ("reference", Hashable),
            ("string", str),
            ("keyword_list", Keyword),
            ("non_empty_keyword_list", NonEmptyKeyword),
        ],
    )
    def test_supported_tags(self, tag: str, expected: Any) -> None:
        """Test the fixed tag vocabulary."""
        assert type_for(tag) == expected

    def test_map_with_key_and_value_types(self) -> None:
        """Test ("map", K, V) maps to dict[K, V]."""
        assert type_for(("map", "reference", "pid")) == dict[Hashable, Pid]

    @pytest.mark.parametrize("tag", ["tuple", ("or", ["map", "keyword_list"]), None, 42])
    def test_unknown_tags_degrade_to_any(self, tag: Any) -> None:
        """Test that unsupported tags never raise."""
        assert type_for(tag) is Any

    def test_field_typespec(self, validator: FallbackValidator) -> None:
        """Test per-field lookups."""
        assert validator.typespec(SCHEMA, "number") is int
        assert validator.typespec(SCHEMA, "string") is str

    def test_field_typespec_for_missing_field(self, validator: FallbackValidator) -> None:
        """Test that an unknown field maps to Any."""
        assert validator.typespec(SCHEMA, "missing") is Any

    def test_record_typespec_is_typed_dict(self, validator: FallbackValidator) -> None:
        """Test the whole-record signature."""
        signature = validator.typespec(SCHEMA)
        assert get_type_hints(signature) == {"number": int, "string": str}
        assert signature.__required_keys__ == frozenset({"number"})
        assert signature.__optional_keys__ == frozenset({"string"})


class TestValidate:
    """Presence-only validation."""

    def test_all_required_keys_present(self, validator: FallbackValidator) -> None:
        """Test that a complete config is returned unchanged."""
        config = [("string", "some string"), ("number", 42)]
        result = validator.validate(config, SCHEMA)
        assert result == Ok(config)
        assert result.value is config

    def test_wrong_types_pass(self, validator: FallbackValidator) -> None:
        """Test that value types are never checked."""
        config = [("string", "x"), ("number", "not a number")]
        assert validator.validate(config, SCHEMA) == Ok(config)

    def test_extra_and_repeated_keys_pass(self, validator: FallbackValidator) -> None:
        """Test that unknown and duplicate keys are ignored."""
        config = [("number", 1), ("number", 2), ("bogus", True)]
        assert validator.validate(config, SCHEMA) == Ok(config)

    def test_missing_required_key(self, validator: FallbackValidator) -> None:
        """Test the error carries expected and found keys."""
        result = validator.validate({"string": "x"}, SCHEMA)
        assert result == Err(InvalidKeys(expected=["number"], found=["string"]))

    def test_empty_config(self, validator: FallbackValidator) -> None:
        """Test that an empty config fails when a field is required."""
        assert validator.validate([], SCHEMA) == Err(InvalidKeys(expected=["number"], found=[]))

    def test_rejects_non_pair_config(self, validator: FallbackValidator) -> None:
        """Test that config must be a mapping or pairs."""
        with pytest.raises(TypeError):
            validator.validate(42, SCHEMA)

    def test_validate_or_raise_returns_config(self, validator: FallbackValidator) -> None:
        """Test the raising variant on success."""
        config = {"number": "whatever"}
        assert validator.validate_or_raise(config, SCHEMA) is config

    def test_validate_or_raise_raises(self, validator: FallbackValidator) -> None:
        """Test the raising variant on failure."""
        with pytest.raises(InvalidKeysError) as exc_info:
            validator.validate_or_raise([("string", "x")], SCHEMA)

        assert str(exc_info.value) == (
            "config doesn't match schema: InvalidKeys(expected=['number'], found=['string'])"
        )
        assert exc_info.value.reason == InvalidKeys(expected=["number"], found=["string"])
