"""Tests for the blueprint registry."""

from __future__ import annotations

from typing import Any

import pytest

from blueprint import build
from blueprint.registry import BlueprintRegistry, registry
from blueprint.result import Err, Ok


class Plain:
    pass


class SelfBuilding:
    @classmethod
    def __blueprint__(cls, values: Any) -> Ok[str]:
        return Ok("self")


def constructor(values: Any) -> Ok[str]:
    return Ok("registered")


@pytest.fixture
def fresh_registry() -> BlueprintRegistry:
    return BlueprintRegistry()


class TestBlueprintRegistry:
    """Tests for BlueprintRegistry."""

    def test_empty(self, fresh_registry: BlueprintRegistry) -> None:
        """Test a new registry holds nothing."""
        assert len(fresh_registry) == 0
        assert fresh_registry.get(Plain) is None

    def test_register_and_get(self, fresh_registry: BlueprintRegistry) -> None:
        """Test registering a constructor."""
        fresh_registry.register(Plain, constructor)
        assert Plain in fresh_registry
        assert fresh_registry.get(Plain) is constructor

    def test_last_writer_wins(self, fresh_registry: BlueprintRegistry) -> None:
        """Test that overriding replaces the constructor."""

        def replacement(values: Any) -> Err[str]:
            return Err("replaced")

        fresh_registry.register(Plain, constructor)
        fresh_registry.override(Plain, replacement)
        assert fresh_registry.get(Plain) is replacement
        assert len(fresh_registry) == 1

    def test_class_attribute_fallback(self, fresh_registry: BlueprintRegistry) -> None:
        """Test that unregistered classes with __blueprint__ are found."""
        assert fresh_registry.get(SelfBuilding) == SelfBuilding.__blueprint__
        assert SelfBuilding not in fresh_registry

    def test_registered_entry_beats_class_attribute(
        self, fresh_registry: BlueprintRegistry
    ) -> None:
        """Test precedence of explicit registration."""
        fresh_registry.register(SelfBuilding, constructor)
        assert fresh_registry.get(SelfBuilding) is constructor

    def test_unregister(self, fresh_registry: BlueprintRegistry) -> None:
        """Test removing an entry, including a missing one."""
        fresh_registry.register(Plain, constructor)
        fresh_registry.unregister(Plain)
        fresh_registry.unregister(Plain)
        assert fresh_registry.get(Plain) is None

    def test_rejects_non_class(self, fresh_registry: BlueprintRegistry) -> None:
        """Test that only classes can be keys."""
        with pytest.raises(TypeError, match="Only classes"):
            fresh_registry.register(Plain(), constructor)  # type: ignore[arg-type]

    def test_rejects_non_callable(self, fresh_registry: BlueprintRegistry) -> None:
        """Test that constructors must be callable."""
        with pytest.raises(TypeError, match="callable"):
            fresh_registry.register(Plain, "not callable")  # type: ignore[arg-type]

    def test_reset(self, fresh_registry: BlueprintRegistry) -> None:
        """Test clearing all entries."""
        fresh_registry.register(Plain, constructor)
        fresh_registry._reset_for_testing()
        assert len(fresh_registry) == 0


class TestGlobalRegistry:
    """build() resolves constructors through the process-wide registry."""

    def test_override_changes_build(self) -> None:
        """Test that an override registered at startup is used by build."""
        registry.override(Plain, constructor)
        try:
            assert build(Plain, []) == Ok("registered")
        finally:
            registry.unregister(Plain)

        assert isinstance(build(Plain, []), Err)
