"""Exception hierarchy for blueprint.

All blueprint exceptions inherit from BlueprintError so callers can catch
every library failure with a single clause.
"""

from __future__ import annotations

from typing import Any

# ============================================================================
# Base Exception
# ============================================================================


class BlueprintError(Exception):
    """Base exception for all blueprint errors."""

    pass


# ============================================================================
# Configuration & Schema Errors
# ============================================================================


class ConfigurationError(BlueprintError):
    """Raised when blueprint's own configuration is invalid.

    Examples
    --------
    Example usage::

        raise ConfigurationError("validator", "must be one of: auto, pydantic, fallback")
    """

    def __init__(self, setting: str, reason: str) -> None:
        super().__init__(f"Configuration error in '{setting}': {reason}")
        self.setting = setting
        self.reason = reason


class SchemaError(BlueprintError):
    """Raised when a raw schema is malformed.

    Only the full validator checks schema shape; the fallback accepts anything.

    Examples
    --------
    Example usage::

        raise SchemaError("count", "unknown type tag 'integr'")
    """

    def __init__(self, field: str | None, reason: str) -> None:
        if field is None:
            msg = f"Invalid schema: {reason}"
        else:
            msg = f"Invalid schema for field '{field}': {reason}"
        super().__init__(msg)
        self.field = field
        self.reason = reason


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(BlueprintError):
    """Raised (or returned inside ``Err``) when config fails full validation.

    Carries the first offending field together with every error reported by
    the underlying validation library.

    Examples
    --------
    Example usage::

        raise ValidationError("number", "expected integer", value="not a number")
    """

    def __init__(
        self,
        field: str,
        constraint: str,
        value: object = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the first field that failed validation
            constraint: Description of the violated constraint
            value: The offending value (optional)
            errors: All errors reported by the validator (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value
        self.errors = errors or []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            self.field == other.field
            and self.constraint == other.constraint
            and self.value == other.value
            and self.errors == other.errors
        )

    __hash__ = BlueprintError.__hash__


class InvalidKeysError(BlueprintError):
    """Raised by the fallback validator when required keys are missing."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"config doesn't match schema: {reason!r}")
        self.reason = reason


# ============================================================================
# Construction Errors
# ============================================================================


class NoBlueprintError(BlueprintError):
    """Raised when a type has no registered construction function.

    Examples
    --------
    Example usage::

        raise NoBlueprintError(SomeClass)
    """

    def __init__(self, target: type) -> None:
        super().__init__(f"No blueprint registered for {qualified_name(target)}")
        self.target = target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoBlueprintError):
            return NotImplemented
        return self.target is other.target

    __hash__ = BlueprintError.__hash__


class ConstructionError(BlueprintError, ValueError):
    """Raised by ``build_or_raise`` when the failure reason is not an exception."""

    def __init__(self, target: type, reason: object) -> None:
        super().__init__(f"unable to construct {qualified_name(target)}: {reason!r}")
        self.target = target
        self.reason = reason


def qualified_name(target: object) -> str:
    """Return ``module.QualName`` for a class, or for the class of an instance."""
    cls = target if isinstance(target, type) else type(target)
    return f"{cls.__module__}.{cls.__qualname__}"
