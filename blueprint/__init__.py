"""Blueprint - schema-driven record construction.

Declare a record type from a schema, then build validated instances of it:

>>> from blueprint import blueprint, build
>>> @blueprint(schema={"number": {"type": "integer", "required": True}})
... class Counter:
...     pass
>>> build(Counter, {"number": 1})
Ok(value=Counter(number=1))
"""

from blueprint.builder import build, build_or_raise
from blueprint.declare import blueprint
from blueprint.exceptions import (
    BlueprintError,
    ConfigurationError,
    ConstructionError,
    InvalidKeysError,
    NoBlueprintError,
    SchemaError,
    ValidationError,
)
from blueprint.registry import registry
from blueprint.result import Err, Ok, Result

try:
    from importlib.metadata import version

    __version__ = version("blueprint-records")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

__all__ = [
    "BlueprintError",
    "ConfigurationError",
    "ConstructionError",
    "Err",
    "InvalidKeysError",
    "NoBlueprintError",
    "Ok",
    "Result",
    "SchemaError",
    "ValidationError",
    "blueprint",
    "build",
    "build_or_raise",
    "registry",
]
