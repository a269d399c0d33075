"""Generate Config Connector PubSubSchema manifests from pubsub proto files."""

from .exceptions import (
    ConfigurationError,
    DuplicateNameError,
    EmptyInputError,
    GeneratorIOError,
    PatternError,
    PubSubSchemaGenError,
)
from .generator import SchemaGenerator, run
from .inputs import resolve_inputs
from .naming import derive_schema_name

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DuplicateNameError",
    "EmptyInputError",
    "GeneratorIOError",
    "PatternError",
    "PubSubSchemaGenError",
    "SchemaGenerator",
    "derive_schema_name",
    "resolve_inputs",
    "run",
]
