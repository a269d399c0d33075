"""Layered configuration for pubsubschema-gen."""

from .loader import ConfigLoader, load_config
from .models import GeneratorConfig

__all__ = [
    "ConfigLoader",
    "GeneratorConfig",
    "load_config",
]
