"""Manifest emitters package.

Complete emitter registry with one implementation per generated document:
- PubSubSchemaEmitter (one Config Connector PubSubSchema per proto file)
- KustomizationEmitter (index over all generated schema manifests)
"""

from typing import Dict, Type

from .base import ManifestEmitter

# Global emitter registry
_EMITTER_REGISTRY: Dict[str, Type[ManifestEmitter]] = {}


def register_emitter(format_name: str, emitter_class: Type[ManifestEmitter]) -> None:
    """Register an emitter class for a manifest kind.

    Args:
        format_name: Name of the manifest kind (e.g., 'pubsubschema')
        emitter_class: Emitter class implementing ManifestEmitter interface
    """
    _EMITTER_REGISTRY[format_name.lower()] = emitter_class


def get_emitter_registry() -> Dict[str, Type[ManifestEmitter]]:
    """Get a copy of the current emitter registry."""
    return _EMITTER_REGISTRY.copy()


def get_emitter(format_name: str) -> Type[ManifestEmitter]:
    """Get emitter class for specified manifest kind.

    Raises:
        KeyError: If no emitter is registered under ``format_name``
    """
    format_key = format_name.lower()
    if format_key not in _EMITTER_REGISTRY:
        available_formats = list(_EMITTER_REGISTRY.keys())
        raise KeyError(
            f"No emitter registered for format '{format_name}'. "
            f"Available formats: {available_formats}"
        )

    return _EMITTER_REGISTRY[format_key]


# Import emitter implementations to auto-register them
from .kustomization_emitter import KustomizationEmitter  # noqa: E402
from .pubsub_schema_emitter import PubSubSchemaEmitter  # noqa: E402

__all__ = [
    "KustomizationEmitter",
    "ManifestEmitter",
    "PubSubSchemaEmitter",
    "get_emitter",
    "get_emitter_registry",
    "register_emitter",
]
