"""Schema name derivation for pubsub proto files."""

from pathlib import PurePath
from typing import Union

PUBSUB_PROTO_SUFFIX = ".pubsub.proto"
SCHEMA_MANIFEST_SUFFIX = ".schema.yaml"


def derive_schema_name(filename: Union[str, PurePath]) -> str:
    """
    Derive the PubSubSchema resource name from an input file name.

    The directory part and the ``.pubsub.proto`` suffix are dropped, the rest
    is lowercased and every ``.`` and ``_`` becomes ``-``. No further checks
    are made on the result (leading hyphens, length limits).

    Example:
        >>> derive_schema_name("gen/coreapp.test.v1.TestEvent.pubsub.proto")
        'coreapp-test-v1-testevent'
    """
    base = PurePath(filename).name
    if base.endswith(PUBSUB_PROTO_SUFFIX):
        base = base[: -len(PUBSUB_PROTO_SUFFIX)]
    return base.lower().replace(".", "-").replace("_", "-")


def schema_manifest_filename(schema_name: str) -> str:
    """Return the manifest file name generated for ``schema_name``."""
    return f"{schema_name}{SCHEMA_MANIFEST_SUFFIX}"
