"""PubSubSchema emitter.

Wraps the raw text of a ``*.pubsub.proto`` file into a Config Connector
``PubSubSchema`` manifest. The proto text goes into a YAML literal block
scalar, so nothing is escaped; only line endings are normalized and every
line is indented under the ``definition`` key.

Lines of the proto text are not inspected. Content that interacts with the
literal block indentation rules (for instance a first line that is itself
indented more than the rest) is passed through unchanged and may be read
differently by YAML parsers.
"""

from pathlib import Path
from typing import Union

from ..naming import schema_manifest_filename
from . import register_emitter
from .base import ManifestEmitter

LITERAL_BLOCK_INDENT = "    "

SCHEMA_API_VERSION = "pubsub.cnrm.cloud.google.com/v1beta1"
SCHEMA_KIND = "PubSubSchema"
SCHEMA_TYPE = "PROTOCOL_BUFFER"


def normalize_newlines(text: str) -> str:
    """Convert CRLF to LF and end the text with exactly one newline."""
    text = text.replace("\r\n", "\n")
    return text.rstrip("\n") + "\n"


def indent_for_literal_block(text: str, indent: str = LITERAL_BLOCK_INDENT) -> str:
    """
    Prefix every line of ``text`` with ``indent``.

    Splitting keeps the empty element after a trailing newline, and that
    element is indented too, so the block ends with a bare indent.
    """
    return "\n".join(indent + line for line in text.split("\n"))


def dedent_literal_block(block: str, indent: str = LITERAL_BLOCK_INDENT) -> str:
    """Strip ``indent`` from every line; the inverse of indent_for_literal_block."""
    lines = block.split("\n")
    for i, line in enumerate(lines):
        if not line.startswith(indent):
            raise ValueError(f"line {i + 1} is not indented with {indent!r}")
        lines[i] = line[len(indent) :]
    return "\n".join(lines)


def schema_manifest(
    schema_name: str, proto_definition: str, indent: str = LITERAL_BLOCK_INDENT
) -> str:
    """Render a PubSubSchema manifest for an already normalized definition."""
    return (
        f"apiVersion: {SCHEMA_API_VERSION}\n"
        f"kind: {SCHEMA_KIND}\n"
        "metadata:\n"
        f"  name: {schema_name}\n"
        "spec:\n"
        f"  type: {SCHEMA_TYPE}\n"
        "  definition: |\n" + indent_for_literal_block(proto_definition, indent)
    )


class PubSubSchemaEmitter(ManifestEmitter):
    """Emitter for Config Connector PubSubSchema manifests."""

    def render(self, schema_name: str, proto_text: str) -> str:
        indent = self.config.get("indent", LITERAL_BLOCK_INDENT)
        return schema_manifest(schema_name, normalize_newlines(proto_text), indent)

    def output_filename(self, schema_name: str) -> str:
        return schema_manifest_filename(schema_name)

    def emit(
        self, schema_name: str, proto_text: str, out_dir: Union[str, Path]
    ) -> Path:
        """Render and write the manifest for one schema.

        Args:
            schema_name: Derived schema name used as ``metadata.name``
            proto_text: Raw contents of the pubsub proto file
            out_dir: Output directory

        Returns:
            Path of the written manifest
        """
        return self.write(
            out_dir,
            self.output_filename(schema_name),
            self.render(schema_name, proto_text),
        )


register_emitter("pubsubschema", PubSubSchemaEmitter)
