"""Schema manifest generation.

Drives a full regeneration of the output directory from a set of pubsub proto
files: stale manifests are removed, one PubSubSchema manifest is written per
input, and the kustomization index is written last. The run is fail-fast with
no rollback; if a step fails, manifests already written stay on disk and the
index is not rewritten.
"""

from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

import click
import structlog

from .config import GeneratorConfig
from .emitters import KustomizationEmitter, PubSubSchemaEmitter, get_emitter
from .exceptions import DuplicateNameError, EmptyInputError, wrap_os_error
from .generation_report import GeneratedSchema, GenerationReport
from .inputs import resolve_inputs
from .naming import derive_schema_name
from .output_dir import remove_generated_schemas

logger = structlog.get_logger(__name__)


def read_proto(path: Path) -> str:
    """Read a proto file without translating its line endings."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise wrap_os_error(e, path, "read") from e
    # undecodable bytes survive the round trip back to disk
    return data.decode("utf-8", errors="surrogateescape")


def find_duplicate_names(files: Sequence[Path]) -> Dict[str, List[Path]]:
    """Map each schema name derived from more than one input to those inputs."""
    by_name: Dict[str, List[Path]] = defaultdict(list)
    for path in files:
        by_name[derive_schema_name(path)].append(path)
    return {name: paths for name, paths in by_name.items() if len(paths) > 1}


class SchemaGenerator:
    """Generates PubSubSchema manifests and their kustomization index."""

    def __init__(
        self,
        strict_names: bool = False,
        progress: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Args:
            strict_names: Fail when two inputs derive the same schema name
                instead of letting the later input overwrite the earlier one
            progress: Called with one line per written manifest; defaults to
                echoing on stdout
        """
        self.strict_names = strict_names
        self.progress = progress or click.echo
        self.schema_emitter: PubSubSchemaEmitter = get_emitter("pubsubschema")()  # type: ignore[assignment]
        self.index_emitter: KustomizationEmitter = get_emitter("kustomization")()  # type: ignore[assignment]

    def generate_all(
        self, pubsub_files: Sequence[Path], output_dir: Union[str, Path]
    ) -> GenerationReport:
        """
        Regenerate ``output_dir`` from ``pubsub_files``.

        Args:
            pubsub_files: Input proto files
            output_dir: Directory receiving the manifests and the index

        Returns:
            GenerationReport describing the completed run

        Raises:
            EmptyInputError: If ``pubsub_files`` is empty; nothing is touched
            DuplicateNameError: If names collide in strict mode; nothing is touched
            GeneratorIOError: If any filesystem operation fails
        """
        if not pubsub_files:
            raise EmptyInputError()

        output_dir = Path(output_dir)
        files = sorted((Path(p) for p in pubsub_files), key=str)
        report = GenerationReport(output_directory=output_dir, inputs=files)

        duplicates = find_duplicate_names(files)
        if duplicates:
            report.duplicate_names = duplicates
            if self.strict_names:
                name, paths = sorted(duplicates.items())[0]
                raise DuplicateNameError(
                    f"schema name {name!r} is derived from {len(paths)} inputs: "
                    + ", ".join(str(p) for p in paths),
                    schema_name=name,
                    inputs=list(paths),
                )
            for name, paths in sorted(duplicates.items()):
                logger.warning(
                    "Schema name collision, last input wins",
                    schema_name=name,
                    inputs=[str(p) for p in paths],
                )

        # Stale manifests would otherwise keep being applied by kustomize.
        report.removed_stale = remove_generated_schemas(output_dir)

        for path in files:
            proto = read_proto(path)
            name = derive_schema_name(path)
            out = self.schema_emitter.emit(name, proto, output_dir)
            self.progress(f"Wrote {name} -> {out}")
            logger.info(
                "Generated schema manifest",
                schema_name=name,
                input=str(path),
                path=str(out),
            )
            report.schemas.append(
                GeneratedSchema(schema_name=name, source=path, manifest=out)
            )

        report.kustomization = self.index_emitter.emit(report.resources, output_dir)
        logger.info(
            "Wrote kustomization",
            path=str(report.kustomization),
            count=len(report.resources),
        )
        return report


def run(
    config: GeneratorConfig, progress: Optional[Callable[[str], None]] = None
) -> GenerationReport:
    """Resolve inputs from ``config`` and run a full generation."""
    files = resolve_inputs(config.pubsub_dir, config.glob)
    generator = SchemaGenerator(strict_names=config.strict_names, progress=progress)
    return generator.generate_all(files, config.require_output_dir())
