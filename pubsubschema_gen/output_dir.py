"""Output directory management.

Generated manifests are owned by the output directory: every run removes the
``*.schema.yaml`` files a previous run left behind before writing new ones, so
renamed or deleted inputs never leave orphaned manifests that kustomize would
keep applying. Files that do not carry the manifest suffix are left alone.
"""

from pathlib import Path
from typing import List, Union

import structlog

from .exceptions import wrap_os_error
from .naming import SCHEMA_MANIFEST_SUFFIX

logger = structlog.get_logger(__name__)


def normalize_line_endings(contents: str) -> str:
    """Convert CRLF sequences to LF."""
    return contents.replace("\r\n", "\n")


def write_file(path: Union[str, Path], contents: str) -> Path:
    """
    Write ``contents`` to ``path`` with LF line endings.

    Missing parent directories are created. An existing file at ``path`` is
    replaced.

    Args:
        path: Destination file
        contents: Text to write

    Returns:
        The path written

    Raises:
        GeneratorIOError: If a directory cannot be created or the write fails
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise wrap_os_error(e, path.parent, "mkdir") from e

    data = normalize_line_endings(contents).encode("utf-8", errors="surrogateescape")
    try:
        path.write_bytes(data)
    except OSError as e:
        raise wrap_os_error(e, path, "write") from e

    logger.debug("Wrote file", path=str(path), bytes=len(data))
    return path


def remove_generated_schemas(output_dir: Union[str, Path]) -> List[Path]:
    """
    Delete previously generated schema manifests from ``output_dir``.

    Only direct entries are considered. Directories are skipped even when
    their name ends with the manifest suffix. A missing ``output_dir`` is not
    an error; it will be created by the first write.

    Returns:
        Paths of the removed files, sorted

    Raises:
        GeneratorIOError: If listing the directory or removing a file fails
    """
    output_dir = Path(output_dir)
    try:
        entries = sorted(output_dir.iterdir())
    except FileNotFoundError:
        logger.debug("Output directory does not exist yet", output_dir=str(output_dir))
        return []
    except OSError as e:
        raise wrap_os_error(e, output_dir, "list") from e

    removed: List[Path] = []
    for entry in entries:
        if entry.is_dir():
            continue
        if not entry.name.endswith(SCHEMA_MANIFEST_SUFFIX):
            continue
        try:
            entry.unlink()
        except OSError as e:
            raise wrap_os_error(e, entry, "remove") from e
        removed.append(entry)

    if removed:
        logger.info(
            "Removed stale schema manifests",
            output_dir=str(output_dir),
            count=len(removed),
        )
    return removed
