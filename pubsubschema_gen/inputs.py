"""Input resolution for the schema generator.

Finds the ``*.pubsub.proto`` files a run will turn into manifests.
"""

import fnmatch
import os
import stat
from pathlib import Path
from typing import List, Union

import structlog

from .exceptions import PatternError

logger = structlog.get_logger(__name__)

DEFAULT_PUBSUB_DIR = "gen/proto/infra/pubsub"
DEFAULT_GLOB = "*.pubsub.proto"


def validate_glob_pattern(pattern: str) -> None:
    """
    Reject glob patterns that cannot be matched reliably.

    Checks for an unterminated ``[...]`` character class and a trailing escape
    backslash. An empty pattern is valid; it matches no files.

    Raises:
        PatternError: If the pattern is malformed
    """
    if pattern.endswith("\\"):
        raise PatternError(
            "syntax error in pattern: trailing backslash", pattern=pattern
        )

    i = 0
    n = len(pattern)
    while i < n:
        if pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            # a leading ']' is a member of the class, not its end
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise PatternError(
                    "syntax error in pattern: unterminated character class",
                    pattern=pattern,
                )
            i = close + 1
        else:
            i += 1


def _match_component(bases: List[str], component: str) -> List[str]:
    """Return the entries of each base directory whose name matches ``component``.

    Unlike ``glob.glob``, a leading ``*`` or ``?`` also matches dot-files.
    Directories that cannot be listed contribute nothing.
    """
    matches: List[str] = []
    for base in bases:
        try:
            with os.scandir(base) as entries:
                names = [entry.name for entry in entries]
        except OSError as e:
            logger.debug("Skipping unlistable directory", path=base, reason=str(e))
            continue
        matches.extend(
            os.path.join(base, name)
            for name in names
            if fnmatch.fnmatchcase(name, component)
        )
    return matches


def resolve_inputs(pubsub_dir: Union[str, Path], glob_pattern: str) -> List[Path]:
    """
    Return the regular files in ``pubsub_dir`` matching ``glob_pattern``.

    The pattern is matched one path component at a time against directory
    entries, so ``*`` matches names starting with a dot. The directory path
    itself is taken literally. Matches that are not regular files
    (directories, special files) are dropped, as are matches whose metadata
    lookup fails, e.g. dangling symlinks. The result is sorted so every run
    sees the same order. An empty result, including the one an empty pattern
    produces, is returned as-is; deciding whether that is an error is up to
    the caller.

    Args:
        pubsub_dir: Directory to scan
        glob_pattern: Pattern evaluated inside ``pubsub_dir``

    Returns:
        Sorted list of matching file paths

    Raises:
        PatternError: If ``glob_pattern`` is malformed
    """
    validate_glob_pattern(glob_pattern)

    candidates = [str(pubsub_dir)]
    for component in glob_pattern.split("/"):
        if component not in ("", "."):
            candidates = _match_component(candidates, component)

    files: List[str] = []
    for match in candidates:
        try:
            st = os.stat(match)
        except OSError as e:
            logger.debug("Skipping unreadable match", path=match, reason=str(e))
            continue
        if stat.S_ISREG(st.st_mode):
            files.append(match)
        else:
            logger.debug("Skipping non-regular match", path=match)

    files.sort()
    logger.info(
        "Resolved pubsub inputs",
        pubsub_dir=str(pubsub_dir),
        glob=glob_pattern,
        count=len(files),
    )
    return [Path(f) for f in files]
