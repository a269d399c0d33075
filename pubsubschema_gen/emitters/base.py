"""Base emitter class for manifest generation.

This module defines the abstract base class for all manifest emitters,
providing a common interface for rendering a document and writing it into
the output directory.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..output_dir import write_file


class ManifestEmitter(ABC):
    """Abstract base class for manifest emitters.

    Subclasses render a document as literal text; writing is shared so every
    emitted file gets the same directory creation and line ending handling.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize emitter with optional configuration.

        Args:
            config: Optional emitter-specific configuration
        """
        self.config = config or {}

    @abstractmethod
    def render(self, *args: Any, **kwargs: Any) -> str:
        """Render the manifest document as text."""
        raise NotImplementedError

    @abstractmethod
    def output_filename(self, *args: Any, **kwargs: Any) -> str:
        """Return the base name of the file this emitter writes."""
        raise NotImplementedError

    def write(self, out_dir: Union[str, Path], filename: str, document: str) -> Path:
        """Write a rendered document into ``out_dir``.

        Returns:
            Path of the written file
        """
        return write_file(Path(out_dir) / filename, document)

    def get_format_name(self) -> str:
        """Get the name of the manifest kind this emitter produces.

        Returns:
            Format name string (e.g., 'pubsubschema', 'kustomization')
        """
        class_name = self.__class__.__name__
        if class_name.endswith("Emitter"):
            return class_name[:-7].lower()
        return class_name.lower()
