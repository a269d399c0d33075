"""Generation reporting for a schema generation run.

Tracks what a run read, wrote and removed so the command line can print a
summary and tests can inspect the outcome without re-reading the disk.

When two inputs derive the same schema name the later one overwrites the
manifest, and the index lists that manifest once rather than once per input.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class GeneratedSchema:
    """One manifest written during a run."""

    schema_name: str
    source: Path
    manifest: Path


@dataclass
class GenerationReport:
    """Outcome of a complete generation run."""

    output_directory: Path
    inputs: List[Path] = field(default_factory=list)
    schemas: List[GeneratedSchema] = field(default_factory=list)
    removed_stale: List[Path] = field(default_factory=list)
    duplicate_names: Dict[str, List[Path]] = field(default_factory=dict)
    kustomization: Optional[Path] = None

    @property
    def resources(self) -> List[str]:
        """Sorted, de-duplicated manifest file names listed in the index."""
        return sorted({s.manifest.name for s in self.schemas})

    @property
    def completed(self) -> bool:
        return self.kustomization is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to a dictionary for logging."""
        return {
            "output_directory": str(self.output_directory),
            "inputs": len(self.inputs),
            "manifests_written": len(self.schemas),
            "resources": self.resources,
            "removed_stale": [p.name for p in self.removed_stale],
            "duplicate_names": {
                name: [str(p) for p in paths]
                for name, paths in self.duplicate_names.items()
            },
            "kustomization": str(self.kustomization) if self.kustomization else None,
        }
