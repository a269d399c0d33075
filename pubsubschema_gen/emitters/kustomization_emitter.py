"""Kustomization emitter.

Writes the ``kustomization.yaml`` index that lists every manifest generated
in a run. It is written last, so a fresh index means the run completed.
"""

from pathlib import Path
from typing import Iterable, List, Union

from . import register_emitter
from .base import ManifestEmitter

KUSTOMIZATION_FILENAME = "kustomization.yaml"
KUSTOMIZATION_API_VERSION = "kustomize.config.k8s.io/v1beta1"


def kustomization_manifest(resources: Iterable[str]) -> str:
    """Render a Kustomization listing ``resources`` in sorted order."""
    lines: List[str] = [
        f"apiVersion: {KUSTOMIZATION_API_VERSION}\n",
        "kind: Kustomization\n\n",
        "resources:\n",
    ]
    for resource in sorted(resources):
        lines.append(f"  - {resource}\n")
    return "".join(lines)


class KustomizationEmitter(ManifestEmitter):
    """Emitter for the kustomization index of generated schema manifests."""

    def render(self, resources: Iterable[str]) -> str:
        return kustomization_manifest(resources)

    def output_filename(self) -> str:
        return KUSTOMIZATION_FILENAME

    def emit(self, resources: Iterable[str], out_dir: Union[str, Path]) -> Path:
        return self.write(out_dir, self.output_filename(), self.render(resources))


register_emitter("kustomization", KustomizationEmitter)
