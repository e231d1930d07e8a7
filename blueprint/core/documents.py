"""Document units and build configurations."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from blueprint.config.models import StyleProfile
from blueprint.exceptions import CompilerError


@dataclass(frozen=True)
class DocumentUnit:
    """One source file contributing ordered content to the book."""

    path: str
    position: int

    @property
    def stem(self) -> str:
        return Path(self.path).stem

    def resolve(self, root: Path) -> Path:
        return root / self.path


def document_units(paths: Sequence[str]) -> Tuple[DocumentUnit, ...]:
    """Wrap ordered source paths as document units, keeping their order."""
    return tuple(DocumentUnit(path=p, position=i) for i, p in enumerate(paths))


@dataclass(frozen=True)
class BuildConfiguration:
    """
    A named build variant.

    Attributes:
        name: Variant name used in logs and artifact metadata.
        documents: Ordered units; order defines reading and TOC order.
        profile: Compiler options applied to this build.
        output: Absolute path of the artifact to produce.
    """

    name: str
    documents: Tuple[DocumentUnit, ...]
    profile: StyleProfile
    output: Path

    @property
    def paths(self) -> List[str]:
        return [unit.path for unit in self.documents]

    def validate_sources(self, root: Path) -> None:
        """
        Check that every unit exists under the project root.

        Raises:
            CompilerError: If there is nothing to compile or a source is missing.
        """
        if not self.documents:
            raise CompilerError(
                f"Build configuration {self.name!r} has no documents to compile"
            )
        for unit in self.documents:
            if not unit.resolve(root).is_file():
                raise CompilerError(
                    f"Source document not found for {self.name!r}: {unit.path}"
                )
