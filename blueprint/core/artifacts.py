"""Build artifacts and their deterministic on-disk layout."""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from blueprint.core.documents import DocumentUnit


@dataclass(frozen=True)
class Artifact:
    """A generated output file and the inputs that produced it."""

    path: Path
    configuration: str
    documents: Tuple[str, ...] = ()


class ArtifactLayout:
    """
    Names every artifact under ``<build_dir>/<output_subdir>``.

    Paths are derived only from the book name and the chunk, variant or
    chapter identifier, so rerunning a target overwrites the same files.
    """

    def __init__(self, root: Path, build_dir: str, output_subdir: str, book_name: str):
        self.root = root
        self.build_dir = root / build_dir
        self.output_dir = self.build_dir / output_subdir
        self.book_name = book_name

    @property
    def book(self) -> Path:
        return self.output_dir / f"{self.book_name}.pdf"

    def variant(self, suffix: Optional[str] = None) -> Path:
        if not suffix:
            return self.book
        return self.output_dir / f"{self.book_name}_{suffix}.pdf"

    def chunk(self, index: int) -> Path:
        """Path of the 1-based chunk ``index``."""
        if index < 1:
            raise ValueError(f"Chunk index must be 1-based, got {index}")
        return self.output_dir / f"{self.book_name}_chunk{index}.pdf"

    def chapter(self, unit: DocumentUnit) -> Path:
        return self.output_dir / "chapters" / f"{unit.stem}.pdf"

    @property
    def title(self) -> Path:
        return self.output_dir / "title.pdf"

    @property
    def toc(self) -> Path:
        return self.output_dir / "toc.pdf"


def copy_atomically(source: Path, target: Path) -> None:
    """Copy ``source`` to ``target`` through a sibling temporary file."""
    target.parent.mkdir(parents=True, exist_ok=True)
    temp = target.with_name(f".{target.name}.copy")
    shutil.copyfile(source, temp)
    os.replace(temp, target)
