"""
Artifact merge tools.

Every tool concatenates PDFs in the order given. The result is written to
a staging file next to the output and renamed into place, so the output may
also be one of the inputs (e.g. when covers are added to the finished book).
"""

import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

import fitz
import structlog

from blueprint.config.models import MergeConfig
from blueprint.exceptions import MergeError

logger = structlog.get_logger(__name__)


def pdf_page_count(path: Path) -> int:
    """Return the number of pages of a PDF file."""
    with fitz.open(path) as doc:
        return doc.page_count


class MergeTool(ABC):
    """Concatenates existing artifacts into one, preserving input order."""

    name = "merge"

    def merge(self, inputs: Sequence[Path], output: Path) -> Path:
        """
        Concatenate ``inputs`` into ``output``.

        Args:
            inputs: Artifacts to concatenate, in order.
            output: Path of the merged artifact; replaced atomically.

        Returns:
            The output path.

        Raises:
            MergeError: If there is nothing to merge, an input is missing or the tool fails.
        """
        if not inputs:
            raise MergeError("No artifacts to merge", output=str(output))
        missing = [path for path in inputs if not path.is_file()]
        if missing:
            raise MergeError(f"Artifact to merge not found: {missing[0]}", output=str(output))

        staging = output.with_name(f".{output.stem}.merging{output.suffix}")
        logger.info("Merging artifacts", tool=self.name, inputs=len(inputs), output=str(output))
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            self._concatenate(list(inputs), staging)
            if not staging.is_file():
                raise MergeError(f"{self.name} wrote no output", output=str(output))
            os.replace(staging, output)
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise MergeError(f"Failed to write merged artifact: {e}", output=str(output)) from e
        except Exception:
            staging.unlink(missing_ok=True)
            raise
        return output

    @abstractmethod
    def _concatenate(self, inputs: List[Path], output: Path) -> None:
        """Write the concatenation of ``inputs`` to ``output``."""


class ExternalMergeTool(MergeTool):
    """Merge tool backed by a command-line program."""

    def __init__(self, executable: str):
        self.executable = executable

    @abstractmethod
    def command(self, inputs: List[Path], output: Path) -> List[str]:
        """Return the command line for one merge."""

    def _concatenate(self, inputs: List[Path], output: Path) -> None:
        cmd = self.command(inputs, output)
        try:
            process = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise MergeError(f"Merge tool not found: {self.executable}", output=str(output)) from e
        except OSError as e:
            raise MergeError(f"Could not run {self.name}: {e}", output=str(output)) from e

        if process.returncode != 0:
            for line in process.stderr.splitlines():
                logger.error("merge tool error", tool=self.name, line=line)
            raise MergeError(
                f"{self.name} exited with status {process.returncode}", output=str(output)
            )


class PdftkMergeTool(ExternalMergeTool):
    name = "pdftk"

    def command(self, inputs: List[Path], output: Path) -> List[str]:
        return [self.executable, *(str(p) for p in inputs), "cat", "output", str(output)]


class CpdfMergeTool(ExternalMergeTool):
    name = "cpdf"

    def command(self, inputs: List[Path], output: Path) -> List[str]:
        return [self.executable, *(str(p) for p in inputs), "-o", str(output)]


class PyMuPDFMergeTool(MergeTool):
    """In-process merge using PyMuPDF."""

    name = "pymupdf"

    def _concatenate(self, inputs: List[Path], output: Path) -> None:
        merged = fitz.open()
        try:
            for path in inputs:
                with fitz.open(path) as source:
                    merged.insert_pdf(source)
            merged.save(output)
        except (RuntimeError, ValueError, OSError) as e:
            raise MergeError(f"Failed to merge PDFs: {e}", output=str(output)) from e
        finally:
            merged.close()


def create_merge_tool(config: MergeConfig) -> MergeTool:
    """Instantiate the merge tool selected in the configuration."""
    if config.tool == "pdftk":
        return PdftkMergeTool(config.pdftk)
    if config.tool == "cpdf":
        return CpdfMergeTool(config.cpdf)
    return PyMuPDFMergeTool()
