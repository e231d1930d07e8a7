"""Test fixtures for the blueprint build tool."""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Set
from unittest.mock import patch

import fitz
import pytest
import structlog

BOOK_TOML = """\
default_variant = "full"

[book]
name = "Test_Book"
title = "title.txt"
documents = [
    "front-matter.md",
    "chapters/01-one.md",
    "chapters/02-two.md",
    "chapters/03-three.md",
    "chapters/04-four.md",
]

[toolchain]
runner = "local"

[merge]
tool = "pymupdf"

[chunking]
size = 2

[profiles.full]
pdf_engine = "xelatex"
template = "eisvogel"
top_level_division = "chapter"

[profiles.fragment]
top_level_division = "chapter"

[profiles.title]

[profiles.toc]
toc = true
toc_depth = 2

[variants.full]
profile = "full"

[variants.test]
profile = "full"
suffix = "test"
documents = ["chapters/01-one.md"]
"""

SOURCES = [
    "title.txt",
    "front-matter.md",
    "chapters/01-one.md",
    "chapters/02-two.md",
    "chapters/03-three.md",
    "chapters/04-four.md",
]


def write_pdf(path: Path, labels: List[str]) -> Path:
    """Write a PDF with one page per label, each page showing its label."""
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    for label in labels:
        page = doc.new_page()
        page.insert_text((72, 72), label)
    doc.save(path)
    doc.close()
    return path


def pdf_labels(path: Path) -> List[str]:
    """Return the label text of every page, in page order."""
    with fitz.open(path) as doc:
        return [page.get_text().strip() for page in doc]


class FakePandoc:
    """Stands in for ``subprocess.run`` of the document compiler."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.fail_outputs: Set[str] = set()

    def __call__(self, cmd, cwd=None, **kwargs):
        self.calls.append(list(cmd))
        out_index = cmd.index("-o")
        output = Path(cwd) / cmd[out_index + 1]
        sources = list(cmd[out_index + 2 :])
        if output.name in self.fail_outputs:
            return subprocess.CompletedProcess(cmd, 43, stdout="", stderr="! LaTeX Error: boom")
        write_pdf(output, sources)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the code under test."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


@pytest.fixture
def book_project(tmp_path: Path) -> Path:
    """Create a small book project and return the path of its configuration."""
    for source in SOURCES:
        path = tmp_path / source
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {source}\n", encoding="utf-8")
    config_file = tmp_path / "book.toml"
    config_file.write_text(BOOK_TOML, encoding="utf-8")
    return config_file


@pytest.fixture
def fake_pandoc():
    """Patch the compiler's subprocess call with a PDF-writing fake."""
    fake = FakePandoc()
    with patch("blueprint.core.compiler.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def make_pdf() -> Callable[[Path, List[str]], Path]:
    return write_pdf


@pytest.fixture
def read_labels() -> Callable[[Path], List[str]]:
    return pdf_labels


@pytest.fixture
def book_sources() -> List[str]:
    """Full document set of the test book, title first."""
    return list(SOURCES)
