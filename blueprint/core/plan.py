"""Derives concrete build configurations from the book configuration."""

from pathlib import Path
from typing import Dict, List, Optional

from blueprint.config.models import BookConfig, StyleProfile
from blueprint.core.artifacts import ArtifactLayout
from blueprint.core.documents import BuildConfiguration, DocumentUnit, document_units
from blueprint.core.partition import partition
from blueprint.exceptions import ConfigurationError


class BuildPlan:
    """Resolves variants, chunks and per-chapter builds for one book."""

    def __init__(self, config: BookConfig):
        self.config = config
        self.root = Path(config.book.root)
        self.layout = ArtifactLayout(
            root=self.root,
            build_dir=config.book.build_dir,
            output_subdir=config.book.output_subdir,
            book_name=config.book.name,
        )

    @property
    def title(self) -> Optional[str]:
        return self.config.book.title

    def profile(self, name: str) -> StyleProfile:
        try:
            return self.config.profiles[name]
        except KeyError:
            raise ConfigurationError(f"Unknown style profile: {name!r}") from None

    def full_document_set(self) -> List[str]:
        """Title file followed by every document, in reading order."""
        paths = list(self.config.book.documents)
        if self.title:
            paths.insert(0, self.title)
        return paths

    def variant(self, name: str) -> BuildConfiguration:
        """
        Build configuration of a named variant.

        Raises:
            ConfigurationError: If the variant is not defined.
        """
        variant = self.config.variants.get(name)
        if variant is None:
            available = ", ".join(sorted(self.config.variants)) or "none"
            raise ConfigurationError(f"Unknown build variant {name!r} (available: {available})")

        paths = list(variant.documents if variant.documents is not None else self.config.book.documents)
        if variant.include_title and self.title:
            paths.insert(0, self.title)
        return BuildConfiguration(
            name=name,
            documents=document_units(paths),
            profile=self.profile(variant.profile),
            output=self.layout.variant(variant.suffix),
        )

    def chunks(self, size: Optional[int] = None) -> List[BuildConfiguration]:
        """
        Split the chunking variant into contiguous chunk configurations.

        The concatenation of the chunks' documents equals the variant's
        documents, so the title file only appears in the first chunk.
        """
        base = self.variant(self.config.chunking.variant)
        groups = partition(base.paths, size or self.config.chunking.size)
        return [
            BuildConfiguration(
                name=f"chunk{index}",
                documents=document_units(group),
                profile=base.profile,
                output=self.layout.chunk(index),
            )
            for index, group in enumerate(groups, start=1)
        ]

    def combined(self) -> List[BuildConfiguration]:
        """
        One configuration per chapter, preceded by the title page.

        Raises:
            ConfigurationError: If two documents would share an artifact name.
        """
        combined = self.config.combined
        configurations: List[BuildConfiguration] = []
        if self.title:
            configurations.append(
                BuildConfiguration(
                    name="title",
                    documents=document_units([self.title]),
                    profile=self.profile(combined.title_profile),
                    output=self.layout.title,
                )
            )

        seen: Dict[Path, str] = {}
        chapter_profile = self.profile(combined.profile)
        for unit in document_units(self.config.book.documents):
            output = self.layout.chapter(unit)
            if output in seen:
                raise ConfigurationError(
                    f"Documents {seen[output]!r} and {unit.path!r} map to the same artifact {output.name}"
                )
            seen[output] = unit.path
            configurations.append(
                BuildConfiguration(
                    name=unit.stem,
                    documents=(DocumentUnit(path=unit.path, position=0),),
                    profile=chapter_profile,
                    output=output,
                )
            )
        return configurations

    @property
    def combined_output(self) -> Path:
        return self.layout.variant(self.config.combined.suffix)

    def toc(self, documents: Optional[List[str]] = None) -> BuildConfiguration:
        """Standalone table-of-contents build over the full document set."""
        return BuildConfiguration(
            name="toc",
            documents=document_units(documents if documents is not None else self.full_document_set()),
            profile=self.profile(self.config.toc.profile),
            output=self.layout.toc,
        )

    def cover_paths(self) -> List[Optional[Path]]:
        """Front and back cover paths, or None where not configured."""
        covers = self.config.covers
        return [
            self.root / covers.front if covers.front else None,
            self.root / covers.back if covers.back else None,
        ]
