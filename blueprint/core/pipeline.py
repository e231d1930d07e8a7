"""
Pipeline driver.

Produces artifacts from build configurations through the document
compiler, concatenates them with the merge tool, and applies the optional
cover and table-of-contents enrichments. Every step runs one external
process to completion before the next one starts.
"""

import shutil
from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from blueprint.core.artifacts import Artifact, ArtifactLayout, copy_atomically
from blueprint.core.compiler import DocumentCompiler, check_host_memory
from blueprint.core.documents import BuildConfiguration
from blueprint.core.enrichment import Enriched, EnrichmentResult, Unchanged
from blueprint.core.merge import MergeTool
from blueprint.core.partition import run_sequentially
from blueprint.core.plan import BuildPlan
from blueprint.exceptions import CompilerError, MergeError, MissingOptionalInput
from blueprint.utils.timing import timed_section

logger = structlog.get_logger(__name__)


class PipelineDriver:
    """Runs builds and post-processing steps for one book."""

    def __init__(self, plan: BuildPlan, compiler: DocumentCompiler, merge_tool: MergeTool):
        self.plan = plan
        self.compiler = compiler
        self.merge_tool = merge_tool
        self._memory_checked = False

    @property
    def layout(self) -> ArtifactLayout:
        return self.plan.layout

    def build(self, config: BuildConfiguration) -> Artifact:
        """
        Compile one build configuration.

        Args:
            config: Ordered documents, options and output path.

        Returns:
            The produced artifact.

        Raises:
            CompilerError: If there are no documents, a source is missing or the compiler fails.
        """
        config.validate_sources(self.plan.root)
        if not self._memory_checked:
            check_host_memory(self.plan.config.toolchain)
            self._memory_checked = True

        with timed_section("Compile", configuration=config.name):
            self.compiler.compile(config.paths, config.profile, config.output)

        logger.info("Built artifact", configuration=config.name, output=str(config.output))
        return Artifact(path=config.output, configuration=config.name, documents=tuple(config.paths))

    def build_chunked(self, configs: Sequence[BuildConfiguration], output: Path) -> Artifact:
        """
        Build each configuration in order and concatenate the results.

        Args:
            configs: Configurations whose documents, concatenated, form the book.
            output: Path of the combined artifact.

        Returns:
            The combined artifact.

        Raises:
            MergeError: If any configuration fails to build or the merge fails.
        """
        if not configs:
            raise MergeError("No configurations to build", output=str(output))

        def work(index: int, config: BuildConfiguration) -> Artifact:
            logger.info("Building part", index=index, total=len(configs), configuration=config.name)
            try:
                return self.build(config)
            except CompilerError as e:
                raise MergeError(
                    f"Part {config.name!r} failed to build: {e.message}", output=str(output)
                ) from e

        def combine(artifacts: List[Artifact]) -> Artifact:
            self.merge_tool.merge([a.path for a in artifacts], output)
            documents = tuple(path for artifact in artifacts for path in artifact.documents)
            return Artifact(path=output, configuration="+".join(a.configuration for a in artifacts), documents=documents)

        with timed_section("Chunked build", parts=len(configs)):
            return run_sequentially(configs, work, combine)

    def add_cover(
        self,
        artifact: Artifact,
        front_cover: Optional[Path] = None,
        back_cover: Optional[Path] = None,
    ) -> EnrichmentResult:
        """
        Wrap ``artifact`` with front and back covers when both exist.

        The artifact's path is replaced with ``front ++ artifact ++ back``.
        A missing cover or a failed merge leaves the artifact untouched.
        """
        try:
            front = self._require_optional(front_cover, "Front cover")
            back = self._require_optional(back_cover, "Back cover")
            self.merge_tool.merge([front, artifact.path, back], artifact.path)
        except (MissingOptionalInput, MergeError) as e:
            logger.warning("Skipping cover addition", reason=e.message)
            return Unchanged(artifact=artifact, reason=e.message)

        logger.info("Covers added", output=str(artifact.path))
        return Enriched(
            artifact=Artifact(
                path=artifact.path,
                configuration=f"{artifact.configuration}+covers",
                documents=artifact.documents,
            )
        )

    def merge_toc(
        self,
        artifact: Artifact,
        documents: Optional[Sequence[str]] = None,
        output: Optional[Path] = None,
    ) -> EnrichmentResult:
        """
        Prepend a standalone table of contents to ``artifact``.

        Args:
            artifact: Book content without a table of contents.
            documents: Full document set; defaults to title plus every chapter.
            output: Where the enriched artifact goes; defaults to the book path.

        Returns:
            ``Enriched`` with ``toc ++ artifact`` at ``output``, or ``Unchanged``
            with the original artifact if the table of contents could not be made.
        """
        output = output or self.layout.book
        toc_config = self.plan.toc(list(documents) if documents is not None else None)
        # A leftover file from an earlier run must not pass for a fresh one
        toc_config.output.unlink(missing_ok=True)

        try:
            toc = self.build(toc_config)
            self.merge_tool.merge([toc.path, artifact.path], output)
        except (CompilerError, MergeError) as e:
            logger.warning("Table of contents generation failed, keeping artifact", reason=e.message)
            return Unchanged(artifact=artifact, reason=e.message)

        logger.info("Table of contents merged", output=str(output))
        return Enriched(
            artifact=Artifact(
                path=output,
                configuration=f"toc+{artifact.configuration}",
                documents=artifact.documents,
            )
        )

    def publish(self, result: EnrichmentResult, output: Optional[Path] = None) -> Artifact:
        """Make sure the artifact of ``result`` is available at ``output``."""
        output = output or self.layout.book
        artifact = result.artifact
        if artifact.path.resolve() == output.resolve():
            return artifact
        copy_atomically(artifact.path, output)
        logger.info("Published artifact", source=str(artifact.path), output=str(output))
        return Artifact(path=output, configuration=artifact.configuration, documents=artifact.documents)

    def clean(self) -> bool:
        """
        Remove every generated artifact.

        Returns:
            True if the build directory existed and was removed.
        """
        build_dir = self.layout.build_dir
        if not build_dir.exists():
            logger.info("Nothing to clean", build_dir=str(build_dir))
            return False
        shutil.rmtree(build_dir)
        logger.info("Removed build directory", build_dir=str(build_dir))
        return True

    @staticmethod
    def _require_optional(path: Optional[Path], label: str) -> Path:
        if path is None:
            raise MissingOptionalInput(f"{label} is not configured")
        if not path.is_file():
            raise MissingOptionalInput(f"{label} not found", path=str(path))
        return path
