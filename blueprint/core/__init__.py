"""
Core build pipeline for the blueprint build tool.
"""

from blueprint.core.artifacts import Artifact, ArtifactLayout
from blueprint.core.compiler import DocumentCompiler, PandocCompiler
from blueprint.core.documents import BuildConfiguration, DocumentUnit
from blueprint.core.enrichment import Enriched, EnrichmentResult, Unchanged
from blueprint.core.merge import MergeTool, create_merge_tool
from blueprint.core.pipeline import PipelineDriver
from blueprint.core.plan import BuildPlan

__all__ = [
    "Artifact",
    "ArtifactLayout",
    "BuildConfiguration",
    "BuildPlan",
    "DocumentCompiler",
    "DocumentUnit",
    "Enriched",
    "EnrichmentResult",
    "MergeTool",
    "PandocCompiler",
    "PipelineDriver",
    "Unchanged",
    "create_merge_tool",
]
