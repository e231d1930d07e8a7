"""
Configuration models for the blueprint build tool.

This module defines Pydantic models for configuration validation.
"""

import re
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_MEMORY_LIMIT = re.compile(r"^(\d+)([bkmg]?)$", re.IGNORECASE)
_MEMORY_UNITS = {"": 1, "b": 1, "k": 1024, "m": 1024**2, "g": 1024**3}


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration."""

    level: str = Field(default="INFO")
    structured: bool = False

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class ToolchainConfig(BaseModel):
    """Pydantic model for the document compiler toolchain."""

    runner: Literal["docker", "local"] = "docker"
    image: str = "pandoc/extra"
    memory_limit: Optional[str] = "8g"
    mount_point: str = "/data"
    docker: str = "docker"
    pandoc: str = "pandoc"
    docker_args: List[str] = Field(default_factory=list)

    @field_validator("memory_limit")
    @classmethod
    def validate_memory_limit(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the memory limit uses Docker's <number>[b|k|m|g] syntax."""
        if v is None:
            return v
        if not _MEMORY_LIMIT.match(v.strip()):
            raise ValueError(f"Invalid memory limit: {v!r} (expected e.g. '8g' or '512m')")
        return v.strip().lower()

    @field_validator("mount_point")
    @classmethod
    def validate_mount_point(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("Mount point must be an absolute container path")
        return v.rstrip("/") or "/"

    def memory_limit_bytes(self) -> Optional[int]:
        """Return the memory limit in bytes, or None when unlimited."""
        if self.memory_limit is None:
            return None
        match = _MEMORY_LIMIT.match(self.memory_limit)
        number, unit = match.groups()
        return int(number) * _MEMORY_UNITS[unit.lower()]


class MergeConfig(BaseModel):
    """Pydantic model for the artifact merge tool."""

    tool: Literal["pymupdf", "pdftk", "cpdf"] = "pymupdf"
    pdftk: str = "pdftk"
    cpdf: str = "cpdf"


class ChunkingConfig(BaseModel):
    """Pydantic model for chunked builds."""

    size: int = Field(default=5, gt=0)
    variant: str = "full"


class CoversConfig(BaseModel):
    """Pydantic model for optional cover pages."""

    front: Optional[str] = "front_cover.pdf"
    back: Optional[str] = "back_cover.pdf"


class CombinedConfig(BaseModel):
    """Pydantic model for the chapter-by-chapter build."""

    profile: str = "fragment"
    title_profile: str = "title"
    suffix: str = "combined"


class TocConfig(BaseModel):
    """Pydantic model for standalone table of contents generation."""

    profile: str = "toc"


class StyleProfile(BaseModel):
    """Compiler option bundle shared by one or more variants."""

    model_config = ConfigDict(frozen=True)

    pdf_engine: Optional[str] = None
    pdf_engine_opts: List[str] = Field(default_factory=list)
    toc: bool = False
    toc_depth: Optional[int] = Field(default=None, ge=1, le=6)
    variables: Dict[str, str] = Field(default_factory=dict)
    include_in_header: List[str] = Field(default_factory=list)
    from_format: str = "markdown"
    template: Optional[str] = None
    listings: bool = False
    filters: List[str] = Field(default_factory=list)
    lua_filters: List[str] = Field(default_factory=list)
    top_level_division: Optional[Literal["default", "section", "chapter", "part"]] = None


class VariantConfig(BaseModel):
    """A named build variant: which documents, which profile, which output name."""

    profile: str
    suffix: Optional[str] = None
    documents: Optional[List[str]] = None
    include_title: bool = True

    @field_validator("documents")
    @classmethod
    def validate_documents(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is not None and not v:
            raise ValueError("Variant document list cannot be empty; omit it to use all documents")
        return v


class BookSection(BaseModel):
    """Pydantic model for the [book] section."""

    name: str
    title: Optional[str] = "title.txt"
    root: str = "."
    build_dir: str = "build"
    output_subdir: str = "eisvogel"
    documents: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the book name is usable as a file name."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        if "/" in v or "\\" in v:
            raise ValueError("Book name cannot contain path separators")
        return v.strip()


class BookConfig(BaseModel):
    """Pydantic model for the book configuration file."""

    book: BookSection
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    covers: CoversConfig = Field(default_factory=CoversConfig)
    combined: CombinedConfig = Field(default_factory=CombinedConfig)
    toc: TocConfig = Field(default_factory=TocConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    profiles: Dict[str, StyleProfile] = Field(default_factory=dict)
    variants: Dict[str, VariantConfig] = Field(default_factory=dict)
    default_variant: str = "full"

    @model_validator(mode="after")
    def validate_references(self) -> "BookConfig":
        """Validate that every profile and variant reference resolves."""
        for name, variant in self.variants.items():
            if variant.profile not in self.profiles:
                raise ValueError(f"Variant {name!r} references unknown profile {variant.profile!r}")
        for section, profile in (
            ("combined.profile", self.combined.profile),
            ("combined.title_profile", self.combined.title_profile),
            ("toc.profile", self.toc.profile),
        ):
            if profile not in self.profiles:
                raise ValueError(f"{section} references unknown profile {profile!r}")
        if self.default_variant not in self.variants:
            raise ValueError(f"Default variant {self.default_variant!r} is not defined")
        if self.chunking.variant not in self.variants:
            raise ValueError(f"Chunking variant {self.chunking.variant!r} is not defined")
        return self
