"""
Document compiler wrapper.

This module turns a style profile into a Pandoc command line and runs it,
either inside the configured Docker image or against a local Pandoc
installation. Only the exit status and the presence of the output file
are inspected; the compiler itself is treated as a black box.
"""

import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import List, Sequence

import psutil
import structlog

from blueprint.config.models import StyleProfile, ToolchainConfig
from blueprint.exceptions import CompilerError

logger = structlog.get_logger(__name__)


def pandoc_arguments(profile: StyleProfile) -> List[str]:
    """
    Build the Pandoc option list for a style profile.

    Args:
        profile: Compiler options.

    Returns:
        Command-line arguments, without inputs or ``-o``.
    """
    args: List[str] = []
    if profile.pdf_engine:
        args.append(f"--pdf-engine={profile.pdf_engine}")
    for option in profile.pdf_engine_opts:
        args.append(f"--pdf-engine-opt={option}")
    if profile.toc:
        args.append("--toc")
        if profile.toc_depth is not None:
            args.append(f"--toc-depth={profile.toc_depth}")
    for key, value in profile.variables.items():
        args.extend(["-V", f"{key}={value}"])
    for header in profile.include_in_header:
        args.append(f"--include-in-header={header}")
    for lua_filter in profile.lua_filters:
        args.append(f"--lua-filter={lua_filter}")
    args.extend(["--from", profile.from_format])
    if profile.template:
        args.extend(["--template", profile.template])
    if profile.listings:
        args.append("--listings")
    for json_filter in profile.filters:
        args.extend(["--filter", json_filter])
    if profile.top_level_division:
        args.append(f"--top-level-division={profile.top_level_division}")
    return args


def check_host_memory(toolchain: ToolchainConfig) -> bool:
    """
    Warn when the host has less memory than the container is allowed to use.

    Returns:
        True if the configured limit fits in physical memory.
    """
    limit = toolchain.memory_limit_bytes()
    if toolchain.runner != "docker" or limit is None:
        return True
    total = psutil.virtual_memory().total
    if total < limit:
        logger.warning(
            "Host memory is below the container memory limit; consider the chunked build",
            host_bytes=total,
            limit=toolchain.memory_limit,
        )
        return False
    return True


class DocumentCompiler(ABC):
    """Converts ordered source documents into one artifact."""

    @abstractmethod
    def compile(self, sources: Sequence[str], profile: StyleProfile, output: Path) -> Path:
        """
        Compile ``sources`` in order into ``output``.

        Raises:
            CompilerError: If the compiler fails or produces nothing.
        """


class PandocCompiler(DocumentCompiler):
    """Runs Pandoc directly or through ``docker run``."""

    def __init__(self, toolchain: ToolchainConfig, root: Path):
        self.toolchain = toolchain
        self.root = root

    def _output_argument(self, output: Path) -> str:
        relative = Path(os.path.relpath(output, self.root))
        if self.toolchain.runner == "local":
            return relative.as_posix()
        if relative.parts and relative.parts[0] == "..":
            raise CompilerError(
                f"Output must live inside the mounted project root: {output}"
            )
        return str(PurePosixPath(self.toolchain.mount_point) / relative.as_posix())

    def command(self, sources: Sequence[str], profile: StyleProfile, output: Path) -> List[str]:
        """Return the full command line for one compiler invocation."""
        toolchain = self.toolchain
        if toolchain.runner == "docker":
            cmd = [toolchain.docker, "run", "--rm"]
            if toolchain.memory_limit:
                cmd.append(f"--memory={toolchain.memory_limit}")
            cmd.extend(toolchain.docker_args)
            cmd.extend(
                [
                    "--volume",
                    f"{self.root}:{toolchain.mount_point}",
                    "--workdir",
                    toolchain.mount_point,
                    toolchain.image,
                ]
            )
        else:
            cmd = [toolchain.pandoc]
        cmd.extend(pandoc_arguments(profile))
        cmd.extend(["-o", self._output_argument(output)])
        cmd.extend(sources)
        return cmd

    def compile(self, sources: Sequence[str], profile: StyleProfile, output: Path) -> Path:
        if not sources:
            raise CompilerError("No documents to compile")

        output.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.command(sources, profile, output)
        logger.info("Running document compiler", output=str(output), documents=len(sources))
        logger.debug("Compiler command", command=" ".join(cmd))

        try:
            process = subprocess.run(
                cmd,
                cwd=str(self.root),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise CompilerError(
                f"Document compiler executable not found: {cmd[0]}", command=cmd
            ) from e

        if process.returncode != 0:
            for line in process.stderr.splitlines():
                logger.error("compiler error", line=line)
            raise CompilerError(
                f"Document compiler failed for {output.name}",
                returncode=process.returncode,
                command=cmd,
                stderr=process.stderr,
            )

        if not output.is_file():
            raise CompilerError(
                f"Document compiler reported success but wrote no file: {output}",
                returncode=process.returncode,
                command=cmd,
                stderr=process.stderr,
            )
        return output
