"""
Tests for the document compiler wrapper.

The external compiler is never executed; ``subprocess.run`` is patched.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from blueprint.config import StyleProfile, ToolchainConfig
from blueprint.core.compiler import PandocCompiler, check_host_memory, pandoc_arguments
from blueprint.exceptions import CompilerError


@pytest.fixture
def full_profile():
    return StyleProfile(
        pdf_engine="xelatex",
        pdf_engine_opts=["-interaction=nonstopmode"],
        toc=True,
        toc_depth=3,
        variables={"geometry": "margin=1in", "colorlinks": "true"},
        include_in_header=["header.tex"],
        lua_filters=["filters/box.lua"],
        template="eisvogel",
        listings=True,
        filters=["pandoc-latex-environment"],
        top_level_division="chapter",
    )


class TestPandocArguments:
    """Tests for translating a style profile into pandoc options."""

    def test_full_profile_order(self, full_profile):
        assert pandoc_arguments(full_profile) == [
            "--pdf-engine=xelatex",
            "--pdf-engine-opt=-interaction=nonstopmode",
            "--toc",
            "--toc-depth=3",
            "-V",
            "geometry=margin=1in",
            "-V",
            "colorlinks=true",
            "--include-in-header=header.tex",
            "--lua-filter=filters/box.lua",
            "--from",
            "markdown",
            "--template",
            "eisvogel",
            "--listings",
            "--filter",
            "pandoc-latex-environment",
            "--top-level-division=chapter",
        ]

    def test_empty_profile(self):
        assert pandoc_arguments(StyleProfile()) == ["--from", "markdown"]

    def test_toc_depth_requires_toc(self):
        assert "--toc-depth=2" not in pandoc_arguments(StyleProfile(toc_depth=2))


class TestPandocCommand:
    """Tests for building the compiler command line."""

    def test_docker_command(self, tmp_path):
        compiler = PandocCompiler(ToolchainConfig(docker_args=["--user", "1000:1000"]), tmp_path)
        output = tmp_path / "build" / "eisvogel" / "Book.pdf"
        cmd = compiler.command(["title.txt", "a.md"], StyleProfile(), output)
        assert cmd == [
            "docker",
            "run",
            "--rm",
            "--memory=8g",
            "--user",
            "1000:1000",
            "--volume",
            f"{tmp_path}:/data",
            "--workdir",
            "/data",
            "pandoc/extra",
            "--from",
            "markdown",
            "-o",
            "/data/build/eisvogel/Book.pdf",
            "title.txt",
            "a.md",
        ]

    def test_docker_custom_mount_point(self, tmp_path):
        """Test that relative sources resolve inside a non-default mount point."""
        compiler = PandocCompiler(ToolchainConfig(mount_point="/book"), tmp_path)
        cmd = compiler.command(["chapters/a.md"], StyleProfile(), tmp_path / "build" / "out.pdf")

        assert cmd[cmd.index("--volume") + 1] == f"{tmp_path}:/book"
        assert cmd[cmd.index("--workdir") + 1] == "/book"
        assert cmd.index("--workdir") < cmd.index("pandoc/extra")
        assert cmd[cmd.index("-o") + 1] == "/book/build/out.pdf"
        assert cmd[-1] == "chapters/a.md"

    def test_docker_without_memory_limit(self, tmp_path):
        compiler = PandocCompiler(ToolchainConfig(memory_limit=None), tmp_path)
        cmd = compiler.command(["a.md"], StyleProfile(), tmp_path / "out.pdf")
        assert not any(arg.startswith("--memory") for arg in cmd)

    def test_local_command(self, tmp_path):
        compiler = PandocCompiler(ToolchainConfig(runner="local", pandoc="/usr/bin/pandoc"), tmp_path)
        cmd = compiler.command(["a.md"], StyleProfile(), tmp_path / "build" / "out.pdf")
        assert cmd == ["/usr/bin/pandoc", "--from", "markdown", "-o", "build/out.pdf", "a.md"]

    def test_docker_output_outside_root(self, tmp_path):
        compiler = PandocCompiler(ToolchainConfig(), tmp_path / "project")
        with pytest.raises(CompilerError, match="inside the mounted project root"):
            compiler.command(["a.md"], StyleProfile(), tmp_path / "elsewhere" / "out.pdf")


class TestPandocCompile:
    """Tests for running the compiler."""

    @pytest.fixture
    def compiler(self, tmp_path):
        return PandocCompiler(ToolchainConfig(runner="local"), tmp_path)

    def test_success(self, compiler, tmp_path):
        output = tmp_path / "build" / "out.pdf"

        def fake_run(cmd, cwd=None, **kwargs):
            output.write_bytes(b"%PDF-1.7")
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        with patch("blueprint.core.compiler.subprocess.run", side_effect=fake_run) as mock_run:
            assert compiler.compile(["a.md"], StyleProfile(), output) == output

        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)
        assert mock_run.call_args.kwargs["check"] is False

    def test_nonzero_exit(self, compiler, tmp_path):
        completed = subprocess.CompletedProcess([], 43, stdout="", stderr="! Undefined control sequence.")
        with patch("blueprint.core.compiler.subprocess.run", return_value=completed):
            with pytest.raises(CompilerError) as excinfo:
                compiler.compile(["a.md"], StyleProfile(), tmp_path / "out.pdf")

        assert excinfo.value.returncode == 43
        assert excinfo.value.stderr == "! Undefined control sequence."
        assert excinfo.value.command[0] == "pandoc"
        assert excinfo.value.exit_code == 3

    def test_missing_executable(self, compiler, tmp_path):
        with patch("blueprint.core.compiler.subprocess.run", side_effect=FileNotFoundError("pandoc")):
            with pytest.raises(CompilerError, match="executable not found"):
                compiler.compile(["a.md"], StyleProfile(), tmp_path / "out.pdf")

    def test_success_without_output(self, compiler, tmp_path):
        completed = subprocess.CompletedProcess([], 0, stdout="", stderr="")
        with patch("blueprint.core.compiler.subprocess.run", return_value=completed):
            with pytest.raises(CompilerError, match="wrote no file"):
                compiler.compile(["a.md"], StyleProfile(), tmp_path / "out.pdf")

    def test_no_sources(self, compiler, tmp_path):
        with patch("blueprint.core.compiler.subprocess.run") as mock_run:
            with pytest.raises(CompilerError, match="No documents"):
                compiler.compile([], StyleProfile(), tmp_path / "out.pdf")
        mock_run.assert_not_called()


class TestHostMemory:
    """Tests for the host memory check."""

    def _memory(self, total):
        memory = MagicMock()
        memory.total = total
        return memory

    def test_enough_memory(self):
        with patch("blueprint.core.compiler.psutil.virtual_memory", return_value=self._memory(16 * 1024**3)):
            assert check_host_memory(ToolchainConfig()) is True

    def test_not_enough_memory(self):
        with patch("blueprint.core.compiler.psutil.virtual_memory", return_value=self._memory(4 * 1024**3)):
            assert check_host_memory(ToolchainConfig()) is False

    def test_local_runner_skips_check(self):
        with patch("blueprint.core.compiler.psutil.virtual_memory") as mock_memory:
            assert check_host_memory(ToolchainConfig(runner="local")) is True
        mock_memory.assert_not_called()
