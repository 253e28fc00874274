"""Tests for the external project scaffolder.

Covers:
- Dependency probe success and failure
- Scaffold success with a fake generator executable
- Non-zero exit, missing binary and missing output directory
- Settle delay is awaited after the generator exits
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from sitegen.config import ScaffoldConfig
from sitegen.errors import DependencyMissingError, ScaffoldFailure
from sitegen.scaffolder import ProjectScaffolder


def _scaffolder(runner: Path | str, **kwargs) -> ProjectScaffolder:
    kwargs.setdefault("settle_delay", 0)
    return ProjectScaffolder(ScaffoldConfig(runner=str(runner), **kwargs))


class TestCheckAvailable:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_ok(self):
        scaffolder = _scaffolder("npx", probe=[sys.executable, "--version"])
        version = await scaffolder.check_available()
        assert "Python" in version

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_missing_binary(self):
        scaffolder = _scaffolder("npx", probe=["sitegen-no-such-npm", "--version"])
        with pytest.raises(DependencyMissingError) as exc_info:
            await scaffolder.check_available()
        assert "sitegen-no-such-npm" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_nonzero_exit(self):
        scaffolder = _scaffolder("npx", probe=[sys.executable, "-c", "raise SystemExit(2)"])
        with pytest.raises(DependencyMissingError):
            await scaffolder.check_available()


class TestScaffold:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_success(self, fake_generator: Path, tmp_path: Path):
        root = tmp_path / "build"
        root.mkdir()
        project = await _scaffolder(fake_generator).scaffold("foo.com", "foo.com", root)
        assert project == root / "foo.com"
        assert (project / "src").is_dir()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_verbose_inherits_output(self, fake_generator: Path, tmp_path: Path):
        root = tmp_path / "build"
        root.mkdir()
        project = await _scaffolder(fake_generator, verbose=True).scaffold("v.com", "v.com", root)
        assert project.is_dir()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_nonzero_exit(self, failing_generator: Path, tmp_path: Path):
        with pytest.raises(ScaffoldFailure) as exc_info:
            await _scaffolder(failing_generator).scaffold("foo.com", "foo.com", tmp_path)
        err = exc_info.value
        assert err.step == "scaffold"
        assert err.domain == "foo.com"
        assert "status 3" in str(err)
        assert "registry unreachable" in str(err)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path: Path):
        with pytest.raises(ScaffoldFailure) as exc_info:
            await _scaffolder(tmp_path / "no-such-tool").scaffold("foo.com", "foo.com", tmp_path)
        assert "Cannot run" in str(exc_info.value)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_directory_not_created(self, silent_generator: Path, tmp_path: Path):
        with pytest.raises(ScaffoldFailure) as exc_info:
            await _scaffolder(silent_generator).scaffold("foo.com", "foo.com", tmp_path)
        assert "was not created" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_and_settle_delay(self, tmp_path: Path):
        scaffolder = _scaffolder("npx", settle_delay=1.5)
        (tmp_path / "foo.com").mkdir()
        with patch(
            "sitegen.scaffolder.project.run_command",
            new=AsyncMock(return_value=(0, "", "")),
        ) as mock_run, patch(
            "sitegen.scaffolder.project.asyncio.sleep", new=AsyncMock()
        ) as mock_sleep:
            await scaffolder.scaffold("foo.com", "foo.com", tmp_path)

        mock_run.assert_awaited_once_with(
            ["npx", "create-vite@latest", "foo.com", "--template", "react", "--no-interactive"],
            cwd=tmp_path,
            capture=True,
        )
        mock_sleep.assert_awaited_once_with(1.5)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_sleep_when_delay_zero(self, tmp_path: Path):
        (tmp_path / "foo.com").mkdir()
        with patch(
            "sitegen.scaffolder.project.run_command",
            new=AsyncMock(return_value=(0, "", "")),
        ), patch("sitegen.scaffolder.project.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            await _scaffolder("npx").scaffold("foo.com", "foo.com", tmp_path)
        mock_sleep.assert_not_awaited()
