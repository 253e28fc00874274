"""External project scaffolding.

Runs the configured generator (``npx create-vite@latest <name> --template
react --no-interactive`` by default) inside the output root and checks that
the project directory appeared.  No timeout is applied and nothing is
retried.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from sitegen.config import ScaffoldConfig
from sitegen.errors import DependencyMissingError, ScaffoldFailure
from sitegen.utils import run_command


class ProjectScaffolder:
    """Materialises a base project skeleton at ``<output_root>/<name>``."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config

    async def check_available(self) -> str:
        """Run the probe command once and return its version output.

        Raises:
            DependencyMissingError: If the probe cannot be spawned or exits
                non-zero.
        """
        probe = self.config.probe
        try:
            returncode, stdout, stderr = await run_command(probe)
        except OSError as exc:
            raise DependencyMissingError(
                f"'{probe[0]}' is not available: {exc}. Please install Node.js and npm."
            ) from exc
        if returncode != 0:
            raise DependencyMissingError(
                f"'{' '.join(probe)}' exited with status {returncode}: {stderr or stdout}"
            )
        return stdout

    async def scaffold(self, domain: str, name: str, output_root: str | Path) -> Path:
        """Run the generator for *name* and return the project directory.

        The caller must ensure ``<output_root>/<name>`` does not exist yet.

        Raises:
            ScaffoldFailure: On spawn error, non-zero exit, or when the
                project directory is missing after the settle delay.
        """
        root = Path(output_root)
        project_dir = root / name
        cmd = self.config.command(name)
        capture = not self.config.verbose

        try:
            returncode, _stdout, stderr = await run_command(cmd, cwd=root, capture=capture)
        except OSError as exc:
            raise ScaffoldFailure(domain, f"Cannot run '{cmd[0]}': {exc}") from exc

        if returncode != 0:
            detail = f": {stderr}" if stderr else ""
            raise ScaffoldFailure(domain, f"'{' '.join(cmd)}' exited with status {returncode}{detail}")

        await self._wait_settled()

        if not project_dir.is_dir():
            raise ScaffoldFailure(domain, f"Generator finished but {project_dir} was not created")
        return project_dir

    async def _wait_settled(self) -> None:
        """Give the generator's filesystem writes time to land."""
        if self.config.settle_delay > 0:
            await asyncio.sleep(self.config.settle_delay)
