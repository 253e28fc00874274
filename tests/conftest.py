"""Shared pytest fixtures for the sitegen test suite.

Provides reusable fixtures for:
- Sample CSV input files
- Configs with zero delays pointing at ``tmp_path``
- Fake scaffolding executables (succeeding, failing, silent)
"""

from __future__ import annotations

import stat
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from sitegen.config import Config, ScaffoldConfig, VariantConfig


# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------

SAMPLE_CSV = textwrap.dedent(
    """\
    domain,title,description,phone,address
    foodexpress.com,Food Express,Fresh meals delivered fast,+880 1700-000001,"12 Road, Dhaka"
    bookbazaar.com,Book Bazaar,Books for every reader,+880 1700-000002,House 5 Banani
    techhubbd.com,Tech Hub BD,Gadgets & accessories,+880 1700-000003,Level 3 Gulshan
    """
)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes CSV text to ``tmp_path/websites.csv``."""

    def _write(content: str, name: str = "websites.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_csv(write_csv) -> Path:
    """A three-record input file."""
    return write_csv(SAMPLE_CSV)


# ---------------------------------------------------------------------------
# Fake scaffolding tools
# ---------------------------------------------------------------------------

def _make_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_generator(tmp_path: Path) -> Path:
    """Executable that mimics ``npx create-vite <name> ...`` by creating ``<name>/src``."""
    return _make_script(
        tmp_path / "fake-create-vite",
        """\
        mkdir -p "$2/src"
        echo "// scaffold placeholder" > "$2/src/App.jsx"
        echo "scaffolded $2"
        """,
    )


@pytest.fixture
def failing_generator(tmp_path: Path) -> Path:
    """Executable that always exits with status 3."""
    return _make_script(
        tmp_path / "failing-create-vite",
        """\
        echo "registry unreachable" >&2
        exit 3
        """,
    )


@pytest.fixture
def silent_generator(tmp_path: Path) -> Path:
    """Executable that exits 0 but creates nothing."""
    return _make_script(tmp_path / "silent-create-vite", "exit 0\n")


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    """Return a factory for ``Config`` objects with no delays and a working probe."""

    def _make(
        input_path: Path | None = None,
        runner: Path | str = "npx",
        seed: int | None = 42,
        **kwargs,
    ) -> Config:
        return Config(
            input_path=input_path or tmp_path / "websites.csv",
            output_dir=kwargs.pop("output_dir", tmp_path / "build"),
            warn_delay=kwargs.pop("warn_delay", 0),
            variants=VariantConfig(seed=seed, **kwargs.pop("variants", {})),
            scaffold=ScaffoldConfig(
                runner=str(runner),
                probe=[sys.executable, "--version"],
                settle_delay=0,
                **kwargs.pop("scaffold", {}),
            ),
            **kwargs,
        )

    return _make
