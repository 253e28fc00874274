"""sitegen configuration.

Centralised, typed configuration for a generation run. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_VARIANTS: list[str] = ["Quick", "Fast", "Speedy"]


class VariantConfig(BaseModel):
    """Hero label variants assigned across a batch."""

    pool: list[str] = Field(default_factory=lambda: list(DEFAULT_VARIANTS), min_length=1)
    tagline: str = Field(default="delivery service in dhaka.")
    seed: int | None = Field(
        default=None, description="Shuffle seed; None draws a fresh permutation per run"
    )


class ScaffoldConfig(BaseModel):
    """How the external project generator is invoked."""

    runner: str = Field(default="npx", description="Executable that launches the generator")
    package: str = Field(default="create-vite@latest")
    template: str = Field(default="react")
    extra_args: list[str] = Field(default_factory=lambda: ["--no-interactive"])
    probe: list[str] = Field(
        default_factory=lambda: ["npm", "--version"],
        description="Command run once before the batch to confirm the toolchain exists",
    )
    source_dir: str = Field(default="src", description="Directory the rendered files go into")
    settle_delay: float = Field(
        default=1.0, ge=0, description="Seconds to wait after the generator exits"
    )
    verbose: bool = Field(
        default=False, description="Stream generator output instead of capturing it"
    )

    def command(self, name: str) -> list[str]:
        """Return the full argv that scaffolds the project *name*."""
        return [self.runner, self.package, name, "--template", self.template, *self.extra_args]


class Config(BaseModel):
    """Global sitegen configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``Pipeline``.
    """

    input_path: Path = Field(default=Path("websites.csv"))
    output_dir: Path = Field(default=Path("./build"))
    warn_delay: float = Field(
        default=3.0, ge=0, description="Pause before reusing an existing output root"
    )
    report_path: Path | None = Field(default=None)
    variants: VariantConfig = Field(default_factory=VariantConfig)
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SITEGEN_INPUT, SITEGEN_OUTPUT_DIR, SITEGEN_WARN_DELAY,
            SITEGEN_REPORT, SITEGEN_SEED, SITEGEN_VARIANTS, SITEGEN_TAGLINE,
            SITEGEN_SETTLE_DELAY, SITEGEN_VERBOSE.
        """
        variant_kwargs: dict[str, Any] = {}
        if os.environ.get("SITEGEN_SEED"):
            variant_kwargs["seed"] = int(os.environ["SITEGEN_SEED"])
        if os.environ.get("SITEGEN_VARIANTS"):
            variant_kwargs["pool"] = [
                v.strip() for v in os.environ["SITEGEN_VARIANTS"].split(",") if v.strip()
            ]
        if os.environ.get("SITEGEN_TAGLINE"):
            variant_kwargs["tagline"] = os.environ["SITEGEN_TAGLINE"]

        scaffold_kwargs: dict[str, Any] = {}
        if os.environ.get("SITEGEN_SETTLE_DELAY"):
            scaffold_kwargs["settle_delay"] = float(os.environ["SITEGEN_SETTLE_DELAY"])
        if os.environ.get("SITEGEN_VERBOSE"):
            scaffold_kwargs["verbose"] = os.environ["SITEGEN_VERBOSE"].lower() in ("1", "true", "yes")

        kwargs: dict[str, Any] = {}
        if os.environ.get("SITEGEN_WARN_DELAY"):
            kwargs["warn_delay"] = float(os.environ["SITEGEN_WARN_DELAY"])
        if os.environ.get("SITEGEN_REPORT"):
            kwargs["report_path"] = Path(os.environ["SITEGEN_REPORT"])

        return cls(
            input_path=Path(os.environ.get("SITEGEN_INPUT", "websites.csv")),
            output_dir=Path(os.environ.get("SITEGEN_OUTPUT_DIR", "./build")),
            variants=VariantConfig(**variant_kwargs),
            scaffold=ScaffoldConfig(**scaffold_kwargs),
            **kwargs,
        )
