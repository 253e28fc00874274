"""Writes business-specific files into a scaffolded project.

Takes a sanitized ``Record`` and a hero variant and overwrites a fixed set of
files under the project's source directory: the hero section, the contact
section, the root ``App`` component and two stylesheets.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from sitegen.errors import TemplateWriteFailure
from sitegen.models import Record
from sitegen.utils import escape_markup

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Output files, in write order: (template, file name)
# ---------------------------------------------------------------------------

SITE_FILES: list[tuple[str, str]] = [
    ("Hero.jsx.j2", "Hero.jsx"),
    ("Contact.jsx.j2", "Contact.jsx"),
    ("App.jsx.j2", "App.jsx"),
    ("App.css.j2", "App.css"),
    ("index.css.j2", "index.css"),
]


# ---------------------------------------------------------------------------
# Responsive breakpoints for App.css
# ---------------------------------------------------------------------------

RESPONSIVE_BREAKPOINTS: list[dict[str, Any]] = [
    {
        "query": "max-width: 992px",
        "rules": {
            ".app-container": ["padding: 1.5rem"],
            ".app-header h1": ["font-size: 2.2rem"],
            ".hero h2": ["font-size: 1.8rem"],
        },
    },
    {
        "query": "max-width: 768px",
        "rules": {
            ".app-main": ["flex-direction: column"],
            ".app-container": ["padding: 1rem"],
            ".app-header": ["padding: 1.2rem"],
            ".app-header h1": ["font-size: 2rem"],
            ".hero h2": ["font-size: 1.6rem"],
            ".contact": ["padding: 1.5rem"],
            ".contact-item strong,\n  .contact-item span": ["font-size: 1rem"],
        },
    },
    {
        "query": "max-width: 576px",
        "rules": {
            ".app-container": ["padding: 0.75rem"],
            ".app-header h1": ["font-size: 1.7rem"],
            ".app-header p": ["font-size: 1rem"],
            ".hero": ["padding: 1.5rem"],
            ".hero h2": ["font-size: 1.4rem"],
            ".contact": ["padding: 1.2rem"],
            ".contact-item strong,\n  .contact-item span": ["font-size: 0.95rem"],
        },
    },
    {
        "query": "max-width: 480px",
        "rules": {
            ".app-container": ["padding: 0.5rem"],
            ".app-header": ["padding: 1rem"],
            ".app-header h1": ["font-size: 1.5rem"],
            ".hero": ["padding: 1.2rem"],
            ".hero h2": ["font-size: 1.2rem"],
            ".contact": ["padding: 1rem"],
        },
    },
    {
        "query": "max-width: 360px",
        "rules": {
            ".app-header h1": ["font-size: 1.3rem"],
            ".hero h2": ["font-size: 1.1rem"],
            ".app-container": ["padding: 0.25rem"],
        },
    },
    {
        "query": "min-width: 1200px",
        "rules": {
            ".app-container": ["padding: 2.5rem"],
            ".app-header h1": ["font-size: 2.8rem"],
            ".hero h2": ["font-size: 2.2rem"],
            ".contact": ["padding: 2.5rem"],
        },
    },
]


# ---------------------------------------------------------------------------
# SiteGenerator
# ---------------------------------------------------------------------------


class SiteGenerator:
    """Renders the site files for one record into an existing project."""

    def __init__(self, tagline: str, source_dir: str = "src",
                 renderer: TemplateRenderer | None = None) -> None:
        self.tagline = tagline
        self.source_dir = source_dir
        self.renderer = renderer or TemplateRenderer()

    def build_context(self, record: Record, variant: str) -> dict[str, Any]:
        """Build the template context.

        *record* must already be sanitized; the variant and tagline are
        escaped here since they do not come from the record.
        """
        return {
            "record": record,
            "variant": escape_markup(variant),
            "tagline": escape_markup(self.tagline),
            "breakpoints": RESPONSIVE_BREAKPOINTS,
        }

    async def prepare(self, domain: str, project_root: str | Path) -> Path:
        """Create ``<project_root>/<source_dir>`` if needed and return it.

        Raises:
            TemplateWriteFailure: If the directory cannot be created.
        """
        src_dir = Path(project_root) / self.source_dir
        try:
            await asyncio.to_thread(src_dir.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise TemplateWriteFailure(domain, f"{self.source_dir}/", str(exc)) from exc
        return src_dir

    async def generate(self, record: Record, variant: str, project_root: str | Path) -> list[Path]:
        """Write every file in ``SITE_FILES`` under ``<project_root>/<source_dir>``.

        Files are written in order.  The first failing write raises
        ``TemplateWriteFailure`` and the remaining files are not written;
        files already written stay on disk.

        Returns:
            Paths of the written files.
        """
        src_dir = await self.prepare(record.domain, project_root)

        context = self.build_context(record, variant)
        written: list[Path] = []
        for template_name, file_name in SITE_FILES:
            try:
                path = await self.renderer.render_to_file(
                    template_name, src_dir / file_name, context
                )
            except OSError as exc:
                raise TemplateWriteFailure(record.domain, file_name, str(exc)) from exc
            written.append(path)
        return written
