"""sitegen scaffolder -- creates and fills one project per record.

Quick usage::

    from sitegen.scaffolder import ProjectScaffolder, SiteGenerator

    scaffolder = ProjectScaffolder(config.scaffold)
    project_dir = await scaffolder.scaffold("foo.com", "foo.com", "./build")
    await SiteGenerator(tagline="delivery service").generate(
        record.sanitized(), "Quick", project_dir
    )
"""

from sitegen.scaffolder.generator import SITE_FILES, SiteGenerator
from sitegen.scaffolder.project import ProjectScaffolder
from sitegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "SITE_FILES",
    "ProjectScaffolder",
    "SiteGenerator",
    "TemplateRenderer",
]
