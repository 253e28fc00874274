"""Exception hierarchy for sitegen.

Two families exist:

* ``FatalPreconditionError`` -- the run cannot proceed at all (input file
  missing or malformed, required column absent, scaffolding tool not
  installed, output root not creatable).  The CLI exits non-zero.
* ``RecordFailure`` -- one record could not be generated.  The failure is
  reported against that record and the batch moves on.
"""

from __future__ import annotations

from pathlib import Path


class SiteGenError(Exception):
    """Base class for all sitegen errors."""


# ---------------------------------------------------------------------------
# Fatal preconditions
# ---------------------------------------------------------------------------


class FatalPreconditionError(SiteGenError):
    """Raised when the whole batch must be aborted.

    Attributes:
        state: Name of the batch state the error was raised in, filled in by
            the pipeline when it transitions to ``Fatal``.
    """

    state: str | None = None


class InputNotFoundError(FatalPreconditionError):
    """The input file does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class MalformedInputError(FatalPreconditionError):
    """The input cannot be parsed as delimited tabular text."""


class MissingColumnError(FatalPreconditionError):
    """A required column is absent from the input header."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Required column '{column}' not found in input")


class DependencyMissingError(FatalPreconditionError):
    """The external scaffolding tool is not available."""


class OutputRootError(FatalPreconditionError):
    """The output root directory could not be created."""


# ---------------------------------------------------------------------------
# Per-record failures
# ---------------------------------------------------------------------------


class RecordFailure(SiteGenError):
    """A single record failed; the batch continues with the next one."""

    def __init__(self, domain: str, step: str, message: str) -> None:
        self.domain = domain
        self.step = step
        super().__init__(message)


class ScaffoldFailure(RecordFailure):
    """The scaffolding subprocess failed or produced no project directory."""

    def __init__(self, domain: str, message: str) -> None:
        super().__init__(domain, "scaffold", message)


class TemplateWriteFailure(RecordFailure):
    """A rendered file (or the source directory) could not be written."""

    def __init__(self, domain: str, filename: str, message: str) -> None:
        self.filename = filename
        super().__init__(domain, filename, f"Error writing {filename}: {message}")
