"""Pydantic v2 models for sitegen.

Defines the business record read from the input file, the per-record outcome
and the aggregate batch result that is printed (and optionally saved) at the
end of a run.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from sitegen.utils import escape_markup


REQUIRED_COLUMNS: tuple[str, ...] = ("domain", "title", "description", "phone", "address")
RENDERED_COLUMNS: tuple[str, ...] = ("title", "description", "phone", "address")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SkipReason(str, Enum):
    """Why a record was not processed."""
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    DIRECTORY_EXISTS = "DirectoryExists"


class OutcomeStatus(str, Enum):
    """Final status of one record."""
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class BatchState(str, Enum):
    """States the batch moves through, in order, with ``FATAL`` as a sink."""
    INIT = "Init"
    VALIDATING = "Validating"
    PREPARING_OUTPUT_ROOT = "PreparingOutputRoot"
    PROCESSING_RECORDS = "ProcessingRecords"
    SUMMARIZING = "Summarizing"
    DONE = "Done"
    FATAL = "Fatal"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class Record(BaseModel):
    """One row of business data; drives generation of one project."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(..., description="1-based row in the input file (header is row 1)")
    domain: str = Field(default="")
    title: str = Field(default="")
    description: str = Field(default="")
    phone: str = Field(default="")
    address: str = Field(default="")

    @property
    def is_complete(self) -> bool:
        """``True`` when both ``domain`` and ``title`` are non-blank."""
        return bool(self.domain.strip()) and bool(self.title.strip())

    def sanitized(self) -> "Record":
        """Return a copy with every rendered text field markup-escaped.

        ``domain`` is kept raw: it names the project directory and is never
        written into a template.  Call exactly once per record; escaping
        twice double-escapes ``&``.
        """
        return self.model_copy(
            update={
                name: escape_markup(getattr(self, name))
                for name in RENDERED_COLUMNS
            }
        )


class LoadedRow(BaseModel):
    """A parsed row plus the reason it must be skipped, if any."""
    record: Record
    skip_reason: Optional[SkipReason] = None

    @property
    def valid(self) -> bool:
        return self.skip_reason is None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class RecordOutcome(BaseModel):
    """What happened to a single record."""
    row: int
    domain: str
    status: OutcomeStatus
    skip_reason: Optional[SkipReason] = None
    step: Optional[str] = Field(default=None, description="Failing step: 'scaffold' or a file name")
    variant: Optional[str] = None
    message: str = ""


class BatchResult(BaseModel):
    """Aggregate counts plus the ordered log of per-record outcomes."""
    output_root: str = ""
    attempted: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[RecordOutcome] = Field(default_factory=list)

    def record(self, outcome: RecordOutcome) -> None:
        """Append *outcome* and bump the matching counter."""
        self.outcomes.append(outcome)
        self.attempted += 1
        if outcome.status is OutcomeStatus.SUCCEEDED:
            self.succeeded += 1
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1

    def summary_dict(self) -> dict[str, Any]:
        return {
            "Output root": self.output_root,
            "Records": self.attempted,
            "Succeeded": self.succeeded,
            "Skipped": self.skipped,
            "Failed": self.failed,
        }
