"""Record loader -- parses delimited input into ``LoadedRow`` objects.

The first line is the header.  Required columns are checked once against the
header; rows are then checked individually and rows without a ``domain`` or
``title`` are kept in the result but marked with a skip reason so the
pipeline can report them in input order.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from sitegen.errors import InputNotFoundError, MalformedInputError, MissingColumnError
from sitegen.models import REQUIRED_COLUMNS, LoadedRow, Record, SkipReason


def read_input(path: str | Path) -> str:
    """Read the input file as UTF-8 text (a leading BOM is dropped).

    Raises:
        InputNotFoundError: If *path* does not exist.
        MalformedInputError: If the file is not valid UTF-8 or unreadable.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise InputNotFoundError(file_path)
    try:
        return file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{file_path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise MalformedInputError(f"Cannot read {file_path}: {exc}") from exc


def parse_records(text: str) -> list[LoadedRow]:
    """Parse delimited *text* into rows, in input order.

    Rows are numbered from 2 (the header is row 1), counting records
    rather than physical lines.  Blank lines are ignored.  Columns beyond
    the required set are ignored.

    Raises:
        MalformedInputError: If there is no header or a row's field count
            does not match the header, or the CSV dialect is violated.
        MissingColumnError: If a required column is absent from the header.
    """
    reader = csv.DictReader(io.StringIO(text, newline=""), strict=True)
    try:
        header = reader.fieldnames
        if not header:
            raise MalformedInputError("Input is empty: no header row found")
        reader.fieldnames = [name.strip() for name in header]

        for column in REQUIRED_COLUMNS:
            if column not in reader.fieldnames:
                raise MissingColumnError(column)

        rows: list[LoadedRow] = []
        for row_no, raw in enumerate(reader, start=2):
            if None in raw or any(value is None for value in raw.values()):
                raise MalformedInputError(
                    f"Row {row_no} has {_field_count(raw)} fields, "
                    f"header has {len(reader.fieldnames)}"
                )
            record = Record(row=row_no, **{col: raw[col] for col in REQUIRED_COLUMNS})
            skip = None if record.is_complete else SkipReason.MISSING_REQUIRED_FIELD
            rows.append(LoadedRow(record=record, skip_reason=skip))
    except csv.Error as exc:
        raise MalformedInputError(f"Line {reader.line_num}: {exc}") from exc

    return rows


def load_records(path: str | Path) -> list[LoadedRow]:
    """Read and parse the input file at *path*."""
    return parse_records(read_input(path))


def _field_count(raw: dict) -> int:
    extra = raw.get(None) or []
    return sum(1 for k, v in raw.items() if k is not None and v is not None) + len(extra)
