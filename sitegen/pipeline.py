"""sitegen batch orchestrator.

Drives one generation run through its states::

    Init -> Validating -> PreparingOutputRoot -> ProcessingRecords
         -> Summarizing -> Done

with ``Fatal`` reachable from the first three.  Records are handled one at
a time in input order; a skip or failure on one record never stops the batch.

Usage::

    python -m sitegen websites.csv --output ./build
    python -m sitegen websites.csv --seed 7 --warn-delay 0
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from sitegen.config import Config
from sitegen.errors import FatalPreconditionError, OutputRootError, RecordFailure
from sitegen.loader import parse_records, read_input
from sitegen.models import (
    BatchResult,
    BatchState,
    LoadedRow,
    OutcomeStatus,
    RecordOutcome,
    SkipReason,
)
from sitegen.scaffolder import ProjectScaffolder, SiteGenerator
from sitegen.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_dir_name,
    save_json,
)
from sitegen.variants import VariantSelector


class Pipeline:
    """Batch orchestrator.

    Attributes:
        config: Run configuration.
        state: Current ``BatchState``.
        history: Every state entered so far, in order.
        result: Accumulated counts and per-record outcomes.
    """

    def __init__(
        self,
        config: Config,
        scaffolder: ProjectScaffolder | None = None,
        generator: SiteGenerator | None = None,
    ) -> None:
        self.config = config
        self.scaffolder = scaffolder or ProjectScaffolder(config.scaffold)
        self.generator = generator or SiteGenerator(
            tagline=config.variants.tagline,
            source_dir=config.scaffold.source_dir,
        )
        self.state = BatchState.INIT
        self.history: list[BatchState] = [BatchState.INIT]
        self.result = BatchResult(output_root=str(config.output_dir.resolve()))

    def _transition(self, state: BatchState) -> None:
        self.state = state
        self.history.append(state)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> BatchResult:
        """Execute the whole batch and return its result.

        Raises:
            FatalPreconditionError: When the run cannot proceed.  The
                exception's ``state`` names the state it was raised in.
        """
        started = time.monotonic()
        console.print(
            Panel(
                f"[bold bright_cyan]sitegen[/bold bright_cyan]\n"
                f"Input  : {escape(str(self.config.input_path))}\n"
                f"Output : {escape(self.result.output_root)}",
                title="[bold]Batch Start[/bold]",
                border_style="bright_cyan",
            )
        )

        try:
            version = await self.scaffolder.check_available()
            console.print(f"  [green]+[/green] {escape(self.config.scaffold.probe[0])} {escape(version)}")
            text = read_input(self.config.input_path)

            self._transition(BatchState.VALIDATING)
            rows = parse_records(text)
            console.print(f"  [green]+[/green] {len(rows)} record(s) loaded")

            self._transition(BatchState.PREPARING_OUTPUT_ROOT)
            await self._prepare_output_root()
        except FatalPreconditionError as exc:
            exc.state = self.state.value
            self._transition(BatchState.FATAL)
            print_error(f"Error: {escape(str(exc))}")
            raise

        self._transition(BatchState.PROCESSING_RECORDS)
        await self._process_records(rows)

        self._transition(BatchState.SUMMARIZING)
        await self._summarize(time.monotonic() - started)

        self._transition(BatchState.DONE)
        return self.result

    # ------------------------------------------------------------------
    # Output root
    # ------------------------------------------------------------------

    async def _prepare_output_root(self) -> None:
        """Create the output root, or warn and pause when it already exists."""
        root = self.config.output_dir
        if root.exists():
            print_warning(
                f"The output directory {escape(str(root))} already exists. "
                "Existing project directories will be skipped."
            )
            if self.config.warn_delay > 0:
                console.print(
                    f"   Press Ctrl+C to cancel, or wait {self.config.warn_delay:g} "
                    "seconds to continue..."
                )
                await asyncio.sleep(self.config.warn_delay)
                console.print("   Continuing with app generation...")
            return

        try:
            await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputRootError(f"Cannot create output directory {root}: {exc}") from exc
        print_success(f"Created output directory at: {escape(str(root.resolve()))}")

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    async def _process_records(self, rows: list[LoadedRow]) -> None:
        selector = VariantSelector(self.config.variants.pool, self.config.variants.seed)
        for row in rows:
            outcome = await self._process_row(row, selector)
            self.result.record(outcome)

    async def _process_row(self, row: LoadedRow, selector: VariantSelector) -> RecordOutcome:
        """Handle one row and return its outcome; never raises ``RecordFailure``."""
        record = row.record
        label = escape(record.domain or f"row {record.row}")

        if not row.valid:
            print_warning(f"Skipping entry at row {record.row}: Missing domain or title")
            return RecordOutcome(
                row=record.row,
                domain=record.domain,
                status=OutcomeStatus.SKIPPED,
                skip_reason=row.skip_reason,
                message="Missing domain or title",
            )

        name = sanitize_dir_name(record.domain)
        project_dir = self.config.output_dir / name
        console.print(f"\n[bold]>[/bold] Generating app for: [cyan]{label}[/cyan]")

        if project_dir.exists():
            print_warning(f"Directory for {label} already exists. Skipping app creation.")
            return RecordOutcome(
                row=record.row,
                domain=record.domain,
                status=OutcomeStatus.SKIPPED,
                skip_reason=SkipReason.DIRECTORY_EXISTS,
                message=f"{project_dir} already exists",
            )

        variant: str | None = None
        try:
            await self.scaffolder.scaffold(record.domain, name, self.config.output_dir)
            await self.generator.prepare(record.domain, project_dir)
            variant = selector.next()
            await self.generator.generate(record.sanitized(), variant, project_dir)
        except RecordFailure as exc:
            print_error(f"Error generating app for {label} ({escape(exc.step)}): {escape(str(exc))}")
            return RecordOutcome(
                row=record.row,
                domain=record.domain,
                status=OutcomeStatus.FAILED,
                step=exc.step,
                variant=variant,
                message=str(exc),
            )

        print_success(f"App for {label} is ready!")
        return RecordOutcome(
            row=record.row,
            domain=record.domain,
            status=OutcomeStatus.SUCCEEDED,
            variant=variant,
        )

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    async def _summarize(self, elapsed: float) -> None:
        console.print()
        summary = {k: str(v) for k, v in self.result.summary_dict().items()}
        summary["Duration"] = format_duration(elapsed)
        print_summary_table(summary, title="Batch Summary")

        if self.config.report_path is not None:
            await save_json(self.result.model_dump(mode="json"), self.config.report_path)
            console.print(f"  Report written to {escape(str(self.config.report_path))}")

        console.print(
            f"All apps generated inside {escape(self.result.output_root)}. "
            "Run npm install & npm run dev inside each folder."
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_config(argv: list[str] | None = None) -> Config:
    """Parse CLI arguments on top of a file or environment configuration."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="sitegen",
        description="sitegen -- scaffold one front-end project per business record",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  sitegen websites.csv\n"
            "  sitegen websites.csv -o ./sites --seed 7 --warn-delay 0\n"
            "  sitegen --config sitegen.json --report build/report.json\n"
        ),
    )
    parser.add_argument("input", nargs="?", default=None,
                        help="CSV file with domain,title,description,phone,address (default: websites.csv)")
    parser.add_argument("--output", "-o", default=None, help="Output root (default: ./build)")
    parser.add_argument("--config", default=None, help="Load settings from a saved JSON config")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the hero variant shuffle")
    parser.add_argument("--variants", default=None, help="Comma-separated hero variant labels")
    parser.add_argument("--warn-delay", type=float, default=None,
                        help="Seconds to wait before reusing an existing output root")
    parser.add_argument("--settle-delay", type=float, default=None,
                        help="Seconds to wait after each scaffold")
    parser.add_argument("--report", default=None, help="Write the batch result as JSON to this path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show scaffolding tool output")

    args = parser.parse_args(argv)

    config = Config.load(Path(args.config)) if args.config else Config.from_env()

    updates: dict = {}
    if args.input:
        updates["input_path"] = Path(args.input)
    if args.output:
        updates["output_dir"] = Path(args.output)
    if args.warn_delay is not None:
        updates["warn_delay"] = args.warn_delay
    if args.report:
        updates["report_path"] = Path(args.report)

    variant_updates: dict = {}
    if args.seed is not None:
        variant_updates["seed"] = args.seed
    if args.variants:
        variant_updates["pool"] = [v.strip() for v in args.variants.split(",") if v.strip()]

    scaffold_updates: dict = {}
    if args.settle_delay is not None:
        scaffold_updates["settle_delay"] = args.settle_delay
    if args.verbose:
        scaffold_updates["verbose"] = True

    data = config.model_dump()
    data.update(updates)
    data["variants"].update(variant_updates)
    data["scaffold"].update(scaffold_updates)
    return Config.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``sitegen`` / ``python -m sitegen``.

    Returns 0 when the batch ran to completion (even with skipped or failed
    records) and 1 on a fatal precondition.
    """
    from pydantic import ValidationError

    try:
        config = build_config(argv)
    except (ValidationError, ValueError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(exc))}")
        return 1

    pipeline = Pipeline(config)
    try:
        asyncio.run(pipeline.run())
    except FatalPreconditionError:
        return 1
    except KeyboardInterrupt:
        print_warning("Cancelled.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
