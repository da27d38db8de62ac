"""Render discovery and per-repository update events."""

from collections import Counter
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from .models import OutcomeStatus, SkipReason, UpdateOutcome


class StatusReporter(Protocol):
    """Receives the events of a run."""

    def discovered(self, root: str, count: int) -> None: ...

    def start(self, path: Path) -> None: ...

    def branch(self, path: Path, name: str) -> None: ...

    def success(self, path: Path, total: int) -> None: ...

    def partial(self, path: Path, succeeded: int, total: int, failed: list[str]) -> None: ...

    def skipped(self, path: Path, reason: SkipReason | None) -> None: ...

    def failed(self, path: Path, error: Exception | None) -> None: ...

    def summary(self, outcomes: list[UpdateOutcome]) -> None: ...


def report_outcome(reporter: StatusReporter, outcome: UpdateOutcome) -> None:
    """Send the terminal event matching ``outcome`` to the reporter."""
    if outcome.status is OutcomeStatus.SUCCESS:
        reporter.success(outcome.path, outcome.total)
    elif outcome.status is OutcomeStatus.PARTIAL:
        reporter.partial(outcome.path, len(outcome.succeeded), outcome.total, outcome.failed)
    elif outcome.status is OutcomeStatus.SKIPPED:
        reporter.skipped(outcome.path, outcome.reason)
    else:
        reporter.failed(outcome.path, outcome.error)


class ConsoleReporter:
    """Spinner per repository followed by one result line, using rich."""

    def __init__(self, console: Console | None = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self._status: Status | None = None

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def discovered(self, root: str, count: int) -> None:
        if count == 0:
            self.console.print(f"[yellow]![/yellow] No repositories found in [bold]{escape(root)}[/bold]")
            return
        self.console.print(f"[green]✓[/green] Found {count} repositories")

    def start(self, path: Path) -> None:
        self._stop()
        self._status = self.console.status(escape(str(path)))
        self._status.start()

    def branch(self, path: Path, name: str) -> None:
        if self._status is not None:
            self._status.update(f"({escape(name)}): {escape(str(path))}")

    def success(self, path: Path, total: int) -> None:
        self._stop()
        self.console.print(f"[bold green] SUCCESS [/bold green] {escape(str(path))}: [{total}/{total}]")

    def partial(self, path: Path, succeeded: int, total: int, failed: list[str]) -> None:
        self._stop()
        names = escape(", ".join(failed))
        self.console.print(
            f"[bold yellow] WARNING [/bold yellow] {escape(str(path))}: [{succeeded}/{total}] ({names})"
        )

    def skipped(self, path: Path, reason: SkipReason | None) -> None:
        self._stop()
        if reason is SkipReason.NO_BRANCH:
            self.console.print(f"[yellow on grey23] NO-BRANCH [/yellow on grey23] {escape(str(path))}")
        else:
            self.console.print(f"[black on bright_blue] SKIPPED [/black on bright_blue] {escape(str(path))}")

    def failed(self, path: Path, error: Exception | None) -> None:
        self._stop()
        self.console.print(f"[bold red]  FAILED [/bold red] {escape(str(path))}")
        if self.verbose and error is not None:
            self.console.print(f"[dim]{escape(str(error))}[/dim]")

    def summary(self, outcomes: list[UpdateOutcome]) -> None:
        self._stop()
        self.console.print(create_summary_table(outcomes))


def create_summary_table(outcomes: list[UpdateOutcome]) -> Table:
    """Count repositories per outcome."""
    counts = Counter(outcome.status for outcome in outcomes)

    table = Table(title="Summary")
    table.add_column("Status", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Updated", f"[green]{counts[OutcomeStatus.SUCCESS]}[/green]")
    table.add_row("Partial", f"[yellow]{counts[OutcomeStatus.PARTIAL]}[/yellow]")
    table.add_row("Skipped", f"[blue]{counts[OutcomeStatus.SKIPPED]}[/blue]")
    table.add_row("Failed", f"[red]{counts[OutcomeStatus.FAILED]}[/red]")
    table.add_row("Total", f"{len(outcomes)}")
    return table
