"""
Rich console output for BulkPTR - one line per address as it completes
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..models import BatchSummary, OutcomeStatus, ResolutionOutcome


class ConsoleOutput:
    """
    Console output for resolution outcomes.

    Results go to stdout in a grep-friendly format:
        8.8.8.8 # dns.google.
        192.0.2.1
    Diagnostics and the summary panel go to stderr.
    """

    def __init__(self, console: Optional[Console] = None,
                 err_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print_outcome(self, outcome: ResolutionOutcome):
        """Print a single outcome, plus a diagnostic line if it failed"""
        if outcome.is_error:
            self.print_diagnostic(outcome)
        self.console.print(
            self.format_line(outcome), markup=False, emoji=False, soft_wrap=True
        )

    def print_diagnostic(self, outcome: ResolutionOutcome):
        """Print the error of a failed outcome to stderr"""
        line = Text()
        line.append("Query error", style="yellow")
        line.append(f" for ({outcome.address}) from ({outcome.nameserver}): ")
        line.append(outcome.error or "", style="dim")
        self.err_console.print(line, soft_wrap=True)

    @staticmethod
    def format_line(outcome: ResolutionOutcome) -> str:
        """Format the stdout line for an outcome"""
        address = str(outcome.address) if outcome.address is not None else outcome.query
        if outcome.status is OutcomeStatus.RESOLVED:
            return f"{address} # {outcome.hostname}"
        return address

    def print_summary(self, summary: BatchSummary):
        """Print batch summary panel to stderr"""
        content = Text()
        content.append("Resolved: ", style="bold")
        content.append(f"{summary.resolved}", style="green")
        content.append("  |  No PTR: ", style="bold")
        content.append(f"{summary.no_answer}", style="dim")
        content.append("  |  Errors: ", style="bold")
        content.append(f"{summary.errors}", style="red" if summary.errors else "dim")

        if summary.errors_by_kind:
            kinds = ", ".join(
                f"{kind} {count}" for kind, count in sorted(summary.errors_by_kind.items())
            )
            content.append(f"\n({kinds})", style="dim")

        if summary.elapsed is not None:
            content.append(
                f"\n{summary.total} addresses in {summary.elapsed:.1f}s", style="dim"
            )

        panel = Panel(
            content,
            title=Text("Summary", style="bold"),
            border_style="red" if summary.errors else "green",
            padding=(0, 1),
        )
        self.err_console.print(panel)

    def print_error(self, message: str):
        """Print error message"""
        self.err_console.print(f"[bold red]Error:[/] {message}")
