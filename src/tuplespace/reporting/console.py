"""Console reporter for terminal output."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tuplespace.combinatorial.coverage import CoverageStats
from tuplespace.core.tuples import Tuple


class ConsoleReporter:
    """Renders generated tuples and coverage statistics with rich.

    Example::

        reporter = ConsoleReporter()

        # Print directly
        reporter.print_rows(suite.stream())
        reporter.print_coverage(suite.coverage())

        # Or capture as a string, e.g. for a file
        text = ConsoleReporter(color=False).report_rows(rows)
    """

    def __init__(self, console: Console | None = None, color: bool = True) -> None:
        self.console = console or Console(no_color=not color, highlight=False)
        self.color = color

    def rows_table(self, rows: Iterable[Tuple], title: str | None = None) -> Table:
        """Build a table with one line per tuple and one column per position."""
        rows = list(rows)
        width = max((len(r) for r in rows), default=0)

        table = Table(title=title, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        for position in range(width):
            table.add_column(str(position))

        for index, row in enumerate(rows, 1):
            cells = [Text(str(v)) for v in row]
            cells += [Text("")] * (width - len(cells))
            table.add_row(str(index), *cells)
        return table

    def coverage_panel(self, stats: CoverageStats) -> Panel:
        """Build a panel summarizing a :class:`CoverageStats`."""
        grid = Table(show_header=False, box=None)
        grid.add_column("Metric", style="bold")
        grid.add_column("Value")

        status = "[green]complete[/green]" if stats.is_complete else "[red]incomplete[/red]"
        grid.add_row("Relations", str(stats.relation_count))
        grid.add_row("Strength", str(stats.strength))
        grid.add_row(
            "Projections",
            f"{stats.covered_projections}/{stats.total_projections} "
            f"({stats.coverage_pct:.1f}%) {status}",
        )
        grid.add_row("Tests", f"{stats.test_count} of {stats.source_count}")
        grid.add_row("Reduction", f"{stats.reduction_pct:.1f}%")
        return Panel(grid, title="Coverage", expand=False)

    def report_rows(self, rows: Sequence[Tuple], title: str | None = None) -> str:
        """Render ``rows`` as a table and return the text."""
        with self.console.capture() as capture:
            self.console.print(self.rows_table(rows, title))
        return capture.get()

    def report_coverage(self, stats: CoverageStats) -> str:
        """Render ``stats`` as a panel and return the text."""
        with self.console.capture() as capture:
            self.console.print(self.coverage_panel(stats))
        return capture.get()

    def print_rows(self, rows: Iterable[Tuple], title: str | None = None) -> None:
        self.console.print(self.rows_table(rows, title))

    def print_coverage(self, stats: CoverageStats) -> None:
        self.console.print(self.coverage_panel(stats))


__all__ = ["ConsoleReporter"]
