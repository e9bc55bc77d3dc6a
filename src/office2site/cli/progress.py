#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-file status lines and the end-of-run summary table.

Both render with rich, or as plain text on stderr when rich output is
turned off (``--no-rich``).
"""

from __future__ import annotations

import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from office2site.site import ConversionReport
from office2site.utils.timing import format_duration

_STATUS_STYLES = {"converted": "green", "copied": "cyan", "failed": "bold red"}


class SummaryRenderer:
    """Render conversion progress and summaries in rich or plain text.

    Parameters
    ----------
    use_rich : bool
        Whether to use rich for output
    console : Console, optional
        Console to print to (defaults to one writing to stderr)

    Examples
    --------
    >>> renderer = SummaryRenderer(use_rich=False)
    >>> renderer.render_file_status("deck.pptx", "converted", "deck.md")

    """

    def __init__(self, use_rich: bool, console: Optional[Console] = None):
        """Initialize summary renderer."""
        self.use_rich = use_rich
        self._console = (console or Console(stderr=True)) if use_rich else None

    def render_file_status(self, relative: str, status: str, detail: Optional[str] = None) -> None:
        """Print one line for a processed file."""
        if status == "failed":
            line = f"  {relative}  ->  FAILED"
            extra = f"\n    {detail}" if detail else ""
        else:
            line = f"  {relative}  ->  {detail or relative}" + (" (copied)" if status == "copied" else "")
            extra = ""

        if self.use_rich and self._console is not None:
            style = _STATUS_STYLES.get(status, "white")
            self._console.print(f"[{style}]{escape(line)}[/{style}]{escape(extra)}", highlight=False)
        else:
            print(line + extra, file=sys.stderr)

    def render_conversion_summary(self, report: ConversionReport, title: str = "Conversion Summary") -> None:
        """Render the end-of-run table followed by the failure list, if any.

        Parameters
        ----------
        report : ConversionReport
            Result of the run
        title : str, default="Conversion Summary"
            Table title

        """
        if self.use_rich and self._console is not None:
            table = Table(title=title)
            table.add_column("Status", style="cyan", no_wrap=True)
            table.add_column("Count", style="magenta")

            table.add_row("+ Converted", str(report.converted))
            table.add_row("- Failed", str(report.failed))
            table.add_row("Copied", str(report.copied))
            table.add_row("Total", str(report.total))
            table.add_row("Elapsed", format_duration(report.elapsed))
            self._console.print(table)

            for relative, message in report.failures:
                self._console.print(f"[red]{escape(relative)}[/red]: {escape(message)}", highlight=False)
            if report.sidebar_path is not None:
                self._console.print(f"Sidebar config -> {escape(str(report.sidebar_path))}", highlight=False)
            self._console.print(report.summary(), highlight=False)
        else:
            print(f"\n{title}", file=sys.stderr)
            print("=" * 40, file=sys.stderr)
            print(f"  Converted:  {report.converted}", file=sys.stderr)
            print(f"  Failed:     {report.failed}", file=sys.stderr)
            print(f"  Copied:     {report.copied}", file=sys.stderr)
            print(f"  Total:      {report.total}", file=sys.stderr)
            print(f"  Elapsed:    {format_duration(report.elapsed)}", file=sys.stderr)
            for relative, message in report.failures:
                print(f"  {relative}: {message}", file=sys.stderr)
            if report.sidebar_path is not None:
                print(f"Sidebar config -> {report.sidebar_path}", file=sys.stderr)
            print(report.summary(), file=sys.stderr)
