"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from typing import Iterable, Optional

from ..application.extraction import ExtractionResult
from ..application.validation import ValidationResult
from ..core.domain.diagnostics import Diagnostic
from ..core.domain.enums import Severity


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    FILE = "📄"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    MAX_LISTED = 10

    def __init__(self, color: bool = True, verbose: bool = False):
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        """Print text."""
        print(text)

    def header(self, text: str) -> None:
        """Print a header."""
        width = max(len(text) + 4, 50)
        border = Colors.CYAN + Symbols.BOX_H * width + Colors.RESET if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Print debug message (only in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        """Print a list item."""
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "missing":
            status_str = self._c(" [MISSING]", Colors.YELLOW)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    def file_written(self, path: str) -> None:
        self.print(f"    {Symbols.FILE} {path}")

    # -------------------------------------------------------------------------
    # Result Summaries
    # -------------------------------------------------------------------------

    def diagnostics(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Print the first few diagnostics of each severity."""
        items = list(diagnostics)
        for severity, show in ((Severity.ERROR, self.error), (Severity.WARNING, self.warning)):
            matching = [d for d in items if d.severity is severity]
            if not matching:
                continue
            self.print()
            show(f"{len(matching)} {severity.value}(s):")
            for diagnostic in matching[: self.MAX_LISTED]:
                self.detail(str(diagnostic))
            if len(matching) > self.MAX_LISTED:
                self.detail(f"... and {len(matching) - self.MAX_LISTED} more")

    def extraction_result(self, result: ExtractionResult) -> None:
        """Print catalog extraction summary."""
        catalog = result.catalog
        self.section("Catalog")
        self.print()
        self.table(["Metric", "Count"], [
            ["Offers", str(len(catalog))],
            ["Live offers", str(len(catalog.addressable_indices()))],
            ["Items (incl. bundled)", str(len(catalog.offers))],
            ["Participants", str(len(catalog.participants()))],
            ["Name lookups", str(result.lookups)],
        ])
        self.diagnostics(result.diagnostics)

    def validation_result(self, result: ValidationResult) -> None:
        """Print validation summary."""
        summary = result.summary
        self.section("Validation Summary")
        self.print()
        self.table(["Metric", "Count"], [
            ["Participants", str(summary.participants)],
            ["Lists received", str(summary.submissions_received)],
            ["Offers", str(summary.total_offers)],
            ["Live offers", str(summary.addressable_offers)],
            ["Live offers addressed", str(summary.addressed_offers)],
            ["Merged statements", str(len(result.merged))],
        ])

        if summary.missing_users:
            self.print()
            self.warning(f"{len(summary.missing_users)} participant(s) without a wants list:")
            for username in summary.missing_users:
                self.item(username, "missing")

        self.diagnostics(result.diagnostics)

        self.print()
        if result.success:
            self.success("All wants lists are valid")
        else:
            self.error(f"Wants lists have {len(result.errors)} error(s)")
