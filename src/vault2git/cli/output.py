"""
Output - Console output formatting.

Prints pass summaries, per-file failures and listings with colors.
"""

import sys
from datetime import datetime
from typing import Optional

from ..core.domain.entities import PassResult
from ..core.ports.remote_repository import BranchInfo, Principal, RepositoryInfo


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
    LOCK = "🔒"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    MAX_LISTED_FAILURES = 20

    def __init__(self, color: bool = True, verbose: bool = False, stream=None):
        self.stream = stream or sys.stdout
        self.color = color and hasattr(self.stream, "isatty") and self.stream.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def header(self, text: str) -> None:
        width = max(len(text) + 4, 50)
        border = self._c(Symbols.BOX_H * width, Colors.CYAN) if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
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

    def item(self, text: str, status: Optional[str] = None) -> None:
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "skip":
            status_str = self._c(" [SKIP]", Colors.YELLOW)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
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
            self.print("  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            ))

    # -------------------------------------------------------------------------
    # Domain Output
    # -------------------------------------------------------------------------

    def pass_result(self, result: PassResult) -> None:
        """Print a pass summary and one line per failed file."""
        stamp = (result.finished_at or datetime.now()).strftime("%H:%M:%S")
        self.section(f"Sync {result.repository}@{result.branch} ({stamp})")
        self.print()

        if self.verbose:
            for outcome in result.committed:
                self.item(outcome.path, "ok")

        self.table(["Outcome", "Files"], [
            ["Committed", str(len(result.committed))],
            ["Skipped", str(len(result.skipped))],
            ["Failed", str(len(result.failed))],
        ])

        failed = result.failed
        if failed:
            self.print()
            self.error(f"{len(failed)} file(s) failed:")
            for outcome in failed[:self.MAX_LISTED_FAILURES]:
                kind = outcome.error_kind.value if outcome.error_kind else "error"
                self.item(f"{outcome.path}: {outcome.message}", kind)
            if len(failed) > self.MAX_LISTED_FAILURES:
                self.detail(f"... and {len(failed) - self.MAX_LISTED_FAILURES} more")

        self.print()
        if result.success:
            self.success(f"Sync completed: {result.summary()}")
        else:
            self.error(f"Sync completed with errors: {result.summary()}")

    def principal(self, principal: Principal, provider: str) -> None:
        name = f" ({principal.name})" if principal.name else ""
        self.success(f"Authenticated with {provider} as {principal.login}{name}")

    def repositories(self, repos: list[RepositoryInfo]) -> None:
        self.section(f"Repositories ({len(repos)})")
        for repo in repos:
            lock = f" {Symbols.LOCK}" if repo.private else ""
            self.item(f"{repo.full_name}{lock}", repo.default_branch)

    def branches(self, repository: str, branches: list[BranchInfo]) -> None:
        self.section(f"Branches of {repository} ({len(branches)})")
        for branch in branches:
            commit = branch.commit[:8] if branch.commit else None
            self.item(branch.name, commit)
