# src/action_format/cli/formatter.py
import difflib
from typing import Dict, Any, List

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from action_format.core.models import FileReport

# Context lines kept around each changed hunk
DIFF_CONTEXT = 4


class ReportFormatter:
    """
    ReportFormatter: the visual side of the CLI.
    Renders per-file status lines, line-numbered diffs, errors and the
    closing summary.
    """

    def __init__(self, out: Console, err: Console, quiet: bool = False):
        self.out = out
        self.err = err
        self.quiet = quiet

    def _print(self, *renderables):
        if not self.quiet:
            self.out.print(*renderables, highlight=False, markup=False, soft_wrap=True)

    def status(self, label: str, style: str, path: str):
        """Prints 'Label: path' with a colored label."""
        self._print(Text.assemble((label, style), f": {path}"))

    def error(self, path: str, message: str):
        self.err.print(Text.assemble(("error", "bold red"), f": {path}: {message}"), highlight=False, soft_wrap=True)

    def fatal(self, message: str):
        self.err.print(Text.assemble(("error", "bold red"), f": {message}"), highlight=False, soft_wrap=True)

    def display_diff(self, report: FileReport):
        """
        Renders old/new line numbers in a gutter, then the line marked
        '+' (green), '-' (red) or unchanged (dim). Hunks are split by a
        dotted rule.
        """
        old_lines = (report.original or "").splitlines()
        new_lines = (report.formatted or "").splitlines()
        matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

        self._print(f"Source: {report.path}")
        self._print(Rule(characters="─", style="dim"))

        for idx, group in enumerate(matcher.get_grouped_opcodes(DIFF_CONTEXT)):
            if idx > 0:
                self._print(Rule(characters="┈", style="dim"))
            for tag, i1, i2, j1, j2 in group:
                if tag == "equal":
                    for offset in range(i2 - i1):
                        self._print(self._diff_row(i1 + offset + 1, j1 + offset + 1, " ",
                                                   old_lines[i1 + offset], "dim"))
                    continue
                if tag in ("replace", "delete"):
                    for i in range(i1, i2):
                        self._print(self._diff_row(i + 1, None, "-", old_lines[i], "red"))
                if tag in ("replace", "insert"):
                    for j in range(j1, j2):
                        self._print(self._diff_row(None, j + 1, "+", new_lines[j], "green"))

        self._print(Rule(characters="─", style="dim"))

    @staticmethod
    def _diff_row(old_no, new_no, marker: str, content: str, style: str) -> Text:
        old_col = f"{old_no:>5}" if old_no is not None else " " * 5
        new_col = f"{new_no:>5}" if new_no is not None else " " * 5
        return Text.assemble(
            (old_col, "cyan dim"), " ", (new_col, "bold cyan dim"), " │",
            (marker, style), (content, style),
            no_wrap=True,
        )

    def print_summary(self, summary: Dict[str, Any], check: bool):
        """One closing line, e.g. '2 files reformatted, 1 file left unchanged'."""
        def plural(count: int) -> str:
            return f"{count} file{'s' if count != 1 else ''}"

        if not summary["total_files"]:
            self._print("No workflow files found")
            return

        parts: List[str] = []
        if summary["changed"]:
            verb = "would be reformatted" if check else "reformatted"
            parts.append(f"{plural(summary['changed'])} {verb}")
        if summary["unchanged"]:
            parts.append(f"{plural(summary['unchanged'])} left unchanged")
        if summary["errors"]:
            parts.append(f"{plural(summary['errors'])} failed")
        self._print(", ".join(parts))
