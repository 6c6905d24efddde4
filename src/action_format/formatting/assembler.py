#!/usr/bin/env python3
"""
ACTION-FORMAT ASSEMBLER - Separator Policy & Output Buffer
----------------------------------------------------------
Decides where blank separators go and writes every line back with its
rescaled indentation. Content after the indentation is never touched.

Comment lines are held back until the next content line arrives, so a
comment describing a job or step can move below the separator together
with the sibling it annotates.

Author: Action-Format Team
Date: 2026-10-18
"""

from typing import List

from action_format.core.config import FormatterConfig
from action_format.core.models import Classification, Line, SectionKind
from action_format.formatting.indent import rescale


def separator_before(classification: Classification, config: FormatterConfig,
                     previous_blank: bool) -> bool:
    """
    True when a blank line must precede the sibling just classified.

    The first sibling of a section never gets one, and neither does a
    sibling that already follows a blank line.
    """
    if not classification.is_sibling or classification.first:
        return False
    if classification.kind is SectionKind.STEPS:
        enabled = config.separate_steps
    else:
        enabled = config.separate_jobs
    return enabled and not previous_blank


class LineAssembler:
    """Output buffer for one document."""

    def __init__(self, source_unit: int, target_width: int):
        self.source_unit = source_unit
        self.target_width = target_width
        self.output: List[str] = []
        self.pending: List[Line] = []
        self.previous_blank = False

    def hold(self, line: Line):
        """Defers a comment line until the next content line is known."""
        self.pending.append(line)

    def release_detached(self, line: Line):
        """
        Writes held comments that do not belong to `line`.

        The trailing run of comments at the same depth as `line` stays
        pending: those are its leading comments.
        """
        keep = 0
        for comment in reversed(self.pending):
            if comment.depth != line.depth:
                break
            keep += 1
        detached = self.pending[:len(self.pending) - keep]
        self.pending = self.pending[len(self.pending) - keep:]
        for comment in detached:
            self._write(comment)

    def flush(self):
        for comment in self.pending:
            self._write(comment)
        self.pending = []

    def separator(self):
        self.output.append("")
        self.previous_blank = True

    def blank(self):
        self.flush()
        self.separator()

    def emit(self, line: Line):
        self.flush()
        self._write(line)

    def _write(self, line: Line):
        depth = rescale(line.depth, self.source_unit, self.target_width)
        self.output.append(" " * depth + line.content)
        self.previous_blank = False

    def render(self, trailing_newline: bool) -> str:
        self.flush()
        text = "\n".join(self.output)
        if trailing_newline:
            text += "\n"
        return text
