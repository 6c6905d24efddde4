#!/usr/bin/env python3
"""
ACTION-FORMAT CORE MODELS
-------------------------
Defines the transient, line-scoped values threaded through a single
formatting pass, plus the per-file report handed back to the CLI.
There is no document model: a workflow is only ever seen one Line at a time.

Author: Action-Format Team
Date: 2026-10-18
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# A mapping key: plain or quoted key, then ':' followed by whitespace or EOL.
MAPPING_KEY_PATTERN = re.compile(r'^(?:"[^"]*"|\'[^\']*\'|[^\s#\'"{\[][^#:]*?)\s*:(?:\s|$)')

# Tabs count as two columns when measuring depth.
TAB_WIDTH = 2


class SectionKind(Enum):
    """The two regions whose direct children get separated."""
    STEPS = "steps"
    JOBS = "jobs"


class LineRole(Enum):
    ORDINARY = "ordinary"
    SECTION_OPEN = "section_open"
    SIBLING = "sibling"


@dataclass(frozen=True)
class Line:
    """
    A single source line, split into its indentation run and its content.

    The content keeps everything after the leading whitespace verbatim,
    including inline comments and trailing characters.
    """
    number: int             # 1-based line number in the source document
    indent_run: str         # Leading spaces/tabs
    content: str            # Everything after the indentation run

    @classmethod
    def parse(cls, number: int, raw: str) -> "Line":
        content = raw.lstrip(" \t")
        return cls(number=number, indent_run=raw[:len(raw) - len(content)], content=content)

    @property
    def raw(self) -> str:
        """The line exactly as read, without its '\\n'."""
        return self.indent_run + self.content

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()

    @property
    def is_comment(self) -> bool:
        return self.content.startswith("#")

    @property
    def code(self) -> str:
        """Content with any inline comment removed. '#' inside quotes is kept."""
        in_double_quote = in_single_quote = False
        for i, char in enumerate(self.content):
            if char == '"' and not in_single_quote:
                in_double_quote = not in_double_quote
            elif char == "'" and not in_double_quote:
                in_single_quote = not in_single_quote
            elif char == "#" and not (in_double_quote or in_single_quote):
                if i == 0 or self.content[i - 1] in " \t":
                    return self.content[:i].rstrip(" \t")
        return self.content.rstrip(" \t")

    @property
    def is_sequence_item(self) -> bool:
        return self.content == "-" or self.content.startswith(("- ", "-\t"))

    @property
    def is_mapping_key(self) -> bool:
        if self.is_blank or self.is_comment or self.is_sequence_item:
            return False
        return bool(MAPPING_KEY_PATTERN.match(self.content))

    @property
    def depth(self) -> int:
        """Indentation in space-equivalent columns."""
        return sum(TAB_WIDTH if ch == "\t" else 1 for ch in self.indent_run)

    @property
    def has_mixed_indentation(self) -> bool:
        return "\t" in self.indent_run and " " in self.indent_run


@dataclass
class Section:
    """
    Scan frame for one open 'steps:' or 'jobs:' region.

    sibling_indent stays None until the first sibling is seen, and is then
    fixed for the lifetime of this section instance. seen_first flips with it.
    """
    kind: SectionKind
    owner_depth: int
    sibling_indent: Optional[int] = None
    seen_first: bool = False

    def closed_by(self, line: Line) -> bool:
        depth = line.depth
        if self.sibling_indent is None:
            if depth < self.owner_depth:
                return True
            if depth == self.owner_depth:
                # Indentless sequences ('steps:' followed by '- ' at the same depth)
                return not (self.kind is SectionKind.STEPS and line.is_sequence_item)
            return False

        if depth < self.sibling_indent:
            return True
        return (depth == self.sibling_indent
                and self.kind is SectionKind.STEPS
                and not line.is_sequence_item)

    def accepts(self, line: Line) -> bool:
        """True when the line has the shape and depth of a sibling."""
        if self.kind is SectionKind.STEPS:
            shaped = line.is_sequence_item
        else:
            shaped = line.is_mapping_key
        if not shaped:
            return False

        if self.sibling_indent is None:
            if self.kind is SectionKind.STEPS:
                return line.depth >= self.owner_depth
            return line.depth > self.owner_depth
        return line.depth == self.sibling_indent


@dataclass(frozen=True)
class Classification:
    """Scanner verdict for one line."""
    role: LineRole = LineRole.ORDINARY
    kind: Optional[SectionKind] = None
    first: bool = False
    closed: Tuple[SectionKind, ...] = ()

    @property
    def is_sibling(self) -> bool:
        return self.role is LineRole.SIBLING


@dataclass
class FileReport:
    """Outcome of formatting one workflow file."""
    path: str
    changed: bool = False
    written: bool = False
    original: Optional[str] = None
    formatted: Optional[str] = None
    error: Optional[str] = None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "ERROR"
        if not self.changed:
            return "UNCHANGED"
        return "REFORMATTED" if self.written else "WOULD_REFORMAT"
