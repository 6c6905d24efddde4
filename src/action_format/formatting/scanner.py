#!/usr/bin/env python3
"""
ACTION-FORMAT SCANNER - Block Boundary Detection
------------------------------------------------
Tracks entry into and exit from 'steps:' and 'jobs:' regions using nothing
but indentation depth and the shape of each line, and reports which lines
start a new sibling inside those regions.

Open regions live on a stack: a job's 'steps:' list is scanned while the
surrounding 'jobs:' mapping stays open underneath it.

Author: Action-Format Team
Date: 2026-10-18
"""

import re
from typing import List, Optional

from action_format.core.models import Classification, Line, LineRole, Section, SectionKind

# 'steps:' / 'jobs:' with no inline value. Node properties ('&anchor',
# '!tag') and a trailing comment are allowed; an alias or scalar is not.
SECTION_KEY_PATTERN = re.compile(r'^(steps|jobs):(?:[ \t]+[&!][^\s#]*)*(?:[ \t]+#.*)?[ \t]*$')

# Value is a block scalar indicator: '|', '>-', '|+2', optionally after node
# properties. Matched against the code with its inline comment removed.
BLOCK_SCALAR_PATTERN = re.compile(
    r'^(?:-[ \t]+)?'
    r'(?:(?:"[^"]*"|\'[^\']*\'|[^\s#\'"][^#:]*?)[ \t]*:[ \t]+)?'
    r'(?:[&!]\S*[ \t]+)*'
    r'[|>][-+0-9]*$'
)


class BlockScanner:
    """
    Forward-only classifier. Call classify() once per line, in order.
    """

    def __init__(self):
        self.sections: List[Section] = []
        # Depth of the key that opened a block scalar, while inside one
        self.block_owner: Optional[int] = None

    @staticmethod
    def _key_column(line: Line) -> int:
        """Column of the key owning a block scalar; "- run: |" owns from the key, not the dash."""
        if line.is_sequence_item:
            rest = line.content[1:].lstrip(" \t")
            if not rest.startswith(("|", ">")):
                return line.depth + len(line.content) - len(rest)
        return line.depth

    @property
    def current(self) -> Optional[Section]:
        return self.sections[-1] if self.sections else None

    def _may_open(self, kind: SectionKind) -> bool:
        # A 'jobs:' key inside a step is step data, never a workflow's job map
        if kind is SectionKind.JOBS:
            return not any(s.kind is SectionKind.STEPS for s in self.sections)
        return True

    def classify(self, line: Line) -> Classification:
        if line.is_blank or line.is_comment:
            return Classification()

        # Block scalar bodies are opaque
        if self.block_owner is not None:
            if line.depth > self.block_owner:
                return Classification()
            self.block_owner = None

        closed = []
        while self.sections and self.sections[-1].closed_by(line):
            closed.append(self.sections.pop().kind)

        result = Classification(closed=tuple(closed))
        section = self.current
        if section is not None and section.accepts(line):
            first = not section.seen_first
            if first:
                section.sibling_indent = line.depth
                section.seen_first = True
            result = Classification(LineRole.SIBLING, section.kind, first, tuple(closed))

        match = SECTION_KEY_PATTERN.match(line.content)
        if match and self._may_open(SectionKind(match.group(1))):
            kind = SectionKind(match.group(1))
            self.sections.append(Section(kind=kind, owner_depth=line.depth))
            if not result.is_sibling:
                result = Classification(LineRole.SECTION_OPEN, kind, closed=tuple(closed))
        elif BLOCK_SCALAR_PATTERN.match(line.code):
            self.block_owner = self._key_column(line)

        return result
