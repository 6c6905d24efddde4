#!/usr/bin/env python3
"""
ACTION-FORMAT PIPELINE - The Single Pass
----------------------------------------
Wires the indent detector, block scanner, separator policy and line
assembler into one forward pass over a workflow document.

The pass never revisits a line. Formatting either succeeds with the whole
document or raises before returning anything.

Author: Action-Format Team
Date: 2026-10-18
"""

import logging
from typing import List, Optional, Tuple

from action_format.core.config import FormatterConfig
from action_format.core.errors import MixedIndentationError
from action_format.core.models import Line
from action_format.formatting.assembler import LineAssembler, separator_before
from action_format.formatting.indent import detect_indent_unit
from action_format.formatting.scanner import BlockScanner

logger = logging.getLogger("action_format.pipeline")


def split_document(text: str) -> Tuple[List[Line], bool]:
    """Splits on '\\n' and reports whether the text ended with one."""
    trailing_newline = text.endswith("\n")
    raw_lines = text.split("\n")
    if trailing_newline:
        raw_lines.pop()
    return [Line.parse(i, raw) for i, raw in enumerate(raw_lines, 1)], trailing_newline


class FormattingPipeline:
    """
    Reusable formatter bound to one FormatterConfig.

    Holds no per-document state; every run() builds a fresh scanner and
    output buffer, so one pipeline can serve many files.
    """

    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()

    def run(self, text: str) -> str:
        lines, trailing_newline = split_document(text)
        source_unit = detect_indent_unit(lines)
        logger.debug(f"Detected source indent unit: {source_unit}")

        scanner = BlockScanner()
        assembler = LineAssembler(source_unit, self.config.indent_size)

        for line in lines:
            if line.has_mixed_indentation:
                logger.debug(f"Mixed indentation at line {line.number}: {line.raw!r}")
                raise MixedIndentationError(line.number)

            classification = scanner.classify(line)
            if line.is_blank:
                assembler.blank()
                continue
            if line.is_comment:
                assembler.hold(line)
                continue

            if classification.is_sibling:
                assembler.release_detached(line)
            else:
                assembler.flush()
            if separator_before(classification, self.config, assembler.previous_blank):
                assembler.separator()
            assembler.emit(line)

        return assembler.render(trailing_newline)


def format_string(text: str, config: Optional[FormatterConfig] = None) -> str:
    """Formats a workflow document held in memory."""
    return FormattingPipeline(config).run(text)
