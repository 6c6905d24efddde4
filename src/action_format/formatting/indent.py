#!/usr/bin/env python3
"""
ACTION-FORMAT INDENT - Unit Detection & Rescaling
-------------------------------------------------
Works out how wide one nesting level is in the source document and maps
source depths onto the configured target width.

Author: Action-Format Team
Date: 2026-10-18
"""

from math import gcd
from typing import Iterable

from action_format.core.models import Line

DEFAULT_INDENT_UNIT = 2


def detect_indent_unit(lines: Iterable[Line]) -> int:
    """
    Returns the GCD of every nonzero indentation depth among non-blank lines.

    Inconsistent files still get a usable unit (4 and 6 give 2). A document
    with no indented line at all falls back to DEFAULT_INDENT_UNIT.
    """
    unit = 0
    for line in lines:
        if line.is_blank:
            continue
        depth = line.depth
        if depth:
            unit = gcd(unit, depth) if unit else depth
    return unit or DEFAULT_INDENT_UNIT


def rescale(depth: int, source_unit: int, target_width: int) -> int:
    """Depths that are not a multiple of the unit floor to the level below."""
    if depth <= 0 or source_unit <= 0:
        return 0
    return (depth // source_unit) * target_width
