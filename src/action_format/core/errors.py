#!/usr/bin/env python3
"""
ACTION-FORMAT ERRORS
--------------------
Failure taxonomy shared by the formatting pipeline, the config loader
and the file engine.

Author: Action-Format Team
Date: 2026-10-18
"""


class ActionFormatError(Exception):
    """Base class for every error raised by action-format."""


class FormatError(ActionFormatError):
    """A document could not be formatted."""


class MixedIndentationError(FormatError):
    """
    A line's indentation run contains both tabs and spaces.

    Formatting of the document stops at the first such line; no partial
    output is produced.
    """

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"Invalid indentation at line {line}: mixed tabs and spaces")


class ConfigError(ActionFormatError):
    """The configuration file is unreadable or holds invalid values."""
