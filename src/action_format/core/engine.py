#!/usr/bin/env python3
"""
ACTION-FORMAT ENGINE - File Orchestrator
----------------------------------------
The FormatEngine finds workflow files, runs each through the formatting
pipeline and, depending on the mode, reports or writes the result.
Writes are atomic: a temp file is written next to the target and moved
into place.

Author: Action-Format Team
Date: 2026-10-18
"""

import fnmatch
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from action_format.core.config import Settings
from action_format.core.errors import FormatError
from action_format.core.models import FileReport
from action_format.formatting.pipeline import FormattingPipeline

logger = logging.getLogger("action_format.engine")

WORKFLOWS_DIR = Path(".github") / "workflows"


class Mode(Enum):
    WRITE = "write"
    CHECK = "check"
    DIFF = "diff"


class FormatEngine:
    """
    Applies the formatter to files on disk.
    Every file is independent: a failure is recorded in its report and the
    run moves on to the next one.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.pipeline = FormattingPipeline(self.settings.formatter)

    def is_ignored(self, path: Path, root: Optional[Path] = None) -> bool:
        """Matches ignore patterns against the file name and its root-relative path."""
        candidates = [path.name, path.as_posix()]
        if root is not None:
            try:
                candidates.append(path.relative_to(root).as_posix())
            except ValueError:
                pass
        return any(
            fnmatch.fnmatch(candidate, pattern)
            for pattern in self.settings.ignore
            for candidate in candidates
        )

    def discover(self, paths: Iterable[Path]) -> List[Path]:
        """
        Expands files and directories into a sorted list of workflow files.

        Explicit files are taken as-is (extension unchecked); directories are
        walked recursively, skipping symlinks and ignored entries.
        """
        found: List[Path] = []
        for path in paths:
            path = Path(path)
            if path.is_file():
                if not self.is_ignored(path):
                    found.append(path)
                continue
            if not path.is_dir():
                raise FileNotFoundError(f"Path '{path}' not found")

            extensions = {ext.lower() for ext in self.settings.extensions}
            matches = [
                f for f in path.rglob("*")
                if f.is_file() and not f.is_symlink()
                and f.suffix.lower() in extensions
                and not self.is_ignored(f, root=path)
            ]
            logger.debug(f"Discovered {len(matches)} workflow file(s) under {path}")
            found.extend(sorted(matches))
        return found

    def format_file(self, path: Path, mode: Mode = Mode.WRITE) -> FileReport:
        """Formats one file; writes it back only in WRITE mode and only if it changed."""
        report = FileReport(path=str(path))
        try:
            original = Path(path).read_text(encoding="utf-8")
            formatted = self.pipeline.run(original)
        except (FormatError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Error processing {path}: {e}")
            report.error = str(e)
            return report

        report.original = original
        report.formatted = formatted
        report.changed = original != formatted

        if mode is Mode.WRITE and report.changed:
            try:
                self._atomic_write(Path(path), formatted)
                report.written = True
            except OSError as e:
                report.error = str(e)

        logger.debug(f"{path}: {report.status}")
        return report

    def run(self, paths: Iterable[Path], mode: Mode = Mode.WRITE) -> List[FileReport]:
        return [self.format_file(path, mode) for path in self.discover(paths)]

    def generate_summary(self, reports: List[FileReport]) -> Dict[str, Any]:
        """Counts per status, for the closing summary line."""
        return {
            "total_files": len(reports),
            "changed": sum(1 for r in reports if r.changed and r.error is None),
            "unchanged": sum(1 for r in reports if r.status == "UNCHANGED"),
            "errors": sum(1 for r in reports if r.error is not None),
        }

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(f".{target_path.name}.action-format.tmp")
        try:
            temp_file.write_text(content, encoding="utf-8", newline="\n")
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise OSError(f"Atomic write failed: {e}") from e
