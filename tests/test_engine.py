#!/usr/bin/env python3
"""
ACTION-FORMAT ENGINE SUITE
--------------------------
Filesystem behaviour of the FormatEngine:
1. Discovery (extensions, ignore patterns, symlinks, sort order)
2. Write / check / diff modes
3. Per-file failures leave the file untouched

Author: Action-Format Team
Date: 2026-10-18
"""

import os
from pathlib import Path

import pytest

from action_format.core.config import FormatterConfig, Settings
from action_format.core.engine import FormatEngine, Mode

UNFORMATTED = (
    "jobs:\n"
    "  build:\n"
    "    steps:\n"
    "      - uses: actions/checkout@v4\n"
    "      - run: make\n"
)
FORMATTED = (
    "jobs:\n"
    "  build:\n"
    "    steps:\n"
    "      - uses: actions/checkout@v4\n"
    "\n"
    "      - run: make\n"
)


@pytest.fixture
def workflows(tmp_path) -> Path:
    root = tmp_path / ".github" / "workflows"
    root.mkdir(parents=True)
    (root / "b_release.yaml").write_text(UNFORMATTED)
    (root / "a_ci.yml").write_text(FORMATTED)
    (root / "README.md").write_text("# not a workflow\n")
    (root / "nested").mkdir()
    (root / "nested" / "deploy.yml").write_text(UNFORMATTED)
    return root


def test_discover_filters_and_sorts(workflows):
    found = FormatEngine().discover([workflows])
    assert [p.relative_to(workflows).as_posix() for p in found] == [
        "a_ci.yml", "b_release.yaml", "nested/deploy.yml",
    ]


def test_discover_applies_ignore_patterns(workflows):
    engine = FormatEngine(Settings(ignore=("b_release.yaml", "nested/*")))
    found = engine.discover([workflows])
    assert [p.name for p in found] == ["a_ci.yml"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX symlink test")
def test_discover_skips_symlinks(workflows, tmp_path):
    target = tmp_path / "outside.yml"
    target.write_text(UNFORMATTED)
    os.symlink(target, workflows / "linked.yml")
    assert "linked.yml" not in [p.name for p in FormatEngine().discover([workflows])]


def test_explicit_file_ignores_extension(tmp_path):
    odd = tmp_path / "workflow.txt"
    odd.write_text(UNFORMATTED)
    assert FormatEngine().discover([odd]) == [odd]


def test_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FormatEngine().discover([tmp_path / "missing"])


def test_write_mode_rewrites_changed_files_only(workflows):
    reports = FormatEngine().run([workflows], Mode.WRITE)
    by_name = {Path(r.path).name: r for r in reports}

    assert by_name["a_ci.yml"].status == "UNCHANGED"
    assert by_name["b_release.yaml"].status == "REFORMATTED"
    assert (workflows / "b_release.yaml").read_text() == FORMATTED
    assert (workflows / "nested" / "deploy.yml").read_text() == FORMATTED
    # No temp files left behind
    assert not list(workflows.rglob("*.action-format.tmp"))


@pytest.mark.parametrize("mode", [Mode.CHECK, Mode.DIFF])
def test_check_and_diff_modes_never_write(workflows, mode):
    report = FormatEngine().format_file(workflows / "b_release.yaml", mode)
    assert report.changed is True
    assert report.written is False
    assert report.status == "WOULD_REFORMAT"
    assert report.formatted == FORMATTED
    assert (workflows / "b_release.yaml").read_text() == UNFORMATTED


def test_settings_reach_the_pipeline(workflows):
    engine = FormatEngine(Settings(formatter=FormatterConfig(separate_steps=False)))
    report = engine.format_file(workflows / "b_release.yaml", Mode.CHECK)
    assert report.changed is False


def test_mixed_indentation_is_reported_and_file_untouched(tmp_path):
    broken = tmp_path / "broken.yml"
    source = "jobs:\n  build:\n \t runs-on: ubuntu-latest\n"
    broken.write_text(source)

    report = FormatEngine().format_file(broken)
    assert report.status == "ERROR"
    assert report.error == "Invalid indentation at line 3: mixed tabs and spaces"
    assert broken.read_text() == source


def test_undecodable_file_is_reported(tmp_path):
    garbage = tmp_path / "garbage.yml"
    garbage.write_bytes(b"\xff\xfe\xfa\x00jobs:")
    report = FormatEngine().format_file(garbage)
    assert report.status == "ERROR"


def test_summary_counts(workflows, tmp_path):
    broken = tmp_path / "broken.yml"
    broken.write_text("a:\n\t b: 1\n")
    engine = FormatEngine()
    reports = engine.run([workflows, broken], Mode.CHECK)
    summary = engine.generate_summary(reports)

    assert summary["total_files"] == 4
    assert summary["changed"] == 2
    assert summary["unchanged"] == 1
    assert summary["errors"] == 1
