"""Tests for patch extraction via git format-patch."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from merlon.errors import EmptyPatchSetError, PackagingError
from merlon.git.patches import PatchExtractor, PatchSet, WATCHED_PATHS
from tests._fixtures.mod_builder import write_patches


def _output_dir(args: list[str]) -> Path:
    return Path(args[args.index("-o") + 1])


def test_extractor_runs_format_patch_with_expected_flags(tmp_path: Path) -> None:
    source = tmp_path / "papermario"
    source.mkdir()
    calls: list[tuple[list[str], Path]] = []

    def runner(args, cwd):  # type: ignore[no-untyped-def]
        args = list(args)
        calls.append((args, Path(cwd)))
        write_patches(_output_dir(args), ["0001-Add-thing.patch"])
        return ""

    extractor = PatchExtractor(runner=runner)
    result = extractor.extract(source, "abc123", tmp_path / "out" / "patches")

    args, cwd = calls[0]
    assert cwd == source
    assert args[:3] == ["git", "format-patch", "abc123..HEAD"]
    for flag in (
        "--minimal",
        "--binary",
        "--ignore-cr-at-eol",
        "--function-context",
        "--keep-subject",
        "--no-merges",
        "--no-stdout",
    ):
        assert flag in args
    separator = args.index("--")
    assert args[separator + 1 :] == list(WATCHED_PATHS)
    assert _output_dir(args).is_absolute()
    assert isinstance(result, PatchSet)
    assert [path.name for path in result] == ["0001-Add-thing.patch"]


def test_extractor_returns_patches_in_commit_order(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        write_patches(
            _output_dir(list(args)),
            ["0002-Second.patch", "0010-Tenth.patch", "0001-First.patch"],
        )
        return ""

    result = PatchExtractor(runner=runner).extract(tmp_path, "base", tmp_path / "patches")

    assert [path.name for path in result.patches] == [
        "0001-First.patch",
        "0002-Second.patch",
        "0010-Tenth.patch",
    ]
    assert len(result) == 3
    assert result.base_commit == "base"


def test_extractor_clears_stale_entries_first(tmp_path: Path) -> None:
    output = tmp_path / "patches"
    (output / "nested").mkdir(parents=True)
    (output / "nested" / "old.txt").write_text("stale", encoding="utf-8")
    (output / "0001-Old.patch").write_text("stale", encoding="utf-8")
    seen_before_run: list[list[str]] = []

    def runner(args, cwd):  # type: ignore[no-untyped-def]
        target = _output_dir(list(args))
        seen_before_run.append(sorted(p.name for p in target.iterdir()))
        write_patches(target, ["0001-New.patch"])
        return ""

    result = PatchExtractor(runner=runner).extract(tmp_path, "base", output)

    assert seen_before_run == [[]]
    assert sorted(p.name for p in output.iterdir()) == ["0001-New.patch"]
    assert [p.name for p in result] == ["0001-New.patch"]


def test_extractor_rejects_empty_history(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        return ""

    with pytest.raises(EmptyPatchSetError) as excinfo:
        PatchExtractor(runner=runner).extract(tmp_path, "HEAD", tmp_path / "patches")

    assert "did you forget to `git commit`" in str(excinfo.value)
    assert excinfo.value.stage == "extract"


def test_extractor_wraps_git_failure_with_destination(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(128, list(args))

    output = tmp_path / "patches"
    with pytest.raises(PackagingError) as excinfo:
        PatchExtractor(runner=runner).extract(tmp_path, "base", output)

    assert not isinstance(excinfo.value, EmptyPatchSetError)
    assert str(output.resolve()) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, subprocess.CalledProcessError)
