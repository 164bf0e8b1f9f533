"""Patch extraction from the vendored source tree via ``git format-patch``."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Sequence

from ..errors import EmptyPatchSetError, PackagingError
from ..logging import get_logger

# Paths inside the vendored tree whose history makes up a mod.
WATCHED_PATHS: Sequence[str] = ("src", "include", "assets", "ver/us")

PATCH_SUFFIX = ".patch"


@dataclass(frozen=True)
class PatchSet:
    """Patch files for ``base_commit..HEAD``, oldest commit first."""

    base_commit: str
    directory: Path
    patches: Sequence[Path]

    def __len__(self) -> int:
        return len(self.patches)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.patches)


class PatchExtractor:
    """Writes one patch per qualifying commit into a freshly cleared directory."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        watched_paths: Sequence[str] = WATCHED_PATHS,
    ) -> None:
        self._runner = runner or self._default_runner
        self._watched_paths = tuple(watched_paths)
        self.logger = get_logger("patches")

    def extract(self, source_dir: Path, base_commit: str, output_dir: Path) -> PatchSet:
        output_dir.mkdir(parents=True, exist_ok=True)
        clear_directory(output_dir)
        output_dir = output_dir.resolve()

        args = self.format_patch_args(base_commit, output_dir)
        self.logger.debug("Running %s in %s", " ".join(args), source_dir)
        try:
            self._run(args, cwd=source_dir)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise PackagingError(
                "extract", f"failed git format-patch to directory {output_dir}"
            ) from exc

        patches = sorted(
            path
            for path in output_dir.iterdir()
            if path.is_file() and path.suffix == PATCH_SUFFIX
        )
        if not patches:
            raise EmptyPatchSetError(
                f"no commits in {source_dir} since {base_commit} - "
                "did you forget to `git commit` inside?"
            )
        self.logger.info("Extracted %d patch(es) since %s", len(patches), base_commit)
        return PatchSet(base_commit=base_commit, directory=output_dir, patches=patches)

    def format_patch_args(self, base_commit: str, output_dir: Path) -> List[str]:
        return [
            "git",
            "format-patch",
            f"{base_commit}..HEAD",
            "-o",
            str(output_dir),
            "--minimal",
            "--binary",
            "--ignore-cr-at-eol",
            "--function-context",
            "--keep-subject",
            "--no-merges",
            "--no-stdout",
            "--",
            *self._watched_paths,
        ]

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        return self._runner(args, cwd=cwd)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        # stderr is left attached so git reports its own errors to the operator.
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            stdout=subprocess.PIPE,
        )
        return completed.stdout


def clear_directory(directory: Path) -> None:
    """Remove everything inside ``directory`` while keeping the directory itself."""
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


__all__ = ["PATCH_SUFFIX", "PatchExtractor", "PatchSet", "WATCHED_PATHS", "clear_directory"]
