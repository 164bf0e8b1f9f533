"""Interfaces implemented by each packaging stage.

Every stage either produces its documented output or raises
:class:`~merlon.errors.PackagingError` tagged with the stage name, so the
pipeline can swap an external-process implementation for a library one
without changing its own control flow.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..git.patches import PatchSet


class Extractor(Protocol):
    """Turns the commits after ``base_commit`` into patch files in ``output_dir``."""

    def extract(self, source_dir: Path, base_commit: str, output_dir: Path) -> "PatchSet":
        ...


class Bundler(Protocol):
    """Copies auxiliary project files next to the patches."""

    def bundle(self, project_dir: Path, bundle_dir: Path) -> Sequence[Path]:
        ...


class Archiver(Protocol):
    """Compresses a bundle directory into a single archive file."""

    def archive(self, bundle_dir: Path, archive_path: Path) -> List[str]:
        """Write ``archive_path`` and return the archive's member names."""


class Encryptor(Protocol):
    """Encrypts a file with a key derived from another file's raw bytes."""

    def encrypt_file(self, source: Path, destination: Path, *, key_file: Path) -> None:
        ...


__all__ = ["Archiver", "Bundler", "Encryptor", "Extractor"]
