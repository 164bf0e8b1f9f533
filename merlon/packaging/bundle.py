"""Copy mod metadata and documentation next to the extracted patches."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Sequence

from ..errors import PackagingError
from ..logging import get_logger

BUNDLED_FILES: Sequence[str] = (
    "merlon.toml",
    "README.md",
    "README.txt",
    "README",
    "LICENSE.md",
    "LICENSE.txt",
    "LICENSE",
    "CONTRIBUTING.md",
    "CONTRIBUTING.txt",
    "CONTRIBUTING",
)


class MetadataBundler:
    """Copies the allow-listed files that exist in the project root."""

    def __init__(self, filenames: Sequence[str] = BUNDLED_FILES) -> None:
        self._filenames = tuple(filenames)
        self.logger = get_logger("bundle")

    def bundle(self, project_dir: Path, bundle_dir: Path) -> List[Path]:
        copied: List[Path] = []
        for name in self._filenames:
            source = project_dir / name
            if not source.is_file():
                continue
            target = bundle_dir / name
            try:
                shutil.copyfile(source, target)
            except OSError as exc:
                raise PackagingError("bundle", f"failed to copy {source} to {target}") from exc
            copied.append(target)
        self.logger.debug(
            "Bundled %s", ", ".join(path.name for path in copied) if copied else "no metadata files"
        )
        return copied


__all__ = ["BUNDLED_FILES", "MetadataBundler"]
