"""Output path resolution and placement of the finished package."""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..errors import PackagingError
from ..logging import get_logger

PACKAGE_EXTENSION = "merlon"

logger = get_logger("output")


@dataclass(frozen=True)
class OutputTarget:
    """Where a package is written and the name its staging area uses."""

    name: str
    path: Path

    @property
    def has_package_extension(self) -> bool:
        return self.path.suffix == f".{PACKAGE_EXTENSION}"


def resolve_output(
    output: Path | None,
    package_name: str,
    *,
    cwd: Path | None = None,
) -> OutputTarget:
    """Pick the package name and destination path.

    An explicit ``output`` is used unchanged and its stem becomes the name;
    otherwise the package name is used and the file lands in ``cwd`` as
    ``<name>.merlon``. A non-``.merlon`` destination only produces a warning.
    """
    if output is not None:
        name = output.stem
        path = output
    else:
        name = package_name
        base = cwd if cwd is not None else Path.cwd()
        path = base / f"{name}.{PACKAGE_EXTENSION}"

    if not name:
        raise PackagingError("output", "output filename cannot be empty")

    target = OutputTarget(name=name, path=path)
    if not target.has_package_extension:
        logger.warning("output filename does not end in .%s", PACKAGE_EXTENSION)
    return target


def place_artifact(source: Path, destination: Path) -> Path:
    """Copy ``source`` to ``destination``, replacing any existing file atomically.

    The bytes are written to a temporary file next to the destination and
    renamed over it, so readers never observe a half-written package.
    """
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            with source.open("rb") as src:
                shutil.copyfileobj(src, handle)
        shutil.copymode(source, tmp_name)
        os.replace(tmp_name, destination)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PackagingError("place", f"failed to write package to {destination}") from exc
    logger.debug("Placed %s at %s", source.name, destination)
    return destination


__all__ = ["OutputTarget", "PACKAGE_EXTENSION", "place_artifact", "resolve_output"]
