"""Reproducible bzip2 tarballs of a bundle directory."""

from __future__ import annotations

import stat
import tarfile
from pathlib import Path
from typing import List

from ..errors import PackagingError
from ..logging import get_logger

_FILE_MODE = 0o644
_DIR_MODE = 0o755


class TarArchiver:
    """Writes ``<bundle_dir.name>/...`` into a ``.tar.bz2`` archive.

    Members are added in sorted order with ownership, timestamps and
    permissions normalised, and without PAX extended headers, so the archive
    carries no host-specific attributes (for example macOS provenance xattrs)
    and identical bundles produce identical bytes.
    """

    def __init__(self, compresslevel: int = 9) -> None:
        self._compresslevel = compresslevel
        self.logger = get_logger("archive")

    def archive(self, bundle_dir: Path, archive_path: Path) -> List[str]:
        root = bundle_dir.name
        try:
            with tarfile.open(
                archive_path,
                "w:bz2",
                format=tarfile.PAX_FORMAT,
                compresslevel=self._compresslevel,
            ) as tar:
                self._add(tar, bundle_dir, root)
                for path in sorted(bundle_dir.rglob("*")):
                    arcname = f"{root}/{path.relative_to(bundle_dir).as_posix()}"
                    self._add(tar, path, arcname)
        except (OSError, tarfile.TarError) as exc:
            raise PackagingError("archive", f"failed to compress to tar {archive_path}") from exc

        return self.list_members(archive_path)

    def list_members(self, archive_path: Path) -> List[str]:
        """Log a ``tar -tv`` style listing of the archive and return member names."""
        try:
            with tarfile.open(archive_path, "r:bz2") as tar:
                members = tar.getmembers()
        except (OSError, tarfile.TarError) as exc:
            raise PackagingError("archive", f"failed to list tar {archive_path}") from exc
        for member in members:
            self.logger.info(
                "%s %d/%d %8d %s",
                stat.filemode(member.mode | (stat.S_IFDIR if member.isdir() else stat.S_IFREG)),
                member.uid,
                member.gid,
                member.size,
                member.name,
            )
        return [member.name for member in members]

    @staticmethod
    def _add(tar: tarfile.TarFile, path: Path, arcname: str) -> None:
        info = tar.gettarinfo(str(path), arcname=arcname)
        info.uid = info.gid = 0
        info.uname = info.gname = ""
        info.mtime = 0
        info.pax_headers = {}
        if info.isdir():
            info.mode = _DIR_MODE
            tar.addfile(info)
        elif info.isfile():
            info.mode = _FILE_MODE
            with path.open("rb") as handle:
                tar.addfile(info, fileobj=handle)
        else:
            raise PackagingError("archive", f"unsupported file type in bundle: {path}")


__all__ = ["TarArchiver"]
