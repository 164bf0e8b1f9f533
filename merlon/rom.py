"""Identification of the base ROM by content rather than by filename."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

_CHUNK_SIZE = 1 << 20


@dataclass(frozen=True)
class Rom:
    """A ROM image on disk.

    The digest is recomputed from the file on every request, so a ROM that is
    replaced in place is reported with its new identity.
    """

    path: Path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def sha1(self) -> str:
        """Return the lowercase hex SHA-1 of the file's full contents."""
        digest = hashlib.sha1()
        with self.path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
        return digest.hexdigest()

    def matches(self, sha1: str) -> bool:
        """Return True when the file on disk has the given SHA-1."""
        try:
            return self.sha1() == sha1.strip().lower()
        except OSError:
            return False

    def __str__(self) -> str:
        try:
            digest = self.sha1()
        except OSError:
            return str(self.path)
        return f"{self.path} (SHA1: {digest})"


__all__ = ["Rom"]
