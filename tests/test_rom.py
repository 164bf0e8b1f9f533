"""Tests for base ROM identification."""

from __future__ import annotations

import hashlib
from pathlib import Path

from merlon.rom import Rom


def test_rom_display_includes_sha1(tmp_path: Path) -> None:
    path = tmp_path / "baserom.z64"
    path.write_bytes(b"rom contents")
    digest = hashlib.sha1(b"rom contents").hexdigest()

    rom = Rom(path)

    assert rom.sha1() == digest
    assert str(rom) == f"{path} (SHA1: {digest})"


def test_rom_display_omits_digest_when_unreadable(tmp_path: Path) -> None:
    path = tmp_path / "missing.z64"

    assert str(Rom(path)) == str(path)


def test_rom_digest_is_not_cached(tmp_path: Path) -> None:
    path = tmp_path / "baserom.z64"
    path.write_bytes(b"first")
    rom = Rom(path)
    first = rom.sha1()

    path.write_bytes(b"second")

    assert rom.sha1() != first
    assert rom.sha1() == hashlib.sha1(b"second").hexdigest()


def test_rom_matches_ignores_case_and_filename(tmp_path: Path) -> None:
    original = tmp_path / "baserom.z64"
    renamed = tmp_path / "Paper Mario (USA).z64"
    original.write_bytes(b"same bytes")
    renamed.write_bytes(b"same bytes")
    digest = hashlib.sha1(b"same bytes").hexdigest()

    assert Rom(original).matches(digest.upper())
    assert Rom(renamed).matches(digest)
    assert not Rom(tmp_path / "absent.z64").matches(digest)
