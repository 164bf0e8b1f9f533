"""Filesystem layout of a mod project."""

from __future__ import annotations

from pathlib import Path

from .config import CONFIG_FILENAME, Config, load_config
from .rom import Rom

SUBMODULE_NAME = "papermario"
BASEROM_PATH = Path("ver") / "us" / "baserom.z64"
STATE_DIR = ".merlon"


class ModDir:
    """A mod project: merlon.toml at the root plus the vendored game source."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser().resolve()

    @property
    def submodule_dir(self) -> Path:
        return self.path / SUBMODULE_NAME

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_FILENAME

    @property
    def baserom(self) -> Rom:
        return Rom(self.submodule_dir / BASEROM_PATH)

    def config(self) -> Config:
        """Read merlon.toml; the file is re-read on every call."""
        return load_config(self.config_path)

    def package_staging_dir(self, name: str) -> Path:
        return self.path / STATE_DIR / "packages" / name

    def __repr__(self) -> str:
        return f"ModDir({str(self.path)!r})"


__all__ = ["BASEROM_PATH", "ModDir", "SUBMODULE_NAME"]
