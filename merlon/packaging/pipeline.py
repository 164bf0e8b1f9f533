"""The extract, bundle, archive, encrypt and place pipeline behind ``merlon package``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..git.patches import PatchExtractor
from ..logging import get_logger
from ..mod_dir import ModDir
from .archive import TarArchiver
from .base import Archiver, Bundler, Encryptor, Extractor
from .bundle import MetadataBundler
from .crypto import Aes256CbcEncryptor
from .output import place_artifact, resolve_output

PATCHES_DIRNAME = "patches"
ARCHIVE_FILENAME = "patches.tar.bz2"
ENCRYPTED_FILENAME = "patches.enc"


@dataclass
class StagingPaths:
    """Intermediate files for one package under ``.merlon/packages/<name>``."""

    root: Path

    @property
    def patches_dir(self) -> Path:
        return self.root / PATCHES_DIRNAME

    @property
    def archive_path(self) -> Path:
        return self.root / ARCHIVE_FILENAME

    @property
    def encrypted_path(self) -> Path:
        return self.root / ENCRYPTED_FILENAME


@dataclass
class PackageResult:
    """Outcome of a successful packaging run."""

    name: str
    path: Path
    patches: Sequence[Path]
    bundled: Sequence[Path]
    members: List[str]
    staging: StagingPaths


class Packager:
    """Runs each stage in order; any stage failure aborts the whole run.

    Staging files are left in place on failure so they can be inspected; the
    next run clears and regenerates them.
    """

    def __init__(
        self,
        extractor: Extractor | None = None,
        bundler: Bundler | None = None,
        archiver: Archiver | None = None,
        encryptor: Encryptor | None = None,
    ) -> None:
        self.extractor = extractor or PatchExtractor()
        self.bundler = bundler or MetadataBundler()
        self.archiver = archiver or TarArchiver()
        self.encryptor = encryptor or Aes256CbcEncryptor()
        self.logger = get_logger("package")

    def run(
        self,
        mod_dir: ModDir,
        output: Path | None = None,
        *,
        cwd: Path | None = None,
    ) -> PackageResult:
        config = mod_dir.config()
        config.package.warn_validation_issues(self.logger)

        target = resolve_output(output, config.package.name, cwd=cwd)
        staging = StagingPaths(mod_dir.package_staging_dir(target.name))
        self.logger.debug("Staging package %s in %s", target.name, staging.root)

        patch_set = self.extractor.extract(
            mod_dir.submodule_dir, config.base_commit, staging.patches_dir
        )
        bundled = self.bundler.bundle(mod_dir.path, staging.patches_dir)
        members = self.archiver.archive(staging.patches_dir, staging.archive_path)

        baserom = mod_dir.baserom
        self.logger.debug("Deriving package key from %s", baserom)
        self.encryptor.encrypt_file(
            staging.archive_path, staging.encrypted_path, key_file=baserom.path
        )

        place_artifact(staging.encrypted_path, target.path)
        return PackageResult(
            name=target.name,
            path=target.path,
            patches=list(patch_set),
            bundled=list(bundled),
            members=members,
            staging=staging,
        )


__all__ = ["PackageResult", "Packager", "StagingPaths"]
