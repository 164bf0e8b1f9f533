"""Packaging of a mod's commits into an encrypted, distributable file."""

from .archive import TarArchiver
from .base import Archiver, Bundler, Encryptor, Extractor
from .bundle import BUNDLED_FILES, MetadataBundler
from .crypto import Aes256CbcEncryptor, DecryptionError, decrypt_bytes, encrypt_bytes
from .output import PACKAGE_EXTENSION, OutputTarget, place_artifact, resolve_output
from .pipeline import PackageResult, Packager, StagingPaths

__all__ = [
    "Aes256CbcEncryptor",
    "Archiver",
    "BUNDLED_FILES",
    "Bundler",
    "DecryptionError",
    "Encryptor",
    "Extractor",
    "MetadataBundler",
    "OutputTarget",
    "PACKAGE_EXTENSION",
    "PackageResult",
    "Packager",
    "StagingPaths",
    "TarArchiver",
    "decrypt_bytes",
    "encrypt_bytes",
    "place_artifact",
    "resolve_output",
]
