"""Package descriptor loading for mods (merlon.toml)."""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

CONFIG_FILENAME = "merlon.toml"

VALID_KEYWORDS: Sequence[str] = ("qol", "cheat", "bugfix", "cosmetic", "feature")

MAX_DESCRIPTION_LENGTH = 100

_KEBAB_CASE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class ConfigError(RuntimeError):
    """Raised when merlon.toml is missing, unreadable, or malformed."""


@dataclass
class Dependency:
    """Version constraint on another mod package."""

    version: str


@dataclass
class Package:
    """Package metadata from the ``[package]`` table."""

    name: str
    version: str = ""
    authors: List[str] = field(default_factory=list)
    description: str = ""
    license: str = ""
    keywords: List[str] = field(default_factory=list)

    def validate(self) -> List[str]:
        """Return human-readable problems with this metadata; empty when valid."""
        errors: List[str] = []
        if not self.name:
            errors.append("name cannot be empty")
        if self.name and not _KEBAB_CASE.match(self.name):
            errors.append("name must be kebab-case")
        if any(not (char.isascii() and char.isalnum()) and char != "-" for char in self.name):
            errors.append("name must be alphanumeric")
        if not self.version:
            errors.append("version cannot be empty")
        if not self.authors:
            errors.append("authors cannot be empty")
        if not self.description:
            errors.append("description cannot be empty")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            errors.append(
                f"description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )
        if not self.license:
            errors.append("license cannot be empty")
        for keyword in self.keywords:
            if keyword not in VALID_KEYWORDS:
                valid = ", ".join(VALID_KEYWORDS)
                errors.append(f"invalid keyword: {keyword} (valid keywords: {valid})")
        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    def warn_validation_issues(self, logger: logging.Logger) -> List[str]:
        """Log each validation problem as a warning and return them."""
        issues = self.validate()
        for issue in issues:
            logger.warning(issue)
        return issues


@dataclass
class Config:
    """Represents the contents of a mod's merlon.toml."""

    base_commit: str
    package: Package
    dependencies: Dict[str, Dependency] = field(default_factory=dict)


def load_config(config_path: Path) -> Config:
    """Load merlon.toml from a file path or from the directory containing it."""
    config_file = _resolve_config_path(config_path)
    try:
        text = config_file.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"{config_file} not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {config_file}: {exc}") from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {config_file.name}: {exc}") from exc

    base_commit = _as_str(data.get("base_commit"))
    if not base_commit:
        raise ConfigError(f"{config_file.name} is missing base_commit")

    package_data = _as_dict(data.get("package"))
    name = _as_str(package_data.get("name"))
    if name is None:
        raise ConfigError(f"{config_file.name} is missing [package].name")

    package = Package(
        name=name,
        version=_as_str(package_data.get("version")) or "",
        authors=_as_str_list(package_data.get("authors")),
        description=_as_str(package_data.get("description")) or "",
        license=_as_str(package_data.get("license")) or "",
        keywords=_as_str_list(package_data.get("keywords")),
    )

    dependencies: Dict[str, Dependency] = {}
    for dep_name, raw in _as_dict(data.get("dependencies")).items():
        # Both `dep = "1.0"` and `dep = { version = "1.0" }` are accepted.
        if isinstance(raw, dict):
            version = _as_str(raw.get("version"))
        else:
            version = _as_str(raw)
        if version is None:
            raise ConfigError(f"dependency {dep_name} has no version")
        dependencies[str(dep_name)] = Dependency(version=version)

    return Config(base_commit=base_commit, package=package, dependencies=dependencies)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "Dependency",
    "Package",
    "VALID_KEYWORDS",
    "load_config",
]
