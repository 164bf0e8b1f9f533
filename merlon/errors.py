"""Errors raised by the packaging pipeline."""

from __future__ import annotations


class PackagingError(RuntimeError):
    """Raised when a packaging stage fails; ``stage`` names the failing step."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(message)
        self.stage = stage


class EmptyPatchSetError(PackagingError):
    """Raised when the commit range yields no patches at all.

    Kept distinct from a failed ``git`` invocation: it almost always means the
    changes were never committed inside the vendored source tree.
    """

    def __init__(self, message: str) -> None:
        super().__init__("extract", message)


__all__ = ["EmptyPatchSetError", "PackagingError"]
