# statichash/errors.py
"""
Build-time errors.

Every failure while constructing a registry is fatal: the registry is
all-or-nothing. Lookups never raise; a missing asset is just ``None``.
"""

from typing import Optional, Tuple


class StaticFileError(Exception):
    """Base class for registry build failures."""


class SourceUnreadable(StaticFileError, OSError):
    """A declared asset path could not be read."""

    def __init__(self, source_path: str, reason: Optional[str] = None):
        self.source_path = source_path
        self.reason = reason
        message = f"Failed to read asset file: {source_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoExtension(StaticFileError, ValueError):
    """An asset file name has no '.' to split an extension from."""

    def __init__(self, source_path: str):
        self.source_path = source_path
        super().__init__(f"Asset file name has no extension: {source_path}")


class NameCollision(StaticFileError, ValueError):
    """Two assets resolved to the same public name."""

    def __init__(self, name: str, source_paths: Tuple[str, str]):
        self.name = name
        self.source_paths = source_paths
        super().__init__(
            f"Public name '{name}' produced by both "
            f"{source_paths[0]} and {source_paths[1]}"
        )


class ManifestError(StaticFileError, ValueError):
    """The declaration list is malformed."""
