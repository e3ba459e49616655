from __future__ import annotations

"""
Domain Error Hierarchy.

Exceptions raised by the allocator, the directory scanner and the writer.
Each carries the filesystem path (or relative path) that caused it so the
pipeline can report a precise diagnostic before aborting.
"""

from typing import Optional


class ManifestError(Exception):
    """
    Base class for every failure that aborts a manifest run.

    Attributes:
        path: The path involved in the failure, if any.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class DuplicateIdentifierError(ManifestError):
    """Raised when no unique identifier can be derived for a path."""


class DirectoryScanError(ManifestError):
    """Raised when a directory cannot be enumerated or forms a cycle."""


class ManifestWriteError(ManifestError):
    """Raised when the output document cannot be persisted."""


class ConfigError(ManifestError):
    """Raised when a configuration file is missing or malformed."""


class InvalidInputError(ManifestError):
    """Raised when the source root is missing or not a directory."""
