from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, canonical path comparison and the
single-level directory listings used by the tree builder and the
component serializer. Enumeration failures are surfaced as
DirectoryScanError carrying the offending path.
"""

import os
from typing import List, Optional

from wxsgen.domain.errors import DirectoryScanError

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def canonical_path(path: str) -> str:
    """Resolve symlinks and case-fold (on case-insensitive systems) a path."""
    return os.path.normcase(os.path.realpath(path))


def relative_to(root: str, path: str) -> str:
    return os.path.relpath(path, root)


def printable_path(path: str) -> str:
    """Replace undecodable bytes (surrogate escapes) with their \\x escapes."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")

# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def list_subdirectories(path: str, sort_entries: bool = True) -> List[str]:
    """
    List the immediate subdirectories of a directory.

    Symlinks and junctions pointing at directories are included.

    Args:
        path: Directory to enumerate.
        sort_entries: Sort by entry name instead of enumeration order.

    Returns:
        List[str]: Absolute paths of the subdirectories.

    Raises:
        DirectoryScanError: If the directory cannot be read or an entry
            name is not valid UTF-8.
    """
    return [_entry_path(e) for e in _scan(path, sort_entries) if _is_dir(e)]


def list_files(path: str, sort_entries: bool = True) -> List[str]:
    """
    List the regular files directly inside a directory.

    Args:
        path: Directory to enumerate.
        sort_entries: Sort by entry name instead of enumeration order.

    Returns:
        List[str]: Absolute paths of the files.

    Raises:
        DirectoryScanError: If the directory cannot be read or an entry
            name is not valid UTF-8.
    """
    return [_entry_path(e) for e in _scan(path, sort_entries) if _is_file(e)]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _scan(path: str, sort_entries: bool) -> List[os.DirEntry]:
    try:
        with os.scandir(os.path.abspath(path)) as it:
            entries = list(it)
    except OSError as e:
        raise DirectoryScanError(f"Cannot read directory '{path}': {e}", path) from e

    if sort_entries:
        entries.sort(key=lambda e: e.name)
    return entries


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError as e:
        raise DirectoryScanError(f"Cannot stat '{entry.path}': {e}", entry.path) from e


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError as e:
        raise DirectoryScanError(f"Cannot stat '{entry.path}': {e}", entry.path) from e


def _entry_path(entry: os.DirEntry) -> str:
    # Names that are not valid UTF-8 come back with surrogate escapes and
    # cannot be written into the manifest
    try:
        entry.name.encode("utf-8")
    except UnicodeEncodeError as e:
        shown = printable_path(entry.path)
        raise DirectoryScanError(f"Entry name is not valid UTF-8: '{shown}'", shown) from e
    return entry.path
