from __future__ import annotations

"""
Manifest Identifier Allocator.

Maps relative paths to short, manifest-safe identifiers. Every issued
identifier is kept in a registry owned by the allocator instance, so one
instance defines one global namespace for a run (directories and files
alike).

Shortening tries the most abbreviated form first (every segment reduced
to its initial) and spells segments out from the right until a candidate
is free.
"""

import logging
from typing import Iterator, List, Set

from wxsgen.domain.constants import ID_PREFIX, ID_REPLACED_CHARS, ID_SEPARATOR
from wxsgen.domain.errors import DuplicateIdentifierError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sanitize_id(relative_path: str) -> str:
    """
    Convert a path into the raw identifier alphabet.

    Lower-cases the path, replaces path separators, colons, hyphens, spaces
    and parentheses with '.', and prepends the fixed prefix so the result
    never starts with a digit or separator.

    Args:
        relative_path: Path relative to the identifier root.

    Returns:
        str: Sanitized identifier, e.g. 'Xgoogle.cloud.sdk' for
        'google-cloud-sdk'.
    """
    text = relative_path.lower()
    for ch in ID_REPLACED_CHARS:
        text = text.replace(ch, ID_SEPARATOR)
    return ID_PREFIX + text


def split_segments(sanitized: str) -> List[str]:
    return [s for s in sanitized.split(ID_SEPARATOR) if s]


def iter_candidates(segments: List[str]) -> Iterator[str]:
    """
    Yield shortened candidates from most to least abbreviated.

    For cut index i (last index down to 0) the candidate holds the initial
    of segments 0..i followed by segments i+1.. in full, each terminated
    by the separator.
    """
    for i in range(len(segments) - 1, -1, -1):
        head = "".join(s[0] + ID_SEPARATOR for s in segments[:i + 1])
        tail = "".join(s + ID_SEPARATOR for s in segments[i + 1:])
        yield head + tail


def full_identifier(segments: List[str]) -> str:
    return "".join(s + ID_SEPARATOR for s in segments)


class IdentifierAllocator:
    """
    Issues registry-unique identifiers for relative paths.

    Not thread-safe: a caller that parallelizes allocation must serialize
    access to the instance.
    """

    def __init__(self) -> None:
        self._issued: Set[str] = set()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    def is_allocated(self, identifier: str) -> bool:
        return identifier in self._issued

    def reserve(self, identifier: str) -> None:
        """Register an identifier without deriving it from a path."""
        self._issued.add(identifier)

    def allocate(self, relative_path: str) -> str:
        """
        Allocate the shortest free identifier for a relative path.

        Args:
            relative_path: Path relative to the identifier root.

        Returns:
            str: The registered identifier.

        Raises:
            DuplicateIdentifierError: If every shortened candidate and the
                full form are already registered.
        """
        segments = split_segments(sanitize_id(relative_path))

        for candidate in iter_candidates(segments):
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

        fallback = full_identifier(segments)
        if fallback in self._issued:
            msg = f"Duplicate identifier '{fallback}' for path: {relative_path}"
            logger.error(msg)
            raise DuplicateIdentifierError(msg, relative_path)

        logger.debug(f"All shortened ids taken for '{relative_path}', using full form.")
        self._issued.add(fallback)
        return fallback
