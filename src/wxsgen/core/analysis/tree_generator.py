from __future__ import annotations

"""
Directory Tree Generator.

Recursively discovers the directory structure under a root and assigns
each directory its manifest identifier. Only directories are visited
here; files are enumerated later, while the component section is
rendered.
"""

import logging
import os
from typing import FrozenSet

from wxsgen.core.analysis.id_allocator import IdentifierAllocator
from wxsgen.domain.errors import DirectoryScanError
from wxsgen.domain.tree_models import DirectoryNode
from wxsgen.infra.fs import canonical_path, list_subdirectories, relative_to

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_directory_tree(
        id_root: str,
        path: str,
        allocator: IdentifierAllocator,
        sort_entries: bool = True,
) -> DirectoryNode:
    """
    Build the DirectoryNode tree rooted at a path.

    Traversal is depth-first with each node allocated before its children,
    so identifier assignment follows pre-order.

    Args:
        id_root: Directory that identifiers are computed relative to.
        path: Directory to scan.
        allocator: Identifier registry shared by the whole run.
        sort_entries: Sort subdirectories by name for reproducible output.

    Returns:
        DirectoryNode: The fully built tree.

    Raises:
        DirectoryScanError: On unreadable directories or symlink cycles.
        DuplicateIdentifierError: If a directory identifier is exhausted.
    """
    logger.info(f"Scanning directory tree: {path}")
    root = _build_node(
        id_root, os.path.abspath(path), allocator, sort_entries, frozenset()
    )
    return root

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (SCANNING)
# -----------------------------------------------------------------------------

def _build_node(
        id_root: str,
        path: str,
        allocator: IdentifierAllocator,
        sort_entries: bool,
        ancestors: FrozenSet[str],
) -> DirectoryNode:
    """Create the node for 'path' and recurse into its subdirectories."""
    node = DirectoryNode(
        path=path,
        name=os.path.basename(path),
        id=allocator.allocate(relative_to(id_root, path)),
    )
    logger.debug(f"Directory {node.id} -> {path}")

    own = canonical_path(path)
    lineage = ancestors | {own}

    for sub in list_subdirectories(path, sort_entries):
        resolved = canonical_path(sub)

        # Entries resolving to the directory itself (junction/link to self)
        if resolved == own:
            logger.debug(f"Skipping self-referential entry: {sub}")
            continue

        if resolved in lineage:
            raise DirectoryScanError(
                f"Symlink cycle detected: '{sub}' resolves to ancestor '{resolved}'", sub
            )

        node.children.append(
            _build_node(id_root, sub, allocator, sort_entries, lineage)
        )

    return node
