from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type used by the tree builder and the
manifest serializers. The tree mirrors the filesystem, so ownership is
strictly hierarchical: a parent owns its children outright.
"""

from dataclasses import dataclass, field
from typing import Iterator, List

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class DirectoryNode:
    """
    Represents one filesystem directory in the manifest tree.

    Attributes:
        path: Absolute filesystem path to the directory.
        name: Final path segment, used as the display label.
        id: Unique manifest identifier assigned at construction.
        children: Immediate subdirectories, in traversal order.
    """
    path: str
    name: str
    id: str
    children: List[DirectoryNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


def iter_nodes(root: DirectoryNode) -> Iterator[DirectoryNode]:
    """Yield every node of the tree in pre-order (node before children)."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def count_nodes(root: DirectoryNode) -> int:
    return sum(1 for _ in iter_nodes(root))
