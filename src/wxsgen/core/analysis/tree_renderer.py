from __future__ import annotations

"""
Tree Renderer.

Converts a DirectoryNode tree into the three WiX projections that make
up a manifest:

1. Folder layout (nested <Directory> declarations).
2. Component groups, one per directory, declaring its files.
3. Component group references for the product feature.

Each renderer appends lines to a caller-owned accumulator. Indentation is
one tab per level and purely cosmetic.
"""

import logging
import uuid
from typing import Callable, FrozenSet, List, Optional
from xml.sax.saxutils import escape

from wxsgen.core.analysis.id_allocator import IdentifierAllocator
from wxsgen.domain.constants import DIRECTORY_GROUP_PREFIX, FILE_COMPONENT_PREFIX
from wxsgen.domain.tree_models import DirectoryNode
from wxsgen.infra.fs import canonical_path, list_files, relative_to

logger = logging.getLogger(__name__)

GuidFactory = Callable[[], str]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def new_guid() -> str:
    return str(uuid.uuid4())


def render_folder_tree(node: DirectoryNode, lines: List[str], indent: int = 0) -> None:
    """
    Recursively emit the <Directory> hierarchy.

    A directory without children is self-closed; otherwise its children
    are nested one level deeper between an open and a close tag.

    Args:
        node: Current DirectoryNode to process.
        lines: Accumulator list for output strings.
        indent: Indentation level of the current node.
    """
    pad = _pad(indent)
    head = f'{pad}<Directory Id="{xml_attr(node.id)}" Name="{xml_attr(node.name)}"'

    if node.is_leaf:
        lines.append(f"{head}/>")
        return

    lines.append(f"{head}>")
    for child in node.children:
        render_folder_tree(child, lines, indent + 1)
    lines.append(f"{pad}</Directory>")


def render_component_tree(
        id_root: str,
        node: DirectoryNode,
        lines: List[str],
        indent: int,
        allocator: IdentifierAllocator,
        guid_factory: Optional[GuidFactory] = None,
        sort_entries: bool = True,
        exclude_files: FrozenSet[str] = frozenset(),
) -> int:
    """
    Emit one <ComponentGroup> per directory, in pre-order.

    Files are enumerated here, not during tree construction. Each file gets
    a registry-unique identifier (relative to id_root) and a fresh GUID.

    Args:
        id_root: Directory that file identifiers are computed relative to.
        node: Current DirectoryNode to process.
        lines: Accumulator list for output strings.
        indent: Indentation level of the group declarations.
        allocator: Identifier registry shared with the tree builder.
        guid_factory: Callable producing component GUIDs.
        sort_entries: Sort files by name for reproducible output.
        exclude_files: Canonical paths of files to leave out (the manifest
            itself when it is written inside the scanned tree).

    Returns:
        int: Number of file components emitted for the whole subtree.

    Raises:
        DirectoryScanError: If a directory listing fails.
        DuplicateIdentifierError: If a file identifier is exhausted.
    """
    make_guid = guid_factory or new_guid

    count = _render_component_group(
        id_root, node, lines, indent, allocator, make_guid, sort_entries, exclude_files
    )
    for child in node.children:
        count += render_component_tree(
            id_root, child, lines, indent, allocator, make_guid, sort_entries, exclude_files
        )
    return count


def render_component_ref_tree(node: DirectoryNode, lines: List[str], indent: int = 0) -> None:
    """Emit one <ComponentGroupRef> per directory, in pre-order."""
    lines.append(f'{_pad(indent)}<ComponentGroupRef Id="{xml_attr(group_id(node))}" />')
    for child in node.children:
        render_component_ref_tree(child, lines, indent)


def group_id(node: DirectoryNode) -> str:
    return DIRECTORY_GROUP_PREFIX + node.id

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_component_group(
        id_root: str,
        node: DirectoryNode,
        lines: List[str],
        indent: int,
        allocator: IdentifierAllocator,
        make_guid: GuidFactory,
        sort_entries: bool,
        exclude_files: FrozenSet[str],
) -> int:
    """Emit a single directory's group and its file components."""
    lines.append(
        f'{_pad(indent)}<ComponentGroup Id="{xml_attr(group_id(node))}" '
        f'Directory="{xml_attr(node.id)}">'
    )

    files = list_files(node.path, sort_entries)
    if exclude_files:
        files = [f for f in files if canonical_path(f) not in exclude_files]
    for file_path in files:
        file_id = allocator.allocate(relative_to(id_root, file_path))
        logger.debug(f"File {file_id} -> {file_path}")

        lines.append(
            f'{_pad(indent + 1)}<Component Id="{xml_attr(FILE_COMPONENT_PREFIX + file_id)}" '
            f'Guid="{make_guid()}" >'
        )
        lines.append(
            f'{_pad(indent + 3)}<File Id="{xml_attr(file_id)}" Source="{xml_attr(file_path)}" '
            f'KeyPath="yes" Checksum="yes" />'
        )
        lines.append(f"{_pad(indent + 1)}</Component>")

    lines.append(f"{_pad(indent)}</ComponentGroup>")
    return len(files)


def _pad(indent: int) -> str:
    return "\t" * indent


def xml_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted XML attribute."""
    return escape(value, {'"': "&quot;"})
