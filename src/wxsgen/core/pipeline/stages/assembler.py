from __future__ import annotations

"""
Manifest Assembler Stage.

Wraps the three tree projections in the fixed WiX skeleton:

1. Product header (metadata, package options, upgrade policy).
2. Feature block holding the component group references.
3. Directory fragment nesting the folder tree under TARGETDIR and the
   program-files placeholder.
4. Component fragment holding every component group.

The document is built entirely in memory; nothing is written here.
"""

import logging
from typing import FrozenSet, List, Optional, Tuple

from wxsgen.core.analysis.id_allocator import IdentifierAllocator
from wxsgen.core.analysis.tree_renderer import (
    GuidFactory,
    render_component_ref_tree,
    render_component_tree,
    render_folder_tree,
    xml_attr,
)
from wxsgen.domain.config import ManifestTemplate
from wxsgen.domain.constants import TARGET_DIR_ID, TARGET_DIR_NAME, WIX_NAMESPACE
from wxsgen.domain.tree_models import DirectoryNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CORE ASSEMBLY LOGIC
# -----------------------------------------------------------------------------

def assemble_manifest(
        root: DirectoryNode,
        id_root: str,
        allocator: IdentifierAllocator,
        template: ManifestTemplate,
        guid_factory: Optional[GuidFactory] = None,
        sort_entries: bool = True,
        exclude_files: FrozenSet[str] = frozenset(),
) -> Tuple[str, int]:
    """
    Produce the complete manifest document for a directory tree.

    Args:
        root: Fully built directory tree.
        id_root: Directory that file identifiers are computed relative to.
        allocator: Registry already holding the directory identifiers.
        template: Fixed product metadata.
        guid_factory: Callable producing component GUIDs.
        sort_entries: Sort file listings by name.
        exclude_files: Canonical paths of files that get no component.

    Returns:
        Tuple[str, int]: The document text and the number of file components.
    """
    t = template
    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<Wix xmlns="{WIX_NAMESPACE}">',
        f'\t<Product Id="*" Name="{xml_attr(t.product_name)}" Language="{xml_attr(t.language)}" '
        f'Version="{xml_attr(t.version)}" Manufacturer="{xml_attr(t.manufacturer)}" '
        f'UpgradeCode="{xml_attr(t.upgrade_code)}">',
        f'\t\t<Package InstallerVersion="{t.installer_version}" Compressed="yes" '
        f'InstallScope="{xml_attr(t.install_scope)}" />',
        f'\t\t<MajorUpgrade DowngradeErrorMessage="{xml_attr(t.downgrade_message)}" />',
        "\t\t<MediaTemplate />",
    ]

    # Feature: component group references
    lines.append(
        f'\t\t<Feature Id="{xml_attr(t.feature_id)}" Title="{xml_attr(t.product_name)}" Level="1">'
    )
    render_component_ref_tree(root, lines, 3)
    lines.append("\t\t</Feature>")
    lines.append("\t</Product>")

    # Fragment: directory layout
    lines.append("\t<Fragment>")
    lines.append(f'\t\t<Directory Id="{TARGET_DIR_ID}" Name="{TARGET_DIR_NAME}">')
    lines.append(f'\t\t\t<Directory Id="{xml_attr(t.program_files_id)}">')
    render_folder_tree(root, lines, 3)
    lines.append("\t\t\t</Directory>")
    lines.append("\t\t</Directory>")
    lines.append("\t</Fragment>")

    # Fragment: components
    lines.append("\t<Fragment>")
    file_count = render_component_tree(
        id_root, root, lines, 2, allocator,
        guid_factory=guid_factory, sort_entries=sort_entries,
        exclude_files=exclude_files,
    )
    lines.append("\t</Fragment>")
    lines.append("</Wix>")

    logger.debug(f"Manifest assembled: {len(lines)} lines, {file_count} file components.")
    return "\n".join(lines) + "\n", file_count
