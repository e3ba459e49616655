from __future__ import annotations

"""
Unit tests for the Tree Renderer.

Verifies the three projections: folder layout, component groups and
component references, including their shared pre-order traversal.
"""

import re
from pathlib import Path
from typing import Callable, List

from wxsgen.core.analysis.id_allocator import IdentifierAllocator
from wxsgen.core.analysis.tree_generator import build_directory_tree
from wxsgen.core.analysis.tree_renderer import (
    new_guid,
    render_component_ref_tree,
    render_component_tree,
    render_folder_tree,
    xml_attr,
)
from wxsgen.domain.tree_models import DirectoryNode
from wxsgen.infra.fs import canonical_path


def _build(sample_tree: Path, allocator: IdentifierAllocator) -> DirectoryNode:
    return build_directory_tree(str(sample_tree.parent), str(sample_tree), allocator)


def test_folder_tree_nesting(sample_tree: Path, allocator: IdentifierAllocator) -> None:
    lines: List[str] = []
    render_folder_tree(_build(sample_tree, allocator), lines, 0)

    assert lines == [
        '<Directory Id="X.a." Name="my-app">',
        '\t<Directory Id="X.a.a." Name="A">',
        '\t\t<Directory Id="X.a.a.b." Name="B"/>',
        "\t</Directory>",
        '\t<Directory Id="X.a.d." Name="docs"/>',
        "</Directory>",
    ]


def test_component_ref_tree_preorder(sample_tree: Path, allocator: IdentifierAllocator) -> None:
    lines: List[str] = []
    render_component_ref_tree(_build(sample_tree, allocator), lines, 1)

    assert lines == [
        '\t<ComponentGroupRef Id="dcX.a." />',
        '\t<ComponentGroupRef Id="dcX.a.a." />',
        '\t<ComponentGroupRef Id="dcX.a.a.b." />',
        '\t<ComponentGroupRef Id="dcX.a.d." />',
    ]


def test_folder_and_ref_trees_visit_same_order(sample_tree: Path, allocator: IdentifierAllocator) -> None:
    root = _build(sample_tree, allocator)
    folder_lines: List[str] = []
    ref_lines: List[str] = []
    render_folder_tree(root, folder_lines)
    render_component_ref_tree(root, ref_lines)

    declared = [m.group(1) for line in folder_lines for m in [re.search(r'<Directory Id="([^"]+)"', line)] if m]
    referenced = [re.search(r'Id="dc([^"]+)"', line).group(1) for line in ref_lines]

    assert declared == referenced


def test_component_tree_declares_files(
        sample_tree: Path,
        allocator: IdentifierAllocator,
        sequential_guids: Callable[[], str],
) -> None:
    root = _build(sample_tree, allocator)
    lines: List[str] = []

    count = render_component_tree(
        str(sample_tree.parent), root, lines, 0, allocator, guid_factory=sequential_guids
    )

    readme = sample_tree / "readme.txt"
    f_txt = sample_tree / "A" / "B" / "f.txt"

    assert count == 2
    assert lines == [
        '<ComponentGroup Id="dcX.a." Directory="X.a.">',
        '\t<Component Id="fcX.a.r.t." Guid="00000000-0000-0000-0000-000000000001" >',
        f'\t\t\t<File Id="X.a.r.t." Source="{readme}" KeyPath="yes" Checksum="yes" />',
        "\t</Component>",
        "</ComponentGroup>",
        '<ComponentGroup Id="dcX.a.a." Directory="X.a.a.">',
        "</ComponentGroup>",
        '<ComponentGroup Id="dcX.a.a.b." Directory="X.a.a.b.">',
        '\t<Component Id="fcX.a.a.b.f.t." Guid="00000000-0000-0000-0000-000000000002" >',
        f'\t\t\t<File Id="X.a.a.b.f.t." Source="{f_txt}" KeyPath="yes" Checksum="yes" />',
        "\t</Component>",
        "</ComponentGroup>",
        '<ComponentGroup Id="dcX.a.d." Directory="X.a.d.">',
        "</ComponentGroup>",
    ]


def test_file_ids_share_namespace_with_directories(tmp_path: Path, allocator: IdentifierAllocator) -> None:
    """A file whose initials match a directory id gets a longer form."""
    app = tmp_path / "app"
    (app / "b").mkdir(parents=True)
    (app / "bin").write_text("", encoding="utf-8")

    root = build_directory_tree(str(tmp_path), str(app), allocator)
    lines: List[str] = []
    render_component_tree(str(tmp_path), root, lines, 0, allocator, guid_factory=new_guid)

    assert root.children[0].id == "X.b."
    assert any('<File Id="X.bin."' in line for line in lines)


def test_default_guids_are_unique_uuid4(sample_tree: Path, allocator: IdentifierAllocator) -> None:
    root = _build(sample_tree, allocator)
    lines: List[str] = []
    render_component_tree(str(sample_tree.parent), root, lines, 0, allocator)

    guids = re.findall(r'Guid="([^"]+)"', "\n".join(lines))
    assert len(guids) == 2
    assert len(set(guids)) == 2
    for g in guids:
        assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}", g)


def test_attribute_values_are_escaped() -> None:
    assert xml_attr('R&D "beta" <x>') == "R&amp;D &quot;beta&quot; &lt;x&gt;"

    node = DirectoryNode(path="/tmp/R&D", name="R&D", id="X.r.d.")
    lines: List[str] = []
    render_folder_tree(node, lines)
    assert lines == ['<Directory Id="X.r.d." Name="R&amp;D"/>']


def test_component_tree_skips_excluded_files(sample_tree: Path, allocator: IdentifierAllocator) -> None:
    root = _build(sample_tree, allocator)
    excluded = frozenset([canonical_path(str(sample_tree / "readme.txt"))])
    lines: List[str] = []

    count = render_component_tree(
        str(sample_tree.parent), root, lines, 0, allocator, exclude_files=excluded
    )

    assert count == 1
    assert not any("readme.txt" in line for line in lines)
    assert not allocator.is_allocated("X.a.r.t.")
