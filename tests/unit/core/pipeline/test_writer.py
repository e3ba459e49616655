from __future__ import annotations

"""
Unit tests for the Manifest Writer.

Verifies:
1. Physical file creation with parent directories.
2. Full-content overwrite of existing files.
3. Error wrapping on write and encoding failures.
"""

from pathlib import Path

import pytest

from wxsgen.core.pipeline.components.writer import write_manifest
from wxsgen.domain.errors import ManifestWriteError


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "Product.wxs"

    write_manifest(str(target), "<Wix/>\n")

    assert target.read_text(encoding="utf-8") == "<Wix/>\n"


def test_write_overwrites_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "Product.wxs"
    target.write_text("old content that is much longer than the new one\n", encoding="utf-8")

    write_manifest(str(target), "new\n")

    assert target.read_text(encoding="utf-8") == "new\n"


def test_write_is_utf8(tmp_path: Path) -> None:
    target = tmp_path / "Product.wxs"

    write_manifest(str(target), '<Directory Name="Übersicht"/>\n')

    assert "Übersicht".encode("utf-8") in target.read_bytes()


def test_write_failure_raises_manifest_write_error(tmp_path: Path) -> None:
    # The destination is an existing directory, which cannot be opened for writing
    target = tmp_path / "occupied"
    target.mkdir()

    with pytest.raises(ManifestWriteError) as exc_info:
        write_manifest(str(target), "data")

    assert exc_info.value.path == str(target)


def test_unencodable_document_leaves_existing_file_intact(tmp_path: Path) -> None:
    target = tmp_path / "Product.wxs"
    target.write_text("previous manifest\n", encoding="utf-8")

    with pytest.raises(ManifestWriteError) as exc_info:
        write_manifest(str(target), '<File Source="bad\udcff.txt" />\n')

    assert "\\udcff" in str(exc_info.value)
    assert target.read_text(encoding="utf-8") == "previous manifest\n"


def test_write_keeps_lf_line_endings(tmp_path: Path) -> None:
    target = tmp_path / "Product.wxs"

    write_manifest(str(target), "<Wix>\n</Wix>\n")

    assert target.read_bytes() == b"<Wix>\n</Wix>\n"
