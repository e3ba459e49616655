from __future__ import annotations

"""
Unit tests for the Identifier Allocator.

Verifies:
1. Sanitization of separators and punctuation.
2. Candidate ordering from most to least abbreviated.
3. Collision handling, full-form fallback and exhaustion.
4. Registry isolation between allocator instances.
"""

import re

import pytest

from wxsgen.core.analysis.id_allocator import (
    IdentifierAllocator,
    full_identifier,
    iter_candidates,
    sanitize_id,
    split_segments,
)
from wxsgen.domain.errors import DuplicateIdentifierError


def test_sanitize_replaces_separators_and_punctuation() -> None:
    raw = r"C:\Program Files (x86)/My-App\sub dir"
    result = sanitize_id(raw)

    assert result.startswith("X")
    assert re.fullmatch(r"X[a-z0-9.]*", result)
    assert result == "Xc..program.files..x86..my.app.sub.dir"


def test_sanitize_never_starts_with_digit() -> None:
    assert sanitize_id("7zip") == "X7zip"
    assert sanitize_id("/root") == "X.root"


def test_split_segments_ignores_empty_parts() -> None:
    assert split_segments("Xc..program.files..x86.") == ["Xc", "program", "files", "x86"]


def test_candidates_order_most_abbreviated_first() -> None:
    assert list(iter_candidates(["a", "bb", "ccc"])) == [
        "a.b.c.",
        "a.b.ccc.",
        "a.bb.ccc.",
    ]


def test_full_identifier_spells_every_segment() -> None:
    assert full_identifier(["Xa", "bb", "ccc"]) == "Xa.bb.ccc."


def test_allocate_returns_all_initials_when_free(allocator: IdentifierAllocator) -> None:
    assert allocator.allocate("google-cloud-sdk") == "X.c.s."
    assert "X.c.s." in allocator


def test_allocate_progressive_shortening_on_collision(allocator: IdentifierAllocator) -> None:
    """Pre-registered candidates force the next-longer form each time."""
    allocator.reserve("X.b.c.")
    assert allocator.allocate("a/bb/ccc") == "X.b.ccc."

    assert allocator.allocate("a/bb/ccc") == "X.bb.ccc."

    # Every abbreviation is now taken: full form is the fallback
    assert allocator.allocate("a/bb/ccc") == "Xa.bb.ccc."


def test_allocate_raises_when_exhausted(allocator: IdentifierAllocator) -> None:
    for _ in range(4):
        allocator.allocate("a/bb/ccc")

    with pytest.raises(DuplicateIdentifierError) as exc_info:
        allocator.allocate("a/bb/ccc")

    assert exc_info.value.path == "a/bb/ccc"
    assert "a/bb/ccc" in str(exc_info.value)


def test_paths_that_sanitize_identically_collide_into_fallbacks(allocator: IdentifierAllocator) -> None:
    """'My App' and 'my-app' share a sanitized form but get distinct ids."""
    first = allocator.allocate("My App")
    second = allocator.allocate("my-app")

    assert first == "X.a."
    assert second == "X.app."
    assert first != second


def test_all_allocated_ids_are_pairwise_distinct(allocator: IdentifierAllocator) -> None:
    paths = [
        "app", "app/bin", "app/bin/app.exe", "app/bin/app.dll", "app/b",
        "app/bin/a.exe", "app/lib", "app/lib/lib.dll", "app/l", "app/l/b",
        "App/Bin", "a-p-p", "a/p/p",
    ]
    ids = [allocator.allocate(p) for p in paths]

    assert len(set(ids)) == len(ids)
    assert len(allocator) == len(ids)


def test_allocators_do_not_share_registries() -> None:
    first = IdentifierAllocator()
    second = IdentifierAllocator()

    assert first.allocate("x/y") == second.allocate("x/y")
    assert first.is_allocated("X.y.")
    assert len(first) == len(second) == 1
