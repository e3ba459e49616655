from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a sample directory layout, a fresh allocator and a
   deterministic GUID factory.
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from wxsgen.core.analysis.id_allocator import IdentifierAllocator  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def allocator() -> IdentifierAllocator:
    """Return an empty identifier registry."""
    return IdentifierAllocator()


@pytest.fixture
def sequential_guids() -> Callable[[], str]:
    """Return a GUID factory producing predictable, increasing values."""
    counter = {"n": 0}

    def _next() -> str:
        counter["n"] += 1
        return f"00000000-0000-0000-0000-{counter['n']:012d}"

    return _next


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small product layout.

    Structure:
    /parent
      /my-app
        readme.txt
        /A
          /B
            f.txt
        /docs
    """
    parent = tmp_path / "parent"
    app = parent / "my-app"
    (app / "A" / "B").mkdir(parents=True)
    (app / "docs").mkdir()
    (app / "readme.txt").write_text("hello", encoding="utf-8")
    (app / "A" / "B" / "f.txt").write_text("data", encoding="utf-8")
    return app
