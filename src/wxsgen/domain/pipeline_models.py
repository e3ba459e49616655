from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate the
outcome of a manifest run between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ManifestResult:
    """
    Unified result object of a complete manifest run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source_root: Normalized directory that was scanned.
        id_root: Directory identifiers are computed relative to.
        output_path: Destination of the manifest document.
        directory_count: Number of directory nodes emitted.
        file_count: Number of file components emitted.
        document: Complete manifest text (empty on failure).
        written: Whether the document was persisted to output_path.
        summary: Technical execution summary.
    """
    ok: bool
    error: str

    source_root: str
    id_root: str
    output_path: str

    directory_count: int = 0
    file_count: int = 0
    document: str = ""
    written: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        source_root: str,
        id_root: str = "",
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> ManifestResult:
    """
    Create a failed result instance. No document is attached.

    Args:
        error: Detailed error description.
        source_root: The target input directory.
        id_root: Identifier root in effect when the run failed.
        output_path: Intended destination file.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        ManifestResult: An immutable error result object.
    """
    return ManifestResult(
        ok=False,
        error=error,
        source_root=source_root,
        id_root=id_root,
        output_path=output_path,
        summary=summary_extra or {},
    )


def create_success_result(
        source_root: str,
        id_root: str,
        output_path: str,
        directory_count: int,
        file_count: int,
        document: str,
        written: bool,
        summary_extra: Optional[Dict[str, Any]] = None
) -> ManifestResult:
    """Create a successful result instance."""
    return ManifestResult(
        ok=True,
        error="",
        source_root=source_root,
        id_root=id_root,
        output_path=output_path,
        directory_count=directory_count,
        file_count=file_count,
        document=document,
        written=written,
        summary=summary_extra or {},
    )
