from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the manifest workflow:
1. Validates configuration and paths.
2. Builds the directory tree with a fresh identifier allocator.
3. Assembles the complete manifest document in memory.
4. Writes the document to its destination (unless dry-run).

Any failure aborts the run before the write, so no partial manifest is
ever produced.
"""

import logging
import os
from typing import Any, Dict, Optional

from wxsgen.core.analysis.id_allocator import IdentifierAllocator
from wxsgen.core.analysis.tree_generator import build_directory_tree
from wxsgen.core.analysis.tree_renderer import GuidFactory
from wxsgen.core.pipeline.components.writer import write_manifest
from wxsgen.core.pipeline.stages.assembler import assemble_manifest
from wxsgen.core.pipeline.stages.validator import validate_config
from wxsgen.domain.config import build_template
from wxsgen.domain.errors import InvalidInputError, ManifestError
from wxsgen.domain.pipeline_models import (
    ManifestResult,
    create_error_result,
    create_success_result,
)
from wxsgen.domain.tree_models import count_nodes
from wxsgen.infra.fs import canonical_path, normalize_path

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        guid_factory: Optional[GuidFactory] = None,
) -> ManifestResult:
    """
    Execute the full manifest pipeline.

    Every run uses its own IdentifierAllocator, so two runs over the same
    filesystem snapshot assign identical identifiers.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, build the document without writing it.
        guid_factory: Optional override for component GUID generation.

    Returns:
        ManifestResult: Object containing status, counts, and the document.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)

    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    cwd = os.getcwd()
    source_root = normalize_path(cfg["source_root"], cwd)
    id_root = normalize_path(cfg["id_root"], os.path.dirname(source_root))
    output_path = normalize_path(cfg["output_path"], cwd)
    sort_entries = bool(cfg["sort_entries"])

    # -------------------------------------------------------------------------
    # 2) Tree Construction & Assembly
    # -------------------------------------------------------------------------
    allocator = IdentifierAllocator()

    # The manifest never packages itself when written inside the scanned tree
    exclude_files = frozenset([canonical_path(output_path)])

    try:
        if not os.path.isdir(source_root):
            raise InvalidInputError(
                f"Input path does not exist or is not a directory: {source_root}", source_root
            )

        root = build_directory_tree(id_root, source_root, allocator, sort_entries)
        directory_count = count_nodes(root)
        logger.info(f"Directory tree built: {directory_count} directories.")

        document, file_count = assemble_manifest(
            root,
            id_root,
            allocator,
            build_template(cfg),
            guid_factory=guid_factory,
            sort_entries=sort_entries,
            exclude_files=exclude_files,
        )
        logger.info(f"Manifest assembled: {file_count} file components.")

        # ---------------------------------------------------------------------
        # 3) Deployment
        # ---------------------------------------------------------------------
        if dry_run:
            logger.info("Dry run: Skipping manifest write.")
        else:
            write_manifest(output_path, document)

    except ManifestError as e:
        logger.error(f"Pipeline aborted: {e}")
        return create_error_result(
            str(e), source_root, id_root, output_path,
            summary_extra={"failed_path": e.path, "error_type": type(e).__name__},
        )

    summary = {
        "dry_run": dry_run,
        "sort_entries": sort_entries,
        "identifiers_allocated": len(allocator),
        "root_id": root.id,
        "product_name": cfg["product_name"],
        "version": cfg["version"],
    }

    logger.info("Pipeline completed successfully.")
    return create_success_result(
        source_root, id_root, output_path,
        directory_count, file_count, document,
        written=not dry_run,
        summary_extra=summary,
    )
