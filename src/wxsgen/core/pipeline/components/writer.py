from __future__ import annotations

"""
Output Persistence.

Writes the fully assembled manifest to its destination in one
full-content overwrite. The document is encoded before the destination is
opened, so neither an earlier pipeline failure nor an unencodable document
leaves a partial or emptied file behind.
"""

import logging
import os

from wxsgen.domain.errors import ManifestWriteError
from wxsgen.infra.fs import printable_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_manifest(output_path: str, document: str) -> None:
    """
    Persist the manifest document as UTF-8, replacing any existing content.

    Missing parent directories are created.

    Args:
        output_path: Destination file.
        document: Complete manifest text.

    Raises:
        ManifestWriteError: If the document is not encodable as UTF-8, or
            the directory cannot be created or the file cannot be written.
    """
    try:
        data = document.encode("utf-8")
    except UnicodeEncodeError as e:
        bad = document[e.start:e.end].encode("utf-8", "backslashreplace").decode("ascii")
        raise ManifestWriteError(
            f"Manifest for '{printable_path(output_path)}' contains text that is not "
            f"valid UTF-8 ({bad}); nothing was written",
            printable_path(output_path),
        ) from e

    try:
        out_dir = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(out_dir, exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ManifestWriteError(
            f"Failed to write manifest to '{output_path}': {e}", output_path
        ) from e

    logger.info(f"Manifest saved to file: {output_path}")
