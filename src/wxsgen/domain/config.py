from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration, loading of explicit JSON
configuration files, and the translation of a validated configuration
into the immutable product template consumed by the manifest assembler.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from wxsgen.domain.constants import (
    DEFAULT_DOWNGRADE_MESSAGE,
    DEFAULT_FEATURE_ID,
    DEFAULT_INSTALL_SCOPE,
    DEFAULT_INSTALLER_VERSION,
    DEFAULT_LANGUAGE,
    DEFAULT_MANUFACTURER,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_PRODUCT_VERSION,
    DEFAULT_PROGRAM_FILES_ID,
    DEFAULT_UPGRADE_CODE,
)
from wxsgen.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Template Model
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ManifestTemplate:
    """
    Fixed product metadata written around the generated tree sections.

    None of these values are derived from the scanned directory.

    Attributes:
        product_name: Display name of the product and its main feature.
        manufacturer: Publisher shown by the installer.
        version: Four-part product version.
        language: Windows LCID of the package.
        upgrade_code: Stable GUID shared by all versions of the product.
        installer_version: Minimum Windows Installer version (x100).
        feature_id: Identifier of the single feature holding all groups.
        install_scope: perMachine or perUser.
        downgrade_message: Message shown when a newer version is present.
        program_files_id: Standard directory the tree is nested under.
    """
    product_name: str = DEFAULT_PRODUCT_NAME
    manufacturer: str = DEFAULT_MANUFACTURER
    version: str = DEFAULT_PRODUCT_VERSION
    language: str = DEFAULT_LANGUAGE
    upgrade_code: str = DEFAULT_UPGRADE_CODE
    installer_version: int = DEFAULT_INSTALLER_VERSION
    feature_id: str = DEFAULT_FEATURE_ID
    install_scope: str = DEFAULT_INSTALL_SCOPE
    downgrade_message: str = DEFAULT_DOWNGRADE_MESSAGE
    program_files_id: str = DEFAULT_PROGRAM_FILES_ID


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    An empty 'id_root' means the parent directory of 'source_root', so the
    root directory's own name takes part in every identifier.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "source_root": base,
        "id_root": "",
        "output_path": os.path.join(base, DEFAULT_OUTPUT_FILE),

        # Product Metadata
        "product_name": DEFAULT_PRODUCT_NAME,
        "manufacturer": DEFAULT_MANUFACTURER,
        "version": DEFAULT_PRODUCT_VERSION,
        "language": DEFAULT_LANGUAGE,
        "upgrade_code": DEFAULT_UPGRADE_CODE,
        "installer_version": DEFAULT_INSTALLER_VERSION,

        # Traversal
        "sort_entries": True,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    Args:
        path: JSON file containing a single object. None returns defaults.

    Returns:
        Dict[str, Any]: Merged configuration (not yet validated).

    Raises:
        ConfigError: If the file is missing, unreadable or not a JSON object.
    """
    config = get_default_config()
    if not path:
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}", path) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config file '{path}': {e}", path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object.", path)

    unknown = sorted(k for k in data if k not in config)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {path}: {unknown}")

    config.update({k: v for k, v in data.items() if k in config})
    logger.debug(f"Configuration loaded from {path}")
    return config


def build_template(cfg: Dict[str, Any]) -> ManifestTemplate:
    """Create the product template from a validated configuration."""
    return ManifestTemplate(
        product_name=cfg["product_name"],
        manufacturer=cfg["manufacturer"],
        version=cfg["version"],
        language=cfg["language"],
        upgrade_code=cfg["upgrade_code"],
        installer_version=cfg["installer_version"],
    )
