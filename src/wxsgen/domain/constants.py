from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the fixed parts of the WiX manifest template: namespace,
element prefixes, product metadata defaults and the identifier alphabet.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# IDENTIFIER ALPHABET
# -----------------------------------------------------------------------------
ID_PREFIX = "X"
ID_SEPARATOR = "."
ID_REPLACED_CHARS: Tuple[str, ...] = ("\\", "/", ":", "-", " ", "(", ")")

# Prefixes distinguishing component ids from the directory/file ids they wrap
DIRECTORY_GROUP_PREFIX = "dc"
FILE_COMPONENT_PREFIX = "fc"

# -----------------------------------------------------------------------------
# WIX TEMPLATE
# -----------------------------------------------------------------------------
WIX_NAMESPACE = "http://schemas.microsoft.com/wix/2006/wi"
TARGET_DIR_ID = "TARGETDIR"
TARGET_DIR_NAME = "SourceDir"
DEFAULT_PROGRAM_FILES_ID = "ProgramFilesFolder"
DEFAULT_FEATURE_ID = "ProductFeature"
DEFAULT_INSTALL_SCOPE = "perMachine"
DEFAULT_DOWNGRADE_MESSAGE = "A newer version of [ProductName] is already installed."

# -----------------------------------------------------------------------------
# PRODUCT DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_OUTPUT_FILE = "Product.wxs"
DEFAULT_PRODUCT_NAME = "SetupProject1"
DEFAULT_MANUFACTURER = "Google"
DEFAULT_PRODUCT_VERSION = "1.0.0.0"
DEFAULT_LANGUAGE = "1033"
DEFAULT_UPGRADE_CODE = "4fbd35d3-d445-4896-81d7-a90ed8889174"
DEFAULT_INSTALLER_VERSION = 200
