from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the pipeline, ensuring that the configuration
dictionary conforms to the expected schema. Handles type coercion,
product metadata normalization, and default value injection.
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Tuple

from wxsgen.domain.config import get_default_config

logger = logging.getLogger(__name__)

_VERSION_RX = re.compile(r"^\d+(\.\d+){0,3}$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI, JSON files) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of
            coercing them.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    string_fields = [
        "source_root", "output_path", "product_name", "manufacturer",
        "version", "language", "upgrade_code",
    ]
    bool_fields = ["sort_entries"]
    int_fields = ["installer_version"]

    # 3. Field Processing
    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    # id_root may legitimately be empty (parent of source_root)
    merged["id_root"] = _as_str(merged.get("id_root"), "", "id_root", warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    for field in int_fields:
        merged[field] = _as_int(
            merged.get(field), defaults.get(field, 0), field, warnings, strict
        )

    # 4. Domain-Specific Normalization
    merged["language"] = _normalize_language(merged["language"], defaults["language"], warnings, strict)
    merged["version"] = _normalize_version(merged["version"], defaults["version"], warnings, strict)
    merged["upgrade_code"] = _normalize_upgrade_code(
        merged["upgrade_code"], defaults["upgrade_code"], warnings, strict
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    if isinstance(value, (int, float)) and not isinstance(value, bool) and not strict:
        warnings.append(f"Field '{field}' converted from number {value} to str.")
        return str(value)

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric strings into positive integers."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value

    if not strict and isinstance(value, str) and value.strip().isdigit():
        warnings.append(f"Field '{field}' converted from '{value}' to int.")
        return int(value.strip())

    msg = f"Invalid field '{field}': expected positive int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_language(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """A language is a numeric LCID, or a comma-separated list of them."""
    parts = [p.strip() for p in value.split(",")]
    if parts and all(p.isdigit() for p in parts):
        return ",".join(parts)

    msg = f"Invalid language '{value}': expected numeric LCID."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _normalize_version(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Product versions are one to four dot-separated integers."""
    if _VERSION_RX.match(value):
        return value

    msg = f"Invalid version '{value}': expected 'major.minor.build.revision'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _normalize_upgrade_code(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Upgrade codes must be GUIDs; braces and case are normalized away."""
    try:
        return str(uuid.UUID(value.strip("{}")))
    except ValueError:
        msg = f"Invalid upgrade_code '{value}': expected a GUID."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using '{fallback}'.")
        return fallback
