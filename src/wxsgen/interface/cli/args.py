from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the wxsgen CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="wxsgen",
        description="Generate a WiX installer manifest (.wxs) from a directory tree.",
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="source_root",
        help="Directory to package (default: current directory).",
        default=None,
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        help="Destination .wxs file (default: ./Product.wxs).",
        default=None,
    )
    p.add_argument(
        "--id-root",
        dest="id_root",
        help="Directory identifiers are computed relative to (default: parent of input).",
        default=None,
    )
    p.add_argument(
        "-c", "--config",
        dest="config_file",
        help="JSON configuration file merged under the command-line flags.",
        default=None,
    )

    # --- Product Metadata ---
    p.add_argument("--product-name", dest="product_name", default=None,
                   help="Product display name and feature title.")
    p.add_argument("--manufacturer", dest="manufacturer", default=None,
                   help="Product manufacturer.")
    p.add_argument("--product-version", dest="version", default=None,
                   help="Four-part product version, e.g. 1.2.0.0.")
    p.add_argument("--language", dest="language", default=None,
                   help="Package language as a Windows LCID, e.g. 1033.")
    p.add_argument("--upgrade-code", dest="upgrade_code", default=None,
                   help="Product upgrade code (GUID).")

    # --- Traversal ---
    p.add_argument(
        "--unsorted",
        action="store_true",
        help="Keep filesystem enumeration order instead of sorting by name.",
    )

    # --- Runtime Behavior ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the manifest without writing it.",
    )
    p.add_argument(
        "--print-manifest",
        action="store_true",
        help="Print the generated manifest to stdout.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Unset options are present with a None value; the merge step skips them.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["source_root"] = args.source_root
    overrides["output_path"] = args.output_path
    overrides["id_root"] = args.id_root

    overrides["product_name"] = args.product_name
    overrides["manufacturer"] = args.manufacturer
    overrides["version"] = args.version
    overrides["language"] = args.language
    overrides["upgrade_code"] = args.upgrade_code

    if args.unsorted:
        overrides["sort_entries"] = False

    return overrides
