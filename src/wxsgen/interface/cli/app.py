from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of
configuration sources (defaults, optional JSON file, CLI overrides),
pipeline execution, and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from wxsgen.core.pipeline.engine import run_pipeline
from wxsgen.core.pipeline.stages.validator import validate_config
from wxsgen.domain.config import load_config
from wxsgen.domain.errors import ConfigError, InvalidInputError
from wxsgen.domain.pipeline_models import ManifestResult
from wxsgen.infra.logging import LoggingConfig, configure_logging, get_logger
from wxsgen.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 pipeline failure, 2 invalid
        input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults or explicit file)
    try:
        base_conf = load_config(args.config_file)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # 4. Merge command-line overrides and validate
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        msg = "Operation interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130

    # 6. Output rendering phase
    if args.json_output:
        payload = asdict(result)
        if not args.print_manifest:
            payload.pop("document", None)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        if args.print_manifest and result.ok:
            sys.stdout.write(result.document)
        _print_human_summary(result, to_stderr=bool(args.print_manifest))

    return _exit_code(result)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys with a non-None value are taken from the overrides.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# EXIT STATUS
# -----------------------------------------------------------------------------

def _exit_code(result: ManifestResult) -> int:
    """Map a pipeline result to the process exit code."""
    if result.ok:
        return 0
    if result.summary.get("error_type") == InvalidInputError.__name__:
        return 2
    return 1

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ManifestResult, to_stderr: bool = False) -> None:
    """
    Print the execution result as a short terminal report.

    Args:
        result: The pipeline result to render.
        to_stderr: Route the report to stderr (stdout carries the manifest).
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    dry_run = result.summary.get("dry_run", False)
    out = sys.stderr if to_stderr else sys.stdout

    if dry_run:
        print("SIMULATION COMPLETE (nothing written)", file=out)
    else:
        print(f"Manifest written: {result.output_path}", file=out)

    print(f"Source root: {result.source_root}", file=out)
    print(f"Directories: {result.directory_count}", file=out)
    print(f"File components: {result.file_count}", file=out)


# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
