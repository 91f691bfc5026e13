from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration layering
(defaults, config file, command-line overrides), validation, and the
rewrite run itself. stdout carries only the per-file progress lines;
everything else goes to stderr.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from treerewriter.core.pipeline.engine import run_rewrite
from treerewriter.core.pipeline.stages.validator import validate_config
from treerewriter.domain.config import CONFIG_KEYS, get_default_config, load_config, save_config
from treerewriter.infra.fs import normalize_path
from treerewriter.infra.logging import LoggingConfig, configure_logging, get_logger
from treerewriter.interface.cli import args as cli_args
from treerewriter.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration
    # An explicitly named file must load; --save-config may be creating it
    if args.use_defaults:
        base_conf = get_default_config()
    elif args.config_file and not (args.save_config and not os.path.exists(args.config_file)):
        try:
            base_conf = load_config(args.config_file, strict=True)
        except (OSError, ValueError) as e:
            return _usage_error(
                i18n.t("cli.errors.config_unreadable", path=args.config_file, error=str(e))
            )
    else:
        base_conf = load_config(args.config_file)

    # 4. Merge command-line overrides and validate strictly
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    try:
        clean_conf, _ = validate_config(raw_conf, strict=True)
    except (TypeError, ValueError) as e:
        msg = i18n.t("cli.errors.invalid_config", error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    if args.save_config:
        try:
            saved_to = save_config(clean_conf, args.config_file)
        except OSError as e:
            msg = i18n.t("cli.errors.config_not_saved", error=str(e))
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_FAILURE
        logger.info(i18n.t("cli.status.config_saved", path=saved_to))
        return EXIT_OK

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 5. Pre-flight root verification
    root = normalize_path(clean_conf["root_path"], ".")
    if not os.path.exists(root):
        return _usage_error(i18n.t("cli.errors.root_missing", path=root))
    if not os.path.isdir(root):
        return _usage_error(i18n.t("cli.errors.root_not_dir", path=root))

    # 6. Rewrite phase
    try:
        run_rewrite(clean_conf, notify=_print_progress)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except (OSError, ValueError) as e:
        msg = i18n.t("cli.errors.run_failed", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides of known keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_progress(path: str) -> None:
    """Announce a file on stdout before it is rewritten."""
    print(path, flush=True)


def _usage_error(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_USAGE

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
