from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict

from treerewriter.domain.config import TRAVERSAL_MODES
from treerewriter.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treerewriter CLI.

    Every option defaults to None so that unset flags never mask values
    coming from the configuration file.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treerewriter",
        description=i18n.t("app.description"),
    )

    # --- Scan ---
    p.add_argument(
        "-r", "--root",
        dest="root_path",
        default=None,
        help=i18n.t("cli.args.root"),
    )
    p.add_argument(
        "--traversal",
        choices=TRAVERSAL_MODES,
        default=None,
        help=i18n.t("cli.args.traversal"),
    )

    # --- Path Selection ---
    p.add_argument(
        "--include",
        dest="include_substring",
        default=None,
        help=i18n.t("cli.args.include"),
    )
    p.add_argument(
        "--exclude",
        dest="exclude_substring",
        default=None,
        help=i18n.t("cli.args.exclude"),
    )

    # --- Substitution ---
    p.add_argument(
        "--search",
        dest="search_literal",
        default=None,
        help=i18n.t("cli.args.search"),
    )
    p.add_argument(
        "--replace",
        dest="replace_literal",
        default=None,
        help=i18n.t("cli.args.replace"),
    )
    p.add_argument(
        "--encoding",
        default=None,
        help=i18n.t("cli.args.encoding"),
    )
    p.add_argument(
        "--no-atomic",
        action="store_true",
        help=i18n.t("cli.args.no_atomic"),
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help=i18n.t("cli.args.config"),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dict.

    Values are copied verbatim; None means "not given on the command line".

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "root_path": args.root_path,
        "traversal": args.traversal,
        "include_substring": args.include_substring,
        "exclude_substring": args.exclude_substring,
        "search_literal": args.search_literal,
        "replace_literal": args.replace_literal,
        "encoding": args.encoding,
    }

    if args.no_atomic:
        overrides["atomic_write"] = False

    return overrides
