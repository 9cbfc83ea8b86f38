from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema (help messages, argument types,
defaults) and translates the parsed namespace into session configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional, Sequence

from syntaxscope.domain.constants import STRUCTURE_TYPES
from syntaxscope.domain.view_models import NodePath
from syntaxscope.utils.i18n import i18n

SUPPORTED_LOCALES = ["en", "es"]
DEFAULT_LOG_TAIL = 50
ROOT_PATH_ALIASES = ("", "root")

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the syntaxscope CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="syntaxscope",
        description=i18n.t("app.description"),
    )

    # --- Input Sources ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help=i18n.t("cli.args.input"),
    )
    source.add_argument(
        "--from-json",
        dest="from_json",
        default=None,
        help=i18n.t("cli.args.from_json"),
    )

    # --- Analyzer Connection ---
    p.add_argument(
        "--server",
        dest="server_url",
        default=None,
        help=i18n.t("cli.args.server"),
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=i18n.t("cli.args.timeout"),
    )

    # --- Report Layout ---
    p.add_argument(
        "--sections",
        default=None,
        help=i18n.t("cli.args.sections"),
    )
    p.add_argument(
        "--expand-all",
        action="store_true",
        help=i18n.t("cli.args.expand_all"),
    )
    p.add_argument(
        "--toggle",
        dest="toggles",
        action="append",
        type=parse_tree_path,
        default=[],
        metavar="PATH",
        help=i18n.t("cli.args.toggle"),
    )

    # --- Symbol and Error Facets ---
    p.add_argument("--kind", dest="symbol_kind", default=None, help=i18n.t("cli.args.kind"))
    p.add_argument("--scope", dest="symbol_scope", default=None, help=i18n.t("cli.args.scope"))
    p.add_argument("--hide-unused", action="store_true", help=i18n.t("cli.args.hide_unused"))
    p.add_argument(
        "--origin",
        dest="error_origin",
        choices=["syntax", "semantic", "all"],
        default=None,
        help=i18n.t("cli.args.origin"),
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )

    # --- Analyzer Tools ---
    p.add_argument("--health", action="store_true", help=i18n.t("cli.args.health"))
    p.add_argument(
        "--validate",
        dest="structure_type",
        choices=sorted(STRUCTURE_TYPES),
        default=None,
        help=i18n.t("cli.args.validate"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--locale", choices=SUPPORTED_LOCALES, default=None, help=i18n.t("cli.args.locale"))
    p.add_argument("--log-file", dest="log_file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument(
        "--show-logs",
        dest="show_logs",
        type=int,
        nargs="?",
        const=DEFAULT_LOG_TAIL,
        default=None,
        metavar="N",
        help=i18n.t("cli.args.show_logs"),
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
    Translate the argparse Namespace into session configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; keys are only present for flags given.
    """
    overrides: Dict[str, Any] = {}

    if args.server_url:
        overrides["server_url"] = args.server_url
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.sections:
        overrides["sections"] = _split_csv(args.sections)
    if args.expand_all:
        overrides["expand_all"] = True

    if args.symbol_kind:
        overrides["symbol_kind"] = args.symbol_kind
    if args.symbol_scope:
        overrides["symbol_scope"] = args.symbol_scope
    if args.hide_unused:
        overrides["include_unused"] = False
    if args.error_origin:
        overrides["error_origin"] = args.error_origin

    return overrides


def peek_locale(argv: Optional[Sequence[str]]) -> Optional[str]:
    """
    Find '--locale' before the parser is built, so help text is localized.

    Args:
        argv: Raw argument list.

    Returns:
        Optional[str]: The requested locale, if any.
    """
    tokens = list(argv or [])
    for i, token in enumerate(tokens):
        if token.startswith("--locale="):
            return token.split("=", 1)[1]
        if token == "--locale" and i + 1 < len(tokens):
            return tokens[i + 1]
    return None


def parse_tree_path(value: str) -> NodePath:
    """
    Parse a dot-separated child-index path ('0.2.1'); 'root' is the root.

    Raises:
        argparse.ArgumentTypeError: On a malformed path.
    """
    text = (value or "").strip()
    if text.lower() in ROOT_PATH_ALIASES:
        return ()
    try:
        indices = tuple(int(part) for part in text.split("."))
    except ValueError:
        raise argparse.ArgumentTypeError(i18n.t("cli.errors.invalid_path", path=value))
    if any(i < 0 for i in indices):
        raise argparse.ArgumentTypeError(i18n.t("cli.errors.invalid_path", path=value))
    return indices

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
