from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, persisted state and flag overrides), acquisition of an analysis
snapshot (analyzer service or saved payload) and report rendering.

Exit codes: 0 valid analysis, 1 invalid analysis or analyzer failure,
2 bad input, 130 interrupted.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from syntaxscope.core.services.session import AnalysisSession
from syntaxscope.core.services.validator import validate_config
from syntaxscope.domain.analysis_models import AnalysisResult
from syntaxscope.domain.config import get_default_config, load_app_state, load_config
from syntaxscope.domain.view_models import SymbolFilter
from syntaxscope.infra.fs import STDIN_MARKER, read_json, read_source
from syntaxscope.infra.logging import LoggingConfig, configure_logging, get_logger, get_recent_logs
from syntaxscope.infra.network import (
    AnalyzerServiceError,
    check_health,
    check_syntax_health,
    fetch_analysis,
    validate_structure,
)
from syntaxscope.interface.cli import args as cli_args
from syntaxscope.interface.cli import report
from syntaxscope.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

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

    raw_argv = list(sys.argv[1:] if argv is None else argv)

    # 1. Locale must be active before help texts are built
    _apply_locale(raw_argv)

    # 2. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(raw_argv)

    # 3. Logging bootstrap (stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 4. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.show_logs is not None:
        print(get_recent_logs(max(args.show_logs, 1), log_path=args.log_file))
        return EXIT_OK

    try:
        if args.health:
            return _run_health(conf)
        if args.structure_type:
            return _run_validation(args, conf)
        return _run_analysis(args, conf)

    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_health(conf: Dict[str, Any]) -> int:
    """Probe both analyzer services and print one status line each."""
    lexical_up = check_health(conf["server_url"])
    syntax_up = check_syntax_health(conf["server_url"])
    for name, up in (("lexical", lexical_up), ("syntax", syntax_up)):
        status = i18n.t("cli.status.server_up") if up else i18n.t("cli.status.server_down")
        print(f"{name}: {status} ({conf['server_url']})")
    return EXIT_OK if lexical_up and syntax_up else EXIT_FAILURE


def _run_validation(args: Any, conf: Dict[str, Any]) -> int:
    """Check the input source against a single structure rule set."""
    code = _load_source(args.input_path)
    if code is None:
        return EXIT_BAD_INPUT

    try:
        validation = validate_structure(code, args.structure_type, conf["server_url"], conf["timeout"])
    except AnalyzerServiceError as e:
        return _fail(i18n.t("cli.errors.analysis_fail", error=str(e)))

    if args.json_output:
        print(json.dumps(report.structure_json(validation), ensure_ascii=False, indent=2))
    else:
        print("\n".join(report.render_structure(validation)))
    return EXIT_OK if validation.is_valid else EXIT_FAILURE


def _run_analysis(args: Any, conf: Dict[str, Any]) -> int:
    """Acquire a snapshot, apply view state and render the report."""
    if args.from_json:
        result = _load_payload(args.from_json)
    elif args.input_path:
        code = _load_source(args.input_path)
        if code is None:
            return EXIT_BAD_INPUT
        logger.info(f"Submitting {len(code)} characters to {conf['server_url']}")
        try:
            result = fetch_analysis(code, conf["server_url"], conf["timeout"])
        except AnalyzerServiceError as e:
            return _fail(i18n.t("cli.errors.analysis_fail", error=str(e)))
    else:
        msg = i18n.t("cli.errors.no_input")
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if result is None:
        return EXIT_BAD_INPUT

    session = AnalysisSession()
    session.load(result, expand_all=bool(conf["expand_all"]))
    try:
        session.apply_toggles(args.toggles)
    except KeyError as e:
        path = ".".join(str(i) for i in e.args[0]) if e.args else ""
        msg = i18n.t("cli.errors.invalid_path", path=path or "root")
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    criteria = SymbolFilter(
        kind=conf["symbol_kind"],
        scope=conf["symbol_scope"],
        include_unused=conf["include_unused"],
    )

    if args.json_output:
        doc = report.build_json(session, conf["sections"], criteria, conf["error_origin"])
        print(json.dumps(doc, ensure_ascii=False, indent=2))
    else:
        print("\n".join(report.render_text(session, conf["sections"], criteria, conf["error_origin"])))
        print("")
        print(i18n.t("cli.status.valid") if result.is_valid else i18n.t("cli.status.invalid"))

    return EXIT_OK if result.is_valid else EXIT_FAILURE

# -----------------------------------------------------------------------------
# INPUT HELPERS
# -----------------------------------------------------------------------------

def _load_source(path: Optional[str]) -> Optional[str]:
    """Read and pre-check the source text; None (after reporting) on bad input."""
    if not path:
        print(f"ERROR: {i18n.t('cli.errors.no_input')}", file=sys.stderr)
        return None
    if path != STDIN_MARKER and not os.path.isfile(path):
        msg = i18n.t("cli.errors.path_not_exist", path=path)
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return None

    try:
        code = read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        msg = i18n.t("cli.errors.payload_fail", error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return None

    if not code.strip():
        print(f"ERROR: {i18n.t('cli.errors.empty_source')}", file=sys.stderr)
        return None
    return code


def _load_payload(path: str) -> Optional[AnalysisResult]:
    """
    Decode a saved analyzer response.

    Accepts either the syntax payload itself or a document with 'syntax'
    and 'lexical' members.
    """
    try:
        payload = read_json(path)
    except (OSError, ValueError) as e:
        msg = i18n.t("cli.errors.payload_fail", error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return None

    if isinstance(payload.get("syntax"), dict):
        lexical = payload.get("lexical") if isinstance(payload.get("lexical"), dict) else None
        return AnalysisResult.from_payload(payload["syntax"], lexical)
    return AnalysisResult.from_payload(payload)


def _fail(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_FAILURE


def _apply_locale(argv: List[str]) -> None:
    """Select the label language: flag first, then persisted setting."""
    locale = cli_args.peek_locale(argv)
    if locale is None and "--use-defaults" not in argv:
        locale = load_app_state().get("app_settings", {}).get("locale")
    if locale in cli_args.SUPPORTED_LOCALES and locale != i18n.locale:
        i18n.load_locale(locale)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged, preventing schema pollution from external
    sources.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "server_url", "timeout", "sections", "expand_all",
        "symbol_kind", "symbol_scope", "include_unused", "error_origin",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
