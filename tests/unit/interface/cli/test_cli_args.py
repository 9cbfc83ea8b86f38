from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Tree path parsing for --toggle.
4. Locale detection before the parser is built.
"""

import argparse

import pytest

from syntaxscope.interface.cli.args import args_to_overrides, build_parser, parse_tree_path, peek_locale


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_facet_flags_mapping():
    """Verify facet flags are mapped to session config overrides."""
    args = parse_args([
        "--kind", "FUNCTION",
        "--scope", "global",
        "--hide-unused",
        "--origin", "semantic",
        "--expand-all",
    ])
    overrides = args_to_overrides(args)

    assert overrides["symbol_kind"] == "FUNCTION"
    assert overrides["symbol_scope"] == "global"
    assert overrides["include_unused"] is False
    assert overrides["error_origin"] == "semantic"
    assert overrides["expand_all"] is True


def test_cli_absent_flags_produce_no_overrides():
    """Unset flags must not override persisted configuration."""
    overrides = args_to_overrides(parse_args([]))
    assert overrides == {}


def test_cli_csv_sections_and_connection():
    """Comma-separated sections and connection settings are captured."""
    args = parse_args(["--sections", "tree, errors", "--server", "http://h:1/api", "--timeout", "4"])
    overrides = args_to_overrides(args)

    assert overrides["sections"] == ["tree", "errors"]
    assert overrides["server_url"] == "http://h:1/api"
    assert overrides["timeout"] == 4.0


def test_cli_toggle_is_repeatable():
    """Each --toggle adds one parsed path."""
    args = parse_args(["--toggle", "1.0", "--toggle", "root", "--toggle", "2"])
    assert args.toggles == [(1, 0), (), (2,)]


def test_cli_input_sources_are_exclusive():
    """--input and --from-json cannot be combined."""
    with pytest.raises(SystemExit):
        parse_args(["-i", "a.ts", "--from-json", "b.json"])


def test_cli_rejects_unknown_structure():
    """--validate only accepts known structure types."""
    assert parse_args(["--validate", "for_loop"]).structure_type == "for_loop"
    with pytest.raises(SystemExit):
        parse_args(["--validate", "while_loop"])


def test_parse_tree_path():
    """Dot-separated indices parse to tuples; junk is rejected."""
    assert parse_tree_path("0.2.1") == (0, 2, 1)
    assert parse_tree_path("") == ()
    with pytest.raises(argparse.ArgumentTypeError):
        parse_tree_path("a.b")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_tree_path("1.-1")


def test_peek_locale():
    """The locale flag is found in both spellings."""
    assert peek_locale(["--locale", "es", "-i", "x"]) == "es"
    assert peek_locale(["--locale=en"]) == "en"
    assert peek_locale(["-i", "x"]) is None


def test_show_logs_default_count():
    """--show-logs without a number uses the default tail length."""
    assert parse_args(["--show-logs"]).show_logs == 50
    assert parse_args(["--show-logs", "5"]).show_logs == 5
    assert parse_args([]).show_logs is None
