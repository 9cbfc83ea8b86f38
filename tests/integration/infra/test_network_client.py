from __future__ import annotations

"""
Integration tests for the Analyzer Service Client.

Utilizes mocking to verify request construction, payload decoding and
failure mapping without making real network calls.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from syntaxscope.infra.network import (
    AnalyzerServiceError,
    build_url,
    check_health,
    check_syntax_health,
    fetch_analysis,
    fetch_ast,
    fetch_symbol_table,
    validate_structure,
)


def _ok(payload) -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.status_code = 200
    mock_resp.ok = True
    mock_resp.json.return_value = payload
    return mock_resp

# -----------------------------------------------------------------------------
# ANALYSIS TESTS
# -----------------------------------------------------------------------------

def test_fetch_analysis_combines_both_endpoints(syntax_payload, lexical_payload) -> None:
    """TC-01: Syntax and lexical answers are merged into one snapshot."""
    with patch("requests.post", side_effect=[_ok(syntax_payload), _ok(lexical_payload)]) as mock_post:
        result = fetch_analysis("let x: number = 5;", "http://host:9000/api/", timeout=4)

    assert result.is_valid is False
    assert len(result.tokens) == 8
    assert len(result.symbol_table) == 2
    assert len(result.lexical_errors) == 1

    urls = [c.args[0] for c in mock_post.call_args_list]
    assert urls == ["http://host:9000/api/syntax/analyze", "http://host:9000/api/analyze"]
    _, kwargs = mock_post.call_args
    assert kwargs["json"] == {"code": "let x: number = 5;"}
    assert kwargs["timeout"] == 4
    assert "SyntaxScope" in kwargs["headers"]["User-Agent"]


def test_blank_code_is_rejected_without_request() -> None:
    """TC-02: Whitespace-only source never reaches the network."""
    with patch("requests.post") as mock_post:
        with pytest.raises(ValueError):
            fetch_analysis("   \n")
    mock_post.assert_not_called()


def test_http_error_maps_status_code() -> None:
    """TC-03: Non-2xx answers raise AnalyzerServiceError with the status."""
    error_resp = MagicMock()
    error_resp.status_code = 500
    mock_resp = MagicMock()
    mock_resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=error_resp)

    with patch("requests.post", return_value=mock_resp):
        with pytest.raises(AnalyzerServiceError) as exc:
            fetch_analysis("let x = 1;")

    assert exc.value.status_code == 500


@pytest.mark.parametrize("failure", [requests.exceptions.ConnectionError, requests.exceptions.Timeout])
def test_transport_failures_raise_service_error(failure) -> None:
    """TC-04: Unreachable or slow analyzers surface as AnalyzerServiceError."""
    with patch("requests.post", side_effect=failure):
        with pytest.raises(AnalyzerServiceError) as exc:
            fetch_analysis("let x = 1;")

    assert exc.value.status_code is None


def test_malformed_payload_raises_service_error() -> None:
    """TC-05: Invalid JSON and non-object roots are rejected."""
    bad_json = MagicMock()
    bad_json.json.side_effect = ValueError("Expecting value")

    with patch("requests.post", return_value=bad_json):
        with pytest.raises(AnalyzerServiceError):
            fetch_analysis("let x = 1;")

    with patch("requests.post", return_value=_ok(["not", "a", "dict"])):
        with pytest.raises(AnalyzerServiceError):
            fetch_analysis("let x = 1;")


def test_partial_snapshots(syntax_payload) -> None:
    """TC-06: AST-only and symbol-only endpoints yield partial snapshots."""
    with patch("requests.post", return_value=_ok({"ast": syntax_payload["ast"], "isValid": True})) as mock_post:
        tree_only = fetch_ast("let x = 1;")
    assert mock_post.call_args.args[0].endswith("/syntax/ast")
    assert tree_only.ast is not None
    assert tree_only.symbol_table == ()

    symbols_payload = {
        "symbolTable": syntax_payload["symbolTable"],
        "semanticErrors": syntax_payload["semanticErrors"],
    }
    with patch("requests.post", return_value=_ok(symbols_payload)) as mock_post:
        symbols_only = fetch_symbol_table("let x = 1;")
    assert mock_post.call_args.args[0].endswith("/syntax/symbols")
    assert symbols_only.ast is None
    assert len(symbols_only.symbol_table) == 2
    assert len(symbols_only.semantic_errors) == 2

# -----------------------------------------------------------------------------
# STRUCTURE VALIDATION TESTS
# -----------------------------------------------------------------------------

def test_validate_structure_sends_type() -> None:
    """TC-07: The structure type is part of the request body."""
    payload = {
        "isValid": False,
        "structureErrors": [{"message": "Missing body", "line": 1, "position": 14, "errorType": "MISSING_BODY"}],
        "generalErrors": [],
    }
    with patch("requests.post", return_value=_ok(payload)) as mock_post:
        validation = validate_structure("function f()", "function")

    assert mock_post.call_args.kwargs["json"] == {"code": "function f()", "structureType": "function"}
    assert validation.structure_type == "function"
    assert validation.is_valid is False
    assert len(validation.structure_errors) == 1


def test_validate_structure_rejects_unknown_type() -> None:
    """TC-08: Unknown structure types fail before any request."""
    with patch("requests.post") as mock_post:
        with pytest.raises(ValueError):
            validate_structure("while (x) {}", "while_loop")
    mock_post.assert_not_called()

# -----------------------------------------------------------------------------
# HEALTH & URL TESTS
# -----------------------------------------------------------------------------

def test_health_probes() -> None:
    """TC-09: Probes report reachability and never raise."""
    with patch("requests.get", return_value=_ok({})) as mock_get:
        assert check_health("http://host/api") is True
    assert mock_get.call_args.args[0] == "http://host/api/health"

    down = MagicMock()
    down.ok = False
    with patch("requests.get", return_value=down):
        assert check_syntax_health("http://host/api") is False

    with patch("requests.get", side_effect=requests.exceptions.ConnectionError):
        assert check_health() is False


def test_build_url_normalizes_slashes() -> None:
    """TC-10: Base URL and endpoint are joined with a single slash."""
    assert build_url("http://h/api/", "/syntax/ast") == "http://h/api/syntax/ast"
    assert build_url("", "health").endswith("/api/health")
