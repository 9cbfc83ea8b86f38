from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared analyzer payloads (syntax and lexical) and the decoded snapshot.
3. Small builders for syntax nodes, symbols and error records.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def english_labels():
    """Run every test with the English locale active."""
    from syntaxscope.utils.i18n import i18n
    if i18n.locale != "en" or not i18n.is_loaded:
        i18n.load_locale("en")
    yield


@pytest.fixture
def syntax_payload() -> Dict[str, Any]:
    """
    Return a realistic '/syntax/analyze' response.

    Source analyzed:
        let x: number = 5;
        function f() {
          return y
        }

    Tree (8 nodes, max depth 4):
        PROGRAM
        ├── VARIABLE_DECLARATION "x"
        │   ├── TYPE_ANNOTATION "number"
        │   └── LITERAL_EXPRESSION "5"
        └── FUNCTION_DECLARATION "f"
            └── BLOCK_STATEMENT
                └── RETURN_STATEMENT
                    └── IDENTIFIER_EXPRESSION "y"
    """
    return {
        "ast": {
            "type": "PROGRAM",
            "line": 1,
            "position": 1,
            "children": [
                {
                    "type": "VARIABLE_DECLARATION",
                    "value": "x",
                    "line": 1,
                    "position": 1,
                    "attributes": {"kind": "let"},
                    "children": [
                        {"type": "TYPE_ANNOTATION", "value": "number", "line": 1, "position": 8, "children": []},
                        {"type": "LITERAL_EXPRESSION", "value": "5", "line": 1, "position": 17, "children": []},
                    ],
                },
                {
                    "type": "FUNCTION_DECLARATION",
                    "value": "f",
                    "line": 2,
                    "position": 1,
                    "children": [
                        {
                            "type": "BLOCK_STATEMENT",
                            "line": 2,
                            "position": 14,
                            "children": [
                                {
                                    "type": "RETURN_STATEMENT",
                                    "line": 3,
                                    "position": 3,
                                    "children": [
                                        {"type": "IDENTIFIER_EXPRESSION", "value": "y", "line": 3, "position": 10},
                                    ],
                                },
                            ],
                        },
                    ],
                },
            ],
        },
        "syntaxErrors": [
            {
                "message": "Expected ';'",
                "line": 3,
                "position": 5,
                "errorType": "MISSING_SEMICOLON",
                "severity": "ERROR",
                "expected": ";",
                "found": "}",
            },
        ],
        "semanticErrors": [
            {
                "message": "Undefined variable 'y'",
                "line": 3,
                "position": 5,
                "errorType": "UNDEFINED_VARIABLE",
                "severity": "ERROR",
                "symbol": "y",
            },
            {
                "message": "Variable 'x' is never used",
                "line": 1,
                "position": 5,
                "errorType": "UNUSED_VARIABLE",
                "severity": "WARNING",
                "symbol": "x",
                "symbolType": "number",
            },
        ],
        "symbolTable": [
            {"name": "x", "type": "number", "kind": "VARIABLE", "line": 1, "position": 5,
             "scope": "global", "used": False},
            {"name": "f", "type": "function", "kind": "FUNCTION", "line": 2, "position": 10,
             "scope": "global", "used": True, "attributes": {"params": "0"}},
        ],
        "isValid": False,
    }


@pytest.fixture
def lexical_payload() -> Dict[str, Any]:
    """Return a '/analyze' (tokenizer) response for the first source line."""
    return {
        "tokens": [
            {"type": "RESERVED_WORD", "value": "let", "line": 1, "position": 1},
            {"type": "IDENTIFIER", "value": "x", "line": 1, "position": 5},
            {"type": "DELIMITER", "value": ":", "line": 1, "position": 6},
            {"type": "IDENTIFIER", "value": "number", "line": 1, "position": 8},
            {"type": "OPERATOR", "value": "=", "line": 1, "position": 15},
            {"type": "NUMBER", "value": "5", "line": 1, "position": 17},
            {"type": "DELIMITER", "value": ";", "line": 1, "position": 18},
            {"type": "EOF", "value": "", "line": 5, "position": 1},
        ],
        "errors": [
            {"message": "Unexpected character '@'", "line": 4, "position": 2},
        ],
    }


@pytest.fixture
def analysis_result(syntax_payload, lexical_payload):
    """The decoded snapshot of both shared payloads."""
    from syntaxscope.domain.analysis_models import AnalysisResult
    return AnalysisResult.from_payload(syntax_payload, lexical_payload)
