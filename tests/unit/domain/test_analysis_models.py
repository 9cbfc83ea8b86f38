from __future__ import annotations

"""
Unit tests for the Analysis Result Domain Models.

Verifies:
1. Decoding of the analyzer's camelCase payloads.
2. Tolerance to unknown node types and missing severities.
3. Reporting (not repairing) of validity contract violations.
4. Immutability of the snapshot records.
"""

import dataclasses

import pytest

from syntaxscope.domain.analysis_models import (
    AnalysisResult,
    StructureValidation,
    SyntaxErrorRecord,
    node_from_dict,
    semantic_error_from_dict,
    syntax_error_from_dict,
)
from syntaxscope.domain.constants import NodeType, Severity, SymbolKind, TokenType


def test_from_payload_decodes_every_section(analysis_result):
    """TC-01: All artifacts of a run are decoded into one snapshot."""
    result = analysis_result

    assert result.is_valid is False
    assert result.ast is not None and result.ast.node_type == NodeType.PROGRAM
    assert len(result.ast.children) == 2
    assert [s.name for s in result.symbol_table] == ["x", "f"]
    assert result.symbol_table[1].kind == SymbolKind.FUNCTION
    assert result.symbol_table[1].attributes == {"params": "0"}
    assert len(result.syntax_errors) == 1
    assert len(result.semantic_errors) == 2


def test_tokens_taken_from_lexical_payload(analysis_result):
    """TC-02: Tokens and lexical errors come from the tokenizer response."""
    assert analysis_result.tokens[0].type == TokenType.RESERVED_WORD
    assert analysis_result.tokens[0].value == "let"
    assert analysis_result.tokens[-1].type == TokenType.EOF
    assert len(analysis_result.lexical_errors) == 1
    assert analysis_result.lexical_errors[0].line == 4


def test_tokens_in_syntax_payload_take_precedence(syntax_payload, lexical_payload):
    """TC-03: A syntax payload that already carries tokens keeps them."""
    syntax_payload["tokens"] = [{"type": "NUMBER", "value": "1", "line": 1, "position": 1}]
    result = AnalysisResult.from_payload(syntax_payload, lexical_payload)

    assert len(result.tokens) == 1
    assert result.tokens[0].type == TokenType.NUMBER


def test_syntax_and_semantic_records_keep_extra_fields(syntax_payload):
    """TC-04: expected/found and symbol/symbolType survive decoding."""
    syn = syntax_error_from_dict(syntax_payload["syntaxErrors"][0])
    sem = semantic_error_from_dict(syntax_payload["semanticErrors"][1])

    assert syn.expected == ";" and syn.found == "}"
    assert syn.severity == Severity.ERROR
    assert sem.symbol == "x" and sem.symbol_type == "number"
    assert sem.severity == Severity.WARNING


def test_missing_severity_is_kept_as_none():
    """TC-05: A record without severity is preserved with severity None."""
    record = syntax_error_from_dict({"message": "m", "line": 1, "position": 1, "errorType": "X"})
    assert record.severity is None


def test_unknown_node_type_keeps_its_text():
    """TC-06: Unrecognized node types do not raise and keep their text."""
    node = node_from_dict({"type": "LAMBDA_EXPRESSION", "line": 2, "position": 3})
    assert node is not None
    assert node.node_type is None
    assert node.type_name == "LAMBDA_EXPRESSION"
    assert node.line == 2


def test_empty_ast_decodes_to_none():
    """TC-07: Missing or empty AST objects yield no root."""
    assert node_from_dict(None) is None
    assert node_from_dict({}) is None
    assert AnalysisResult.from_payload({}).ast is None


def test_syntax_error_nodes_follow_normal_ordering():
    """TC-08: SYNTAX_ERROR nodes are regular children in stored order."""
    node = node_from_dict({
        "type": "PROGRAM",
        "children": [
            {"type": "SYNTAX_ERROR", "value": "@"},
            {"type": "EXPRESSION_STATEMENT"},
        ],
    })
    assert [c.node_type for c in node.children] == [NodeType.SYNTAX_ERROR, NodeType.EXPRESSION_STATEMENT]
    assert node.children[0].is_error is True


def test_contract_violation_reported_not_repaired():
    """TC-09: A valid result carrying ERROR findings is flagged as given."""
    result = AnalysisResult(
        is_valid=True,
        syntax_errors=(SyntaxErrorRecord("m", 1, 1, "X", Severity.ERROR),),
    )
    violations = result.contract_violations()

    assert len(violations) == 1
    assert "syntax" in violations[0]
    assert result.is_valid is True
    assert len(result.syntax_errors) == 1


def test_valid_result_with_warnings_only_is_consistent():
    """TC-10: Warnings alone never breach the validity contract."""
    result = AnalysisResult(
        is_valid=True,
        syntax_errors=(SyntaxErrorRecord("m", 1, 1, "X", Severity.WARNING),),
    )
    assert result.contract_violations() == []


def test_snapshot_is_immutable(analysis_result):
    """TC-11: Snapshot fields cannot be reassigned."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        analysis_result.is_valid = True  # type: ignore[misc]


def test_structure_validation_from_payload():
    """TC-12: Structure check responses decode both error lists."""
    validation = StructureValidation.from_payload(
        {
            "structureType": "for_loop",
            "isValid": False,
            "structureErrors": [{"message": "Missing ')'", "line": 1, "position": 9,
                                 "errorType": "MISSING_PAREN", "severity": "ERROR"}],
            "generalErrors": [],
            "ast": {"type": "PROGRAM"},
        }
    )
    assert validation.structure_type == "for_loop"
    assert validation.is_valid is False
    assert validation.structure_errors[0].error_type == "MISSING_PAREN"
    assert validation.general_errors == ()
    assert validation.ast is not None


def _nested_expression(depth: int) -> dict:
    """Payload of a left-leaning 'a + a + ...' chain 'depth' levels deep."""
    node = {"type": "IDENTIFIER_EXPRESSION", "value": "a", "line": 1, "position": 1}
    for level in range(depth - 1):
        node = {"type": "BINARY_EXPRESSION", "value": "+", "line": 1, "position": level + 2, "children": [node]}
    return {"type": "PROGRAM", "children": [node]}


def test_deeply_nested_tree_decodes():
    """TC-13: Trees deeper than the interpreter recursion limit decode fully."""
    result = AnalysisResult.from_payload({"ast": _nested_expression(1000), "isValid": True})

    depth = 0
    node = result.ast
    while node.children:
        assert len(node.children) == 1
        node = node.children[0]
        depth += 1

    assert depth == 1000
    assert node.node_type == NodeType.IDENTIFIER_EXPRESSION
    assert result.ast.children[0].position == 1000


def test_children_keep_stored_order_and_skip_empty_entries():
    """TC-14: Sibling order survives decoding; empty child objects are dropped."""
    node = node_from_dict({
        "type": "BLOCK_STATEMENT",
        "children": [
            {"type": "STATEMENT", "value": "first", "children": [{"type": "EXPRESSION", "value": "inner"}]},
            {},
            {"type": "STATEMENT", "value": "second"},
        ],
    })
    assert [c.value for c in node.children] == ["first", "second"]
    assert node.children[0].children[0].value == "inner"


def test_unknown_vocabulary_is_kept_not_replaced():
    """TC-15: Unlisted token types, symbol kinds and root types keep their text."""
    result = AnalysisResult.from_payload(
        {
            "ast": {"type": "MODULE", "children": [{"type": "PROGRAM"}]},
            "symbolTable": [{"name": "Color", "type": "enum", "kind": "ENUM", "scope": "global", "used": True}],
        },
        {"tokens": [{"type": "STRING", "value": "\"hi\"", "line": 1, "position": 1}]},
    )

    token = result.tokens[0]
    assert token.type is None
    assert token.type_name == "STRING"

    symbol = result.symbol_table[0]
    assert symbol.kind is None
    assert symbol.kind_name == "ENUM"

    assert result.ast.node_type is None
    assert result.ast.type_name == "MODULE"
    assert result.ast.children[0].node_type == NodeType.PROGRAM


def test_missing_root_type_is_typeless():
    """TC-16: Only an absent or blank type leaves a node without a type name."""
    assert node_from_dict({"line": 1}).type_name == ""
    assert node_from_dict({"type": "  ", "line": 1}).type_name == ""


@pytest.mark.parametrize(
    "raw, expected",
    [(True, True), (False, False), ("true", True), ("false", False), ("False", False),
     ("0", False), ("1", True), (1, True), (0, False), (None, False)],
)
def test_validity_flag_coercion(raw, expected):
    """TC-17: String and numeric 'isValid' values are read as booleans."""
    assert AnalysisResult.from_payload({"isValid": raw}).is_valid is expected
    assert StructureValidation.from_payload({"isValid": raw}, "function").is_valid is expected


def test_symbol_usage_flag_coercion():
    """TC-18: A 'used' flag sent as text is read as a boolean."""
    result = AnalysisResult.from_payload({
        "symbolTable": [
            {"name": "a", "kind": "VARIABLE", "used": "false"},
            {"name": "b", "kind": "VARIABLE", "used": "true"},
        ],
    })
    assert [s.used for s in result.symbol_table] == [False, True]
