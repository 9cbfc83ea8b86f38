from __future__ import annotations

"""
Domain Constants and Enumerations.

Centralizes the closed vocabularies shared by the analyzer contract
(token types, node types, symbol kinds, severities, error origins) together
with application-wide defaults such as the analyzer endpoint and versioning.
"""

from enum import Enum
from typing import FrozenSet, List

CURRENT_CONFIG_VERSION = "1.0.0"
APP_VERSION = "1.0.0"

DEFAULT_SERVER_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 10

# Wildcard accepted by the symbol facets (kind/scope)
ALL = "ALL"

# Nodes shallower than this depth start expanded (root depth is 0)
DEFAULT_EXPANDED_DEPTH = 2

SECTION_NAMES: List[str] = ["tokens", "tree", "symbols", "errors"]

# -----------------------------------------------------------------------------
# ANALYZER VOCABULARIES
# -----------------------------------------------------------------------------

class TokenType(str, Enum):
    """Lexical categories produced by the tokenizer."""
    RESERVED_WORD = "RESERVED_WORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    DELIMITER = "DELIMITER"
    SYNTAX_ERROR = "SYNTAX_ERROR"
    EOF = "EOF"


class NodeType(str, Enum):
    """Syntax tree node categories emitted by the parser."""
    PROGRAM = "PROGRAM"

    VARIABLE_DECLARATION = "VARIABLE_DECLARATION"
    FUNCTION_DECLARATION = "FUNCTION_DECLARATION"
    CLASS_DECLARATION = "CLASS_DECLARATION"
    INTERFACE_DECLARATION = "INTERFACE_DECLARATION"

    EXPRESSION = "EXPRESSION"
    BINARY_EXPRESSION = "BINARY_EXPRESSION"
    UNARY_EXPRESSION = "UNARY_EXPRESSION"
    CALL_EXPRESSION = "CALL_EXPRESSION"
    MEMBER_EXPRESSION = "MEMBER_EXPRESSION"
    LITERAL_EXPRESSION = "LITERAL_EXPRESSION"
    IDENTIFIER_EXPRESSION = "IDENTIFIER_EXPRESSION"

    STATEMENT = "STATEMENT"
    BLOCK_STATEMENT = "BLOCK_STATEMENT"
    IF_STATEMENT = "IF_STATEMENT"
    FOR_STATEMENT = "FOR_STATEMENT"
    WHILE_STATEMENT = "WHILE_STATEMENT"
    RETURN_STATEMENT = "RETURN_STATEMENT"
    EXPRESSION_STATEMENT = "EXPRESSION_STATEMENT"

    TYPE_ANNOTATION = "TYPE_ANNOTATION"
    PRIMITIVE_TYPE = "PRIMITIVE_TYPE"
    ARRAY_TYPE = "ARRAY_TYPE"
    FUNCTION_TYPE = "FUNCTION_TYPE"

    SYNTAX_ERROR = "SYNTAX_ERROR"


class SymbolKind(str, Enum):
    """Declaration kinds recorded in the symbol table."""
    VARIABLE = "VARIABLE"
    FUNCTION = "FUNCTION"
    CLASS = "CLASS"
    INTERFACE = "INTERFACE"
    PARAMETER = "PARAMETER"
    PROPERTY = "PROPERTY"
    METHOD = "METHOD"


class Severity(str, Enum):
    """Severity attached to syntax and semantic findings."""
    ERROR = "ERROR"
    WARNING = "WARNING"


class ErrorOrigin(str, Enum):
    """Analysis phase that reported a finding."""
    SYNTAX = "syntax"
    SEMANTIC = "semantic"


ORIGIN_ALL = "all"

STRUCTURE_TYPES: FrozenSet[str] = frozenset({"for_loop", "function", "variable_declaration"})

# -----------------------------------------------------------------------------
# NODE CATEGORIES
# -----------------------------------------------------------------------------

DECLARATION_NODES: FrozenSet[NodeType] = frozenset({
    NodeType.VARIABLE_DECLARATION,
    NodeType.FUNCTION_DECLARATION,
    NodeType.CLASS_DECLARATION,
    NodeType.INTERFACE_DECLARATION,
})

EXPRESSION_NODES: FrozenSet[NodeType] = frozenset({
    NodeType.EXPRESSION,
    NodeType.BINARY_EXPRESSION,
    NodeType.UNARY_EXPRESSION,
    NodeType.CALL_EXPRESSION,
    NodeType.MEMBER_EXPRESSION,
    NodeType.LITERAL_EXPRESSION,
    NodeType.IDENTIFIER_EXPRESSION,
})

STATEMENT_NODES: FrozenSet[NodeType] = frozenset({
    NodeType.STATEMENT,
    NodeType.BLOCK_STATEMENT,
    NodeType.IF_STATEMENT,
    NodeType.FOR_STATEMENT,
    NodeType.WHILE_STATEMENT,
    NodeType.RETURN_STATEMENT,
    NodeType.EXPRESSION_STATEMENT,
})

TYPE_NODES: FrozenSet[NodeType] = frozenset({
    NodeType.TYPE_ANNOTATION,
    NodeType.PRIMITIVE_TYPE,
    NodeType.ARRAY_TYPE,
    NodeType.FUNCTION_TYPE,
})


def node_category(node_type: NodeType) -> str:
    """
    Classify a node type into its broad grammatical category.

    Args:
        node_type: The node type to classify.

    Returns:
        str: One of 'program', 'error', 'declaration', 'expression',
             'statement' or 'type'.
    """
    if node_type == NodeType.PROGRAM:
        return "program"
    if node_type == NodeType.SYNTAX_ERROR:
        return "error"
    if node_type in DECLARATION_NODES:
        return "declaration"
    if node_type in EXPRESSION_NODES:
        return "expression"
    if node_type in TYPE_NODES:
        return "type"
    return "statement"
