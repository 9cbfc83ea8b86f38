from __future__ import annotations

"""
Analysis Result Domain Models.

Defines the immutable records that hold one analysis run's artifacts
(tokens, syntax tree, symbol table and error streams) and the factory
functions that decode the analyzer's JSON payloads into them.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from syntaxscope.domain.constants import NodeType, Severity, SymbolKind, TokenType

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# -----------------------------------------------------------------------------
# LEXICAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit in order of appearance.

    Attributes:
        type: Lexical category, or None when the analyzer reported a
              category outside the known vocabulary.
        value: Raw source text of the token.
        line: 1-based source line.
        position: 1-based column within the line.
        raw_type: Category text exactly as reported.
    """
    type: Optional[TokenType]
    value: str
    line: int
    position: int
    raw_type: str = ""

    @property
    def type_name(self) -> str:
        return self.type.value if self.type is not None else self.raw_type


@dataclass(frozen=True)
class LexicalError:
    """Error reported by the tokenizer endpoint."""
    message: str
    line: int
    position: int

# -----------------------------------------------------------------------------
# SYNTAX TREE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyntaxNode:
    """
    Node of the abstract syntax tree.

    Each node owns its children exclusively; the tree carries no parent
    pointers since views address nodes by root-to-node path.

    Attributes:
        node_type: Parser category, or None when the payload carried no
                   type or one outside the known vocabulary.
        value: Optional literal/identifier text.
        line: Source line of the node.
        position: Source column of the node.
        children: Ordered child nodes.
        attributes: Extra name/value annotations from the parser.
        raw_type: Type text exactly as reported (empty when missing).
    """
    node_type: Optional[NodeType]
    value: Optional[str] = None
    line: int = 0
    position: int = 0
    children: Tuple["SyntaxNode", ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict)
    raw_type: str = ""

    @property
    def type_name(self) -> str:
        return self.node_type.value if self.node_type is not None else self.raw_type

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def is_error(self) -> bool:
        return self.node_type == NodeType.SYNTAX_ERROR

# -----------------------------------------------------------------------------
# SYMBOL TABLE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Symbol:
    """
    Declared name recorded by the semantic checker.

    Attributes:
        name: Identifier as written in source.
        type: Declared or inferred type text.
        kind: Declaration kind, or None when outside the known vocabulary.
        line: Declaration line.
        position: Declaration column.
        scope: Opaque scope identifier, compared by equality only.
        used: Whether the symbol is referenced anywhere.
        attributes: Extra name/value annotations.
        raw_kind: Kind text exactly as reported.
    """
    name: str
    type: str
    kind: Optional[SymbolKind]
    line: int
    position: int
    scope: str
    used: bool
    attributes: Dict[str, str] = field(default_factory=dict)
    raw_kind: str = ""

    @property
    def kind_name(self) -> str:
        return self.kind.value if self.kind is not None else self.raw_kind

# -----------------------------------------------------------------------------
# ERROR RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyntaxErrorRecord:
    """
    Finding reported by the parser.

    A missing severity is kept as None; classification treats it as a
    warning so the record is never dropped from a report.
    """
    message: str
    line: int
    position: int
    error_type: str
    severity: Optional[Severity] = None
    expected: Optional[str] = None
    found: Optional[str] = None


@dataclass(frozen=True)
class SemanticErrorRecord:
    """Finding reported by the type/scope checker."""
    message: str
    line: int
    position: int
    error_type: str
    severity: Optional[Severity] = None
    symbol: Optional[str] = None
    symbol_type: Optional[str] = None


ErrorRecord = Union[SyntaxErrorRecord, SemanticErrorRecord]

# -----------------------------------------------------------------------------
# AGGREGATE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """
    Snapshot of one complete analysis run.

    Created wholesale when the analyzer answers and superseded in full by
    the next run. 'is_valid' is the analyzer's own verdict and is never
    recomputed locally.

    Attributes:
        tokens: Token stream in lexical order.
        ast: Root of the syntax tree (None when unavailable).
        syntax_errors: Parser findings in analyzer order.
        semantic_errors: Checker findings in analyzer order.
        symbol_table: Symbols in declaration order.
        is_valid: Analyzer verdict.
        lexical_errors: Tokenizer findings.
    """
    tokens: Tuple[Token, ...] = ()
    ast: Optional[SyntaxNode] = None
    syntax_errors: Tuple[SyntaxErrorRecord, ...] = ()
    semantic_errors: Tuple[SemanticErrorRecord, ...] = ()
    symbol_table: Tuple[Symbol, ...] = ()
    is_valid: bool = False
    lexical_errors: Tuple[LexicalError, ...] = ()

    @classmethod
    def from_payload(
            cls,
            payload: Mapping[str, Any],
            lexical_payload: Optional[Mapping[str, Any]] = None,
    ) -> "AnalysisResult":
        """
        Decode the analyzer's syntax/semantic response.

        Args:
            payload: JSON object with 'ast', 'syntaxErrors', 'semanticErrors',
                     'symbolTable', 'isValid' and optionally 'tokens'.
            lexical_payload: Optional lexical response ('tokens', 'errors')
                             used when the syntax payload has no tokens.

        Returns:
            AnalysisResult: The decoded snapshot.
        """
        tokens_raw = payload.get("tokens")
        lexical_raw: List[Any] = []
        if lexical_payload is not None:
            if not tokens_raw:
                tokens_raw = lexical_payload.get("tokens")
            lexical_raw = list(lexical_payload.get("errors") or [])

        return cls(
            tokens=tuple(token_from_dict(t) for t in (tokens_raw or [])),
            ast=node_from_dict(payload.get("ast")),
            syntax_errors=tuple(syntax_error_from_dict(e) for e in payload.get("syntaxErrors") or []),
            semantic_errors=tuple(semantic_error_from_dict(e) for e in payload.get("semanticErrors") or []),
            symbol_table=tuple(symbol_from_dict(s) for s in payload.get("symbolTable") or []),
            is_valid=_as_flag(payload.get("isValid")),
            lexical_errors=tuple(lexical_error_from_dict(e) for e in lexical_raw),
        )

    def contract_violations(self) -> List[str]:
        """
        List breaches of the analyzer's validity contract.

        A valid result must not carry ERROR-severity findings. Breaches are
        reported as given and never corrected.

        Returns:
            List[str]: Human-readable descriptions, empty when consistent.
        """
        if not self.is_valid:
            return []

        problems: List[str] = []
        syntax_errs = sum(1 for e in self.syntax_errors if e.severity == Severity.ERROR)
        semantic_errs = sum(1 for e in self.semantic_errors if e.severity == Severity.ERROR)
        if syntax_errs:
            problems.append(f"Result flagged valid but carries {syntax_errs} syntax error(s).")
        if semantic_errs:
            problems.append(f"Result flagged valid but carries {semantic_errs} semantic error(s).")
        return problems


@dataclass(frozen=True)
class StructureValidation:
    """
    Verdict of a targeted structure check (for loop, function, declaration).

    Attributes:
        structure_type: The structure that was checked.
        is_valid: Analyzer verdict for that structure.
        structure_errors: Findings specific to the structure.
        general_errors: Remaining parser findings.
        ast: Tree parsed during the check.
    """
    structure_type: str
    is_valid: bool = False
    structure_errors: Tuple[SyntaxErrorRecord, ...] = ()
    general_errors: Tuple[SyntaxErrorRecord, ...] = ()
    ast: Optional[SyntaxNode] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], structure_type: str = "") -> "StructureValidation":
        return cls(
            structure_type=str(payload.get("structureType") or structure_type),
            is_valid=_as_flag(payload.get("isValid")),
            structure_errors=tuple(syntax_error_from_dict(e) for e in payload.get("structureErrors") or []),
            general_errors=tuple(syntax_error_from_dict(e) for e in payload.get("generalErrors") or []),
            ast=node_from_dict(payload.get("ast")),
        )

# -----------------------------------------------------------------------------
# PAYLOAD DECODERS
# -----------------------------------------------------------------------------

def token_from_dict(data: Mapping[str, Any]) -> Token:
    raw_type = _raw_text(data.get("type"))
    return Token(
        type=_as_enum(TokenType, raw_type),
        value=str(data.get("value", "")),
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
        raw_type=raw_type,
    )


def lexical_error_from_dict(data: Mapping[str, Any]) -> LexicalError:
    return LexicalError(
        message=str(data.get("message", "")),
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
    )


def node_from_dict(data: Optional[Mapping[str, Any]]) -> Optional[SyntaxNode]:
    """
    Decode a syntax tree bottom-up with an explicit stack.

    Nesting depth is bounded only by memory, so deeply nested expressions
    decode like any other tree. Types outside the known vocabulary keep
    their text in 'raw_type' with 'node_type=None'; only a node without a
    type at all is typeless.

    Args:
        data: JSON object for the root, or None.

    Returns:
        Optional[SyntaxNode]: The decoded root, or None for empty input.
    """
    if not _is_node_payload(data):
        return None

    # (payload, children_built) pairs; built nodes collect in 'done'
    stack: List[Tuple[Any, bool]] = [(data, False)]
    done: List[Optional[SyntaxNode]] = []

    while stack:
        item, children_built = stack.pop()
        raw_children = _child_payloads(item)

        if not children_built:
            stack.append((item, True))
            stack.extend((child, False) for child in reversed(raw_children))
            continue

        split = len(done) - len(raw_children)
        children = tuple(child for child in done[split:] if child is not None)
        del done[split:]
        done.append(_build_node(item, children))

    return done[0]


def symbol_from_dict(data: Mapping[str, Any]) -> Symbol:
    raw_kind = _raw_text(data.get("kind"))
    return Symbol(
        name=str(data.get("name", "")),
        type=str(data.get("type", "")),
        kind=_as_enum(SymbolKind, raw_kind),
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
        scope=str(data.get("scope", "")),
        used=_as_flag(data.get("used")),
        attributes=_as_str_dict(data.get("attributes")),
        raw_kind=raw_kind,
    )


def syntax_error_from_dict(data: Mapping[str, Any]) -> SyntaxErrorRecord:
    return SyntaxErrorRecord(
        message=str(data.get("message", "")),
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
        error_type=str(data.get("errorType", "")),
        severity=_as_enum(Severity, data.get("severity")),
        expected=_opt_str(data.get("expected")),
        found=_opt_str(data.get("found")),
    )


def semantic_error_from_dict(data: Mapping[str, Any]) -> SemanticErrorRecord:
    return SemanticErrorRecord(
        message=str(data.get("message", "")),
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
        error_type=str(data.get("errorType", "")),
        severity=_as_enum(Severity, data.get("severity")),
        symbol=_opt_str(data.get("symbol")),
        symbol_type=_opt_str(data.get("symbolType")),
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Map a raw string onto an enum member, None when unrecognized."""
    if value is None:
        return None
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        return None


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _as_str_dict(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(k): str(v) for k, v in value.items()}


def _raw_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _as_flag(value: Any, default: bool = False) -> bool:
    """Boolean coercion for JSON flags; 'false'/'0'/'no' strings are False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1", "yes", "y", "on"):
            return True
        if text in ("false", "0", "no", "n", "off", ""):
            return False
    return default


def _is_node_payload(data: Any) -> bool:
    return isinstance(data, Mapping) and len(data) > 0


def _child_payloads(data: Any) -> List[Any]:
    if not _is_node_payload(data):
        return []
    children = data.get("children")
    return list(children) if isinstance(children, list) else []


def _build_node(data: Any, children: Tuple[SyntaxNode, ...]) -> Optional[SyntaxNode]:
    if not _is_node_payload(data):
        return None

    raw_type = _raw_text(data.get("type"))
    node_type = _as_enum(NodeType, raw_type)
    if raw_type and node_type is None:
        logger.debug(f"Unknown node type '{raw_type}' at {data.get('line')}:{data.get('position')}")

    value = data.get("value")
    return SyntaxNode(
        node_type=node_type,
        value=str(value) if value not in (None, "") else None,
        line=_as_int(data.get("line")),
        position=_as_int(data.get("position")),
        children=children,
        attributes=_as_str_dict(data.get("attributes")),
        raw_type=raw_type,
    )
