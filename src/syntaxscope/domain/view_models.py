from __future__ import annotations

"""
Derived View Data Models.

Read-only projections computed from an AnalysisResult snapshot: visible
tree entries, tree summaries, symbol facets/statistics and the aggregated
error report. None of these objects reference mutable state of the
snapshot they were derived from.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from syntaxscope.domain.analysis_models import ErrorRecord, Symbol, SyntaxNode
from syntaxscope.domain.constants import ALL, ErrorOrigin, NodeType, Severity, SymbolKind

# Root-to-node sequence of child indices; the root is the empty path
NodePath = Tuple[int, ...]

# -----------------------------------------------------------------------------
# TREE VIEWS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class VisibleNode:
    """
    One row of the materialized tree.

    Attributes:
        node: The syntax node itself.
        depth: Distance from the root (root is 0).
        path: Child indices leading from the root to this node.
        is_last_sibling: Whether the node is its parent's final child;
                         only meaningful for connector rendering.
        expanded: Expansion flag in effect when the row was produced.
    """
    node: SyntaxNode
    depth: int
    path: NodePath
    is_last_sibling: bool
    expanded: bool = False


@dataclass(frozen=True)
class TreeSummary:
    """
    Structural overview of a syntax tree.

    Attributes:
        root_type: Node type of the root (None when outside the known vocabulary).
        root_value: Optional value of the root.
        child_count: Number of direct children of the root.
        line: Root line.
        position: Root column.
        has_errors: Whether any SYNTAX_ERROR node exists in the tree.
        node_type_counts: Occurrences per node type across the tree.
        depth: Maximum depth reached (root alone is 0).
        node_count: Total number of nodes.
        root_type_name: Root type text as reported.
    """
    root_type: Optional[NodeType]
    root_value: Optional[str]
    child_count: int
    line: int
    position: int
    has_errors: bool = False
    node_type_counts: Dict[str, int] = field(default_factory=dict)
    depth: int = 0
    node_count: int = 1
    root_type_name: str = ""

# -----------------------------------------------------------------------------
# SYMBOL VIEWS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SymbolFilter:
    """
    Active facet selection over the symbol table.

    Attributes:
        kind: Exact kind to keep, or ALL.
        scope: Exact scope to keep, or ALL.
        include_unused: When False, only used symbols pass.
    """
    kind: Union[SymbolKind, str] = ALL
    scope: str = ALL
    include_unused: bool = True


@dataclass(frozen=True)
class SymbolFacets:
    """
    Distinct kind and scope values present in a table, first-seen order.

    Kinds are given by name so values outside SymbolKind are listed too.
    """
    kinds: Tuple[str, ...] = ()
    scopes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SymbolStatistics:
    """
    Summary counts over an unfiltered symbol table.

    Attributes:
        total: Number of symbols.
        used: Symbols referenced at least once.
        unused: Symbols never referenced.
        by_kind: Count for every SymbolKind (zero when absent), plus the
                 raw name of any kind outside the vocabulary.
    """
    total: int
    used: int
    unused: int
    by_kind: Dict[Union[SymbolKind, str], int] = field(default_factory=dict)

    @property
    def variables(self) -> int:
        return self.by_kind.get(SymbolKind.VARIABLE, 0)

    @property
    def functions(self) -> int:
        return self.by_kind.get(SymbolKind.FUNCTION, 0)

    @property
    def classes(self) -> int:
        return self.by_kind.get(SymbolKind.CLASS, 0)

    @property
    def interfaces(self) -> int:
        return self.by_kind.get(SymbolKind.INTERFACE, 0)


@dataclass(frozen=True)
class SymbolView:
    """Filtered rows plus the filter-independent facets and statistics."""
    rows: List[Symbol]
    facets: SymbolFacets
    statistics: SymbolStatistics
    criteria: SymbolFilter

# -----------------------------------------------------------------------------
# ERROR VIEWS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TaggedError:
    """
    An error record annotated with the analysis phase that produced it.

    The wrapped record is shared, not copied; records are immutable.
    """
    origin: ErrorOrigin
    record: ErrorRecord

    @property
    def line(self) -> int:
        return self.record.line

    @property
    def position(self) -> int:
        return self.record.position

    @property
    def severity(self) -> Optional[Severity]:
        return self.record.severity

    @property
    def error_type(self) -> str:
        return self.record.error_type

    @property
    def message(self) -> str:
        return self.record.message


@dataclass(frozen=True)
class SeverityCounts:
    """ERROR/WARNING partition of a stream of findings."""
    errors: int = 0
    warnings: int = 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings

    def __add__(self, other: "SeverityCounts") -> "SeverityCounts":
        return SeverityCounts(self.errors + other.errors, self.warnings + other.warnings)


@dataclass(frozen=True)
class ErrorReport:
    """
    Ranked report combining syntax and semantic findings.

    Attributes:
        merged: Both streams tagged and ordered by (line, position).
        syntax_counts: Severity counts of the syntax stream.
        semantic_counts: Severity counts of the semantic stream.
        syntax_total: Number of syntax findings.
        semantic_total: Number of semantic findings.
        syntax_common_types: Occurrences per syntax error type.
        semantic_common_types: Occurrences per semantic error type.
        hints: Locale keys of remediation tips matching the findings.
    """
    merged: List[TaggedError]
    syntax_counts: SeverityCounts
    semantic_counts: SeverityCounts
    syntax_total: int
    semantic_total: int
    syntax_common_types: Dict[str, int] = field(default_factory=dict)
    semantic_common_types: Dict[str, int] = field(default_factory=dict)
    hints: List[str] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return self.syntax_total + self.semantic_total

    @property
    def combined_counts(self) -> SeverityCounts:
        return self.syntax_counts + self.semantic_counts
