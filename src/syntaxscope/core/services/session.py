from __future__ import annotations

"""
Analysis Session Service.

Owns the current analysis snapshot and the view state attached to it (the
tree expansion map). Derived projections are computed on demand from the
snapshot and memoized until the next run replaces it wholesale.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from syntaxscope.core.errors.aggregator import build_error_report, filter_by_origin, merge_errors
from syntaxscope.core.symbols.filter_engine import build_symbol_view, compute_statistics, facet_values
from syntaxscope.core.tree.materializer import (
    ExpansionState,
    is_available,
    node_at,
    summarize_tree,
    visible_subtree,
)
from syntaxscope.domain.analysis_models import AnalysisResult
from syntaxscope.domain.constants import ORIGIN_ALL
from syntaxscope.domain.view_models import (
    ErrorReport,
    NodePath,
    SymbolFacets,
    SymbolFilter,
    SymbolStatistics,
    SymbolView,
    TaggedError,
    TreeSummary,
    VisibleNode,
)

logger = logging.getLogger(__name__)


class AnalysisSession:
    """
    Holder of one analysis snapshot and its derived views.

    A new run is installed with 'load', which discards the previous
    snapshot, the expansion map and every cached projection. The snapshot
    itself is never modified.
    """

    def __init__(self, result: Optional[AnalysisResult] = None) -> None:
        self._result: Optional[AnalysisResult] = None
        self._expansion = ExpansionState()
        self._cache: Dict[str, Any] = {}
        if result is not None:
            self.load(result)

    # -------------------------------------------------------------------------
    # SNAPSHOT LIFECYCLE
    # -------------------------------------------------------------------------

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def expansion(self) -> ExpansionState:
        return self._expansion

    def load(self, result: AnalysisResult, expand_all: bool = False) -> List[str]:
        """
        Install a new snapshot, replacing all state of the previous one.

        Args:
            result: The analyzer's complete response.
            expand_all: Start with every tree node expanded.

        Returns:
            List[str]: Contract violations detected in the snapshot.
        """
        self._result = result
        self._cache.clear()
        self._expansion = ExpansionState.expand_all(result.ast) if expand_all else ExpansionState()

        violations = result.contract_violations()
        for violation in violations:
            logger.warning(f"Analyzer contract violation: {violation}")

        logger.info(
            f"Session loaded: {len(result.tokens)} tokens, {len(result.symbol_table)} symbols, "
            f"{len(result.syntax_errors)} syntax / {len(result.semantic_errors)} semantic findings, "
            f"valid={result.is_valid}"
        )
        return violations

    def clear(self) -> None:
        """Drop the snapshot and every derived view."""
        self._result = None
        self._cache.clear()
        self._expansion = ExpansionState()
        logger.debug("Session cleared")

    # -------------------------------------------------------------------------
    # TREE VIEWS
    # -------------------------------------------------------------------------

    def visible_tree(self) -> List[VisibleNode]:
        """Rows of the syntax tree visible under the current expansion map."""
        if self._result is None:
            return []
        return list(visible_subtree(self._result.ast, self._expansion))

    def toggle(self, path: NodePath) -> bool:
        """
        Flip the expansion flag of the node at 'path'.

        Raises:
            KeyError: If the path does not address a node of the tree.
        """
        root = self._result.ast if self._result is not None else None
        if not is_available(root) or node_at(root, path) is None:
            raise KeyError(tuple(path))
        return self._expansion.toggle(path)

    def apply_toggles(self, paths: Iterable[NodePath]) -> None:
        for path in paths:
            self.toggle(path)

    def tree_summary(self) -> Optional[TreeSummary]:
        return self._memo("tree_summary", lambda r: summarize_tree(r.ast))

    # -------------------------------------------------------------------------
    # SYMBOL VIEWS
    # -------------------------------------------------------------------------

    def symbols(self, criteria: Optional[SymbolFilter] = None) -> Optional[SymbolView]:
        """Filtered symbol rows; None when the table is empty."""
        if self._result is None:
            return None
        return build_symbol_view(self._result.symbol_table, criteria)

    def symbol_statistics(self) -> Optional[SymbolStatistics]:
        return self._memo("symbol_statistics", lambda r: compute_statistics(r.symbol_table))

    def symbol_facets(self) -> SymbolFacets:
        facets = self._memo("symbol_facets", lambda r: facet_values(r.symbol_table))
        return facets if facets is not None else SymbolFacets()

    # -------------------------------------------------------------------------
    # ERROR VIEWS
    # -------------------------------------------------------------------------

    def error_report(self) -> Optional[ErrorReport]:
        return self._memo(
            "error_report",
            lambda r: build_error_report(r.syntax_errors, r.semantic_errors),
        )

    def errors(self, origin: str = ORIGIN_ALL) -> List[TaggedError]:
        """Merged findings restricted to one origin ('syntax', 'semantic', 'all')."""
        merged = self._memo("merged_errors", lambda r: merge_errors(r.syntax_errors, r.semantic_errors))
        if merged is None:
            return []
        return filter_by_origin(merged, origin)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _memo(self, key: str, compute: Any) -> Any:
        if self._result is None:
            return None
        if key not in self._cache:
            self._cache[key] = compute(self._result)
        return self._cache[key]
