from __future__ import annotations

"""
Symbol Table Filtering and Statistics Engine.

Narrows the symbol table through composable facet predicates (kind, scope,
usage) and summarizes it. Filtering is a stable subsequence operation;
statistics and facets are always computed over the unfiltered table so
summary counts stay put while the operator adjusts filters.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from syntaxscope.domain.analysis_models import Symbol
from syntaxscope.domain.constants import ALL, SymbolKind
from syntaxscope.domain.view_models import SymbolFacets, SymbolFilter, SymbolStatistics, SymbolView

logger = logging.getLogger(__name__)

SymbolPredicate = Callable[[Symbol], bool]

# -----------------------------------------------------------------------------
# PREDICATES
# -----------------------------------------------------------------------------

def kind_predicate(kind: str) -> SymbolPredicate:
    """Exact kind match; ALL matches every symbol."""
    if kind == ALL:
        return lambda symbol: True
    return lambda symbol: symbol.kind_name == kind


def scope_predicate(scope: str) -> SymbolPredicate:
    """Exact scope string match; ALL matches every symbol."""
    if scope == ALL:
        return lambda symbol: True
    return lambda symbol: symbol.scope == scope


def usage_predicate(include_unused: bool) -> SymbolPredicate:
    """Pass everything when unused symbols are included, else only used ones."""
    return lambda symbol: include_unused or symbol.used


def build_predicates(criteria: SymbolFilter) -> List[SymbolPredicate]:
    return [
        kind_predicate(criteria.kind),
        scope_predicate(criteria.scope),
        usage_predicate(criteria.include_unused),
    ]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def filter_symbols(
        table: Iterable[Symbol],
        criteria: Optional[SymbolFilter] = None,
) -> List[Symbol]:
    """
    Select the symbols satisfying every active facet (logical AND).

    Args:
        table: Symbols in declaration order.
        criteria: Facet selection; defaults to "show everything".

    Returns:
        List[Symbol]: Matching symbols in their original relative order.
    """
    predicates = build_predicates(criteria or SymbolFilter())
    return [symbol for symbol in table if all(p(symbol) for p in predicates)]


def facet_values(table: Iterable[Symbol]) -> SymbolFacets:
    """
    Collect the distinct kinds and scopes present in the table.

    Args:
        table: Symbols in declaration order.

    Returns:
        SymbolFacets: Deduplicated values in first-seen order.
    """
    kinds: Dict[str, None] = {}
    scopes: Dict[str, None] = {}
    for symbol in table:
        kinds.setdefault(symbol.kind_name, None)
        scopes.setdefault(symbol.scope, None)
    return SymbolFacets(kinds=tuple(kinds), scopes=tuple(scopes))


def compute_statistics(table: Sequence[Symbol]) -> Optional[SymbolStatistics]:
    """
    Count symbols by usage and kind over the whole table.

    Args:
        table: The unfiltered symbol table.

    Returns:
        Optional[SymbolStatistics]: None for an empty table (no symbols).
    """
    if not table:
        return None

    by_kind: Dict[Union[SymbolKind, str], int] = {kind: 0 for kind in SymbolKind}
    used = 0
    for symbol in table:
        key = symbol.kind if symbol.kind is not None else symbol.raw_kind
        by_kind[key] = by_kind.get(key, 0) + 1
        if symbol.used:
            used += 1

    return SymbolStatistics(
        total=len(table),
        used=used,
        unused=len(table) - used,
        by_kind=by_kind,
    )


def build_symbol_view(
        table: Sequence[Symbol],
        criteria: Optional[SymbolFilter] = None,
) -> Optional[SymbolView]:
    """
    Assemble filtered rows together with facets and statistics.

    Args:
        table: The unfiltered symbol table.
        criteria: Facet selection.

    Returns:
        Optional[SymbolView]: None when the table is empty.
    """
    statistics = compute_statistics(table)
    if statistics is None:
        return None

    criteria = criteria or SymbolFilter()
    rows = filter_symbols(table, criteria)
    logger.debug(
        f"Symbol filter kind={criteria.kind} scope={criteria.scope} "
        f"include_unused={criteria.include_unused}: {len(rows)}/{statistics.total} rows"
    )
    return SymbolView(
        rows=rows,
        facets=facet_values(table),
        statistics=statistics,
        criteria=criteria,
    )


def symbols_with_attributes(rows: Iterable[Symbol]) -> List[Symbol]:
    """Return the rows carrying extra attributes, in order."""
    return [symbol for symbol in rows if symbol.attributes]
