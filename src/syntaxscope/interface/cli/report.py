from __future__ import annotations

"""
CLI Report Rendering.

View layer of the CLI: turns the projections of an AnalysisSession into
localized terminal lines or a JSON-serializable document. Holds no
analysis logic of its own.
"""

from typing import Any, Dict, List, Optional, Sequence

from syntaxscope.core.errors.aggregator import humanize_error_type
from syntaxscope.core.services.session import AnalysisSession
from syntaxscope.core.symbols.filter_engine import symbols_with_attributes
from syntaxscope.core.tree.renderer import node_label, render_visible
from syntaxscope.domain.analysis_models import (
    SemanticErrorRecord,
    StructureValidation,
    Symbol,
    SyntaxErrorRecord,
    SyntaxNode,
    Token,
)
from syntaxscope.domain.constants import ORIGIN_ALL, node_category
from syntaxscope.domain.view_models import SymbolFilter, TaggedError
from syntaxscope.utils.i18n import i18n

RULE = "-" * 60

# -----------------------------------------------------------------------------
# TEXT REPORT
# -----------------------------------------------------------------------------

def render_text(
        session: AnalysisSession,
        sections: Sequence[str],
        criteria: Optional[SymbolFilter] = None,
        origin: str = ORIGIN_ALL,
) -> List[str]:
    """
    Render the requested report sections as terminal lines.

    Args:
        session: Session holding the current snapshot.
        sections: Section names in display order.
        criteria: Symbol facet selection.
        origin: Error origin filter.

    Returns:
        List[str]: Lines ready for printing.
    """
    renderers = {
        "tokens": lambda: _tokens_section(session),
        "tree": lambda: _tree_section(session),
        "symbols": lambda: _symbols_section(session, criteria),
        "errors": lambda: _errors_section(session, origin),
    }
    lines: List[str] = []
    for name in sections:
        render = renderers.get(name)
        if render is None:
            continue
        if lines:
            lines.append("")
        lines.extend(render())
    return lines


def render_structure(validation: StructureValidation) -> List[str]:
    """Render the verdict of a structure check."""
    lines = [i18n.t("report.structure_title", structure=validation.structure_type), RULE]
    status = i18n.t("cli.status.valid") if validation.is_valid else i18n.t("cli.status.invalid")
    lines.append(status)
    if validation.structure_errors:
        lines.append(i18n.t("report.structure_errors", count=len(validation.structure_errors)))
        lines.extend(f"  {_describe_record(e)}" for e in validation.structure_errors)
    if validation.general_errors:
        lines.append(i18n.t("report.general_errors", count=len(validation.general_errors)))
        lines.extend(f"  {_describe_record(e)}" for e in validation.general_errors)
    return lines


def _tokens_section(session: AnalysisSession) -> List[str]:
    result = session.result
    tokens = result.tokens if result is not None else ()
    lines = [i18n.t("report.tokens_title", count=len(tokens)), RULE]
    if not tokens:
        lines.append(i18n.t("report.no_tokens"))
    for token in tokens:
        label = i18n.t(f"labels.token.{token.type_name}", default=token.type_name or "?")
        lines.append(f"  {token.line:>4}:{token.position:<4} {label:<18} {token.value}")

    if result is not None and result.lexical_errors:
        lines.append(i18n.t("report.lexical_errors_title", count=len(result.lexical_errors)))
        for err in result.lexical_errors:
            location = i18n.t("report.error_location", line=err.line, position=err.position)
            lines.append(f"  {location}: {err.message}")
    return lines


def _tree_section(session: AnalysisSession) -> List[str]:
    lines = [i18n.t("report.tree_title"), RULE]
    summary = session.tree_summary()
    if summary is None:
        lines.append(i18n.t("report.no_tree"))
        return lines

    lines.append(i18n.t(
        "report.tree_summary",
        root=node_label(summary.root_type_name),
        children=summary.child_count,
        line=summary.line,
        position=summary.position,
    ))
    lines.extend(render_visible(session.visible_tree()))
    return lines


def _symbols_section(session: AnalysisSession, criteria: Optional[SymbolFilter]) -> List[str]:
    view = session.symbols(criteria)
    if view is None:
        return [i18n.t("report.symbols_title", count=0), RULE, i18n.t("report.no_symbols")]

    stats = view.statistics
    lines = [
        i18n.t("report.symbols_title", count=len(view.rows)),
        RULE,
        i18n.t(
            "report.symbol_stats",
            total=stats.total,
            used=stats.used,
            unused=stats.unused,
            functions=stats.functions,
        ),
    ]
    if not view.rows:
        lines.append(i18n.t("report.no_matching_symbols"))
        return lines

    lines.extend(f"  {_describe_symbol(s)}" for s in view.rows)

    detailed = symbols_with_attributes(view.rows)
    if detailed:
        lines.append(i18n.t("report.symbol_details"))
        for symbol in detailed:
            attrs = ", ".join(f"{k}: {v}" for k, v in symbol.attributes.items())
            lines.append(f"  {symbol.name}: {attrs}")
    return lines


def _errors_section(session: AnalysisSession, origin: str) -> List[str]:
    report = session.error_report()
    if report is None:
        return [i18n.t("report.errors_title", count=0), RULE, i18n.t("report.no_errors")]

    combined = report.combined_counts
    lines = [
        i18n.t("report.errors_title", count=report.total_errors),
        RULE,
        i18n.t(
            "report.error_stats",
            errors=combined.errors,
            warnings=combined.warnings,
            syntax=report.syntax_total,
            semantic=report.semantic_total,
        ),
    ]
    lines.extend(f"  {_describe_tagged(e)}" for e in session.errors(origin))

    for title_key, types in (
            ("report.common_syntax", report.syntax_common_types),
            ("report.common_semantic", report.semantic_common_types),
    ):
        if types:
            lines.append(i18n.t(title_key))
            lines.extend(f"  {humanize_error_type(t)}: {n}" for t, n in types.items())

    if report.hints:
        lines.append(i18n.t("report.hints_title"))
        lines.extend(f"  * {i18n.t(key)}" for key in report.hints)
    return lines


def _describe_symbol(symbol: Symbol) -> str:
    kind = i18n.t(f"labels.symbol.{symbol.kind_name}", default=symbol.kind_name or "?")
    usage = i18n.t("report.used") if symbol.used else i18n.t("report.unused")
    return (
        f"{symbol.name}: {symbol.type} [{kind}] scope={symbol.scope} "
        f"({symbol.line}:{symbol.position}) {usage}"
    )


def _describe_tagged(error: TaggedError) -> str:
    origin = i18n.t(f"labels.origin.{error.origin.value}", default=error.origin.value)
    return f"[{origin}] {_describe_record(error.record)}"


def _describe_record(record: Any) -> str:
    severity_key = record.severity.value if record.severity is not None else "WARNING"
    severity = i18n.t(f"labels.severity.{severity_key}", default=severity_key)
    location = i18n.t("report.error_location", line=record.line, position=record.position)
    text = f"{severity} {humanize_error_type(record.error_type)} ({location}): {record.message}"

    if isinstance(record, SyntaxErrorRecord) and (record.expected or record.found):
        text += " - " + i18n.t("report.expected_found", expected=record.expected or "", found=record.found or "")
    if isinstance(record, SemanticErrorRecord) and record.symbol:
        text += " - " + i18n.t("report.symbol_ref", symbol=record.symbol)
    return text

# -----------------------------------------------------------------------------
# JSON REPORT
# -----------------------------------------------------------------------------

def build_json(
        session: AnalysisSession,
        sections: Sequence[str],
        criteria: Optional[SymbolFilter] = None,
        origin: str = ORIGIN_ALL,
) -> Dict[str, Any]:
    """
    Build a JSON-serializable document of the requested sections.

    Args:
        session: Session holding the current snapshot.
        sections: Section names to include.
        criteria: Symbol facet selection.
        origin: Error origin filter.

    Returns:
        Dict[str, Any]: The report document.
    """
    result = session.result
    doc: Dict[str, Any] = {"is_valid": bool(result.is_valid) if result is not None else False}
    if result is not None:
        doc["contract_violations"] = result.contract_violations()

    if "tokens" in sections and result is not None:
        doc["tokens"] = [_token_json(t) for t in result.tokens]
        doc["lexical_errors"] = [
            {"message": e.message, "line": e.line, "position": e.position} for e in result.lexical_errors
        ]

    if "tree" in sections:
        summary = session.tree_summary()
        doc["tree"] = None if summary is None else {
            "summary": {
                "root_type": summary.root_type_name,
                "root_value": summary.root_value,
                "child_count": summary.child_count,
                "line": summary.line,
                "position": summary.position,
                "has_errors": summary.has_errors,
                "node_type_counts": summary.node_type_counts,
                "depth": summary.depth,
                "node_count": summary.node_count,
            },
            "visible": [
                {
                    "path": list(row.path),
                    "depth": row.depth,
                    "expanded": row.expanded,
                    "is_last_sibling": row.is_last_sibling,
                    "node": _node_json(row.node),
                }
                for row in session.visible_tree()
            ],
        }

    if "symbols" in sections:
        view = session.symbols(criteria)
        doc["symbols"] = None if view is None else {
            "rows": [_symbol_json(s) for s in view.rows],
            "facets": {
                "kinds": list(view.facets.kinds),
                "scopes": list(view.facets.scopes),
            },
            "statistics": {
                "total": view.statistics.total,
                "used": view.statistics.used,
                "unused": view.statistics.unused,
                "by_kind": {getattr(k, "value", k): n for k, n in view.statistics.by_kind.items()},
            },
        }

    if "errors" in sections:
        report = session.error_report()
        doc["errors"] = None if report is None else {
            "merged": [_tagged_json(e) for e in session.errors(origin)],
            "counts": {
                "syntax": {"errors": report.syntax_counts.errors, "warnings": report.syntax_counts.warnings},
                "semantic": {"errors": report.semantic_counts.errors, "warnings": report.semantic_counts.warnings},
                "total": report.total_errors,
            },
            "common_types": {
                "syntax": report.syntax_common_types,
                "semantic": report.semantic_common_types,
            },
            "hints": [i18n.t(key) for key in report.hints],
        }

    return doc


def structure_json(validation: StructureValidation) -> Dict[str, Any]:
    return {
        "structure_type": validation.structure_type,
        "is_valid": validation.is_valid,
        "structure_errors": [_record_json(e) for e in validation.structure_errors],
        "general_errors": [_record_json(e) for e in validation.general_errors],
    }


def _token_json(token: Token) -> Dict[str, Any]:
    return {"type": token.type_name, "value": token.value, "line": token.line, "position": token.position}


def _node_json(node: SyntaxNode) -> Dict[str, Any]:
    return {
        "type": node.type_name or None,
        "category": node_category(node.node_type) if node.node_type is not None else None,
        "value": node.value,
        "line": node.line,
        "position": node.position,
        "child_count": len(node.children),
        "attributes": dict(node.attributes),
    }


def _symbol_json(symbol: Symbol) -> Dict[str, Any]:
    return {
        "name": symbol.name,
        "type": symbol.type,
        "kind": symbol.kind_name,
        "line": symbol.line,
        "position": symbol.position,
        "scope": symbol.scope,
        "used": symbol.used,
        "attributes": dict(symbol.attributes),
    }


def _record_json(record: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "message": record.message,
        "line": record.line,
        "position": record.position,
        "error_type": record.error_type,
        "severity": record.severity.value if record.severity is not None else None,
    }
    if isinstance(record, SyntaxErrorRecord):
        data.update(expected=record.expected, found=record.found)
    elif isinstance(record, SemanticErrorRecord):
        data.update(symbol=record.symbol, symbol_type=record.symbol_type)
    return data


def _tagged_json(error: TaggedError) -> Dict[str, Any]:
    data = _record_json(error.record)
    data["origin"] = error.origin.value
    return data
