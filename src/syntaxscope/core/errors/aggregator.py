from __future__ import annotations

"""
Error Aggregation Engine.

Combines the parser's and the checker's independently ordered findings
into one ranked report. Each record is tagged with its origin, the two
streams are concatenated (syntax first) and stably sorted by source
location, then classified by severity and error type.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Union

from syntaxscope.domain.analysis_models import ErrorRecord, SemanticErrorRecord, SyntaxErrorRecord
from syntaxscope.domain.constants import ORIGIN_ALL, ErrorOrigin, Severity
from syntaxscope.domain.view_models import ErrorReport, SeverityCounts, TaggedError

logger = logging.getLogger(__name__)

Finding = Union[ErrorRecord, TaggedError]

# Semantic error types with a dedicated remediation tip
_SEMANTIC_HINTS: Dict[str, str] = {
    "UNDEFINED_VARIABLE": "report.hints.declare_before_use",
    "TYPE_MISMATCH": "report.hints.compatible_types",
    "REDECLARATION": "report.hints.avoid_redeclaration",
}
_SYNTAX_HINT = "report.hints.balance_delimiters"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def tag_errors(stream: Iterable[ErrorRecord], origin: ErrorOrigin) -> List[TaggedError]:
    """
    Attach an origin marker to every record of a stream.

    Args:
        stream: Records in analyzer order.
        origin: Phase that produced the stream.

    Returns:
        List[TaggedError]: Tagged records, same order, records untouched.
    """
    origin = ErrorOrigin(origin)
    return [TaggedError(origin=origin, record=record) for record in stream]


def merge_errors(
        syntax_errors: Iterable[SyntaxErrorRecord],
        semantic_errors: Iterable[SemanticErrorRecord],
) -> List[TaggedError]:
    """
    Merge both streams into a single list ordered by source location.

    The syntax stream is placed before the semantic stream and the
    combined list is sorted by (line, position). 'sorted' is stable, so
    findings sharing a location keep syntax before semantic and their
    original order within each stream.

    Args:
        syntax_errors: Parser findings.
        semantic_errors: Checker findings.

    Returns:
        List[TaggedError]: The ranked, tagged findings.
    """
    combined = tag_errors(syntax_errors, ErrorOrigin.SYNTAX) + tag_errors(semantic_errors, ErrorOrigin.SEMANTIC)
    return sorted(combined, key=lambda e: (e.line, e.position))


def filter_by_origin(merged: Sequence[TaggedError], origin: str) -> List[TaggedError]:
    """
    Keep the findings of one origin, preserving merge order.

    Args:
        merged: Output of 'merge_errors'.
        origin: 'syntax', 'semantic' or 'all' (identity).

    Returns:
        List[TaggedError]: Matching findings.

    Raises:
        ValueError: If the origin is not recognized.
    """
    if origin == ORIGIN_ALL:
        return list(merged)
    wanted = ErrorOrigin(origin)
    return [e for e in merged if e.origin == wanted]


def classify(stream: Iterable[Finding]) -> SeverityCounts:
    """
    Partition findings into ERROR and WARNING counts.

    Records without a severity count as warnings so they are never
    silently dropped from the totals.

    Args:
        stream: Raw or tagged findings.

    Returns:
        SeverityCounts: Error and warning counts.
    """
    errors = 0
    warnings = 0
    for finding in stream:
        if finding.severity == Severity.ERROR:
            errors += 1
        else:
            warnings += 1
    return SeverityCounts(errors=errors, warnings=warnings)


def common_types(stream: Iterable[Finding]) -> Dict[str, int]:
    """
    Count occurrences of each distinct error type.

    Args:
        stream: Raw or tagged findings.

    Returns:
        Dict[str, int]: Occurrences per error type in first-seen order.
    """
    return dict(Counter(finding.error_type for finding in stream))


def fix_hints(
        syntax_errors: Sequence[SyntaxErrorRecord],
        semantic_errors: Sequence[SemanticErrorRecord],
) -> List[str]:
    """
    Select remediation tips that apply to the reported findings.

    Returns:
        List[str]: Locale keys of the applicable tips.
    """
    hints: List[str] = []
    if syntax_errors:
        hints.append(_SYNTAX_HINT)
    present = {e.error_type for e in semantic_errors}
    for error_type, hint in _SEMANTIC_HINTS.items():
        if error_type in present:
            hints.append(hint)
    return hints


def humanize_error_type(error_type: str) -> str:
    """Render 'UNEXPECTED_TOKEN' as 'UNEXPECTED TOKEN'."""
    return error_type.replace("_", " ")


def build_error_report(
        syntax_errors: Sequence[SyntaxErrorRecord],
        semantic_errors: Sequence[SemanticErrorRecord],
) -> Union[ErrorReport, None]:
    """
    Produce the complete ranked report for both streams.

    Args:
        syntax_errors: Parser findings.
        semantic_errors: Checker findings.

    Returns:
        Optional[ErrorReport]: None when both streams are empty (no errors).
    """
    if not syntax_errors and not semantic_errors:
        return None

    report = ErrorReport(
        merged=merge_errors(syntax_errors, semantic_errors),
        syntax_counts=classify(syntax_errors),
        semantic_counts=classify(semantic_errors),
        syntax_total=len(syntax_errors),
        semantic_total=len(semantic_errors),
        syntax_common_types=common_types(syntax_errors),
        semantic_common_types=common_types(semantic_errors),
        hints=fix_hints(syntax_errors, semantic_errors),
    )
    logger.debug(
        f"Error report: {report.total_errors} findings "
        f"({report.combined_counts.errors} errors, {report.combined_counts.warnings} warnings)"
    )
    return report
