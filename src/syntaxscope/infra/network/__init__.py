from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the analyzer HTTP client.
"""

from syntaxscope.infra.network.analyzer_client import (
    AnalyzerServiceError,
    analyze_syntax,
    analyze_tokens,
    check_health,
    check_syntax_health,
    fetch_analysis,
    fetch_ast,
    fetch_symbol_table,
    validate_structure,
)
from syntaxscope.infra.network.common import build_url

__all__ = [
    "AnalyzerServiceError",
    "analyze_tokens",
    "analyze_syntax",
    "fetch_analysis",
    "fetch_ast",
    "fetch_symbol_table",
    "validate_structure",
    "check_health",
    "check_syntax_health",
    "build_url",
]
