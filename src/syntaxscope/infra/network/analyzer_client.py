from __future__ import annotations

"""
Analyzer Service Client.

Submits source text to the external analyzer over HTTP/JSON and decodes
its answers into domain snapshots. Transport failures and non-2xx
responses surface as AnalyzerServiceError; health probes report False
instead of raising.
"""

import logging
from typing import Any, Dict, Optional

import requests

from syntaxscope.domain.analysis_models import AnalysisResult, StructureValidation
from syntaxscope.domain.constants import STRUCTURE_TYPES
from syntaxscope.infra.network.common import (
    DEFAULT_SERVER_URL,
    DEFAULT_TIMEOUT,
    JSON_HEADERS,
    USER_AGENT,
    build_url,
)

logger = logging.getLogger(__name__)

HEALTH_TIMEOUT = 3


class AnalyzerServiceError(RuntimeError):
    """Raised when the analyzer cannot be reached or answers with a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# -----------------------------------------------------------------------------
# ANALYSIS ENDPOINTS
# -----------------------------------------------------------------------------

def analyze_tokens(
        code: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """
    Run the lexical analysis endpoint.

    Returns:
        Dict[str, Any]: Raw payload with 'tokens' and 'errors'.
    """
    return _post_json(build_url(base_url, "analyze"), {"code": _require_code(code)}, timeout)


def analyze_syntax(
        code: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """
    Run the full syntax and semantic analysis endpoint.

    Returns:
        Dict[str, Any]: Raw payload with 'ast', 'syntaxErrors',
                        'semanticErrors', 'symbolTable' and 'isValid'.
    """
    return _post_json(build_url(base_url, "syntax/analyze"), {"code": _require_code(code)}, timeout)


def fetch_analysis(
        code: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> AnalysisResult:
    """
    Produce one complete analysis snapshot for a source text.

    Calls the syntax endpoint and the lexical endpoint and combines both
    answers, so the snapshot carries tokens as well as the tree, symbols
    and findings.

    Args:
        code: Source text.
        base_url: Analyzer base URL.
        timeout: Per-request timeout in seconds.

    Returns:
        AnalysisResult: The decoded snapshot.

    Raises:
        ValueError: If the source is blank.
        AnalyzerServiceError: If either request fails.
    """
    syntax_payload = analyze_syntax(code, base_url, timeout)
    lexical_payload = analyze_tokens(code, base_url, timeout)
    result = AnalysisResult.from_payload(syntax_payload, lexical_payload)
    logger.info(
        f"Analysis received: valid={result.is_valid}, {len(result.tokens)} tokens, "
        f"{len(result.syntax_errors) + len(result.semantic_errors)} findings"
    )
    return result


def fetch_ast(
        code: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> AnalysisResult:
    """
    Fetch only the syntax tree.

    Returns:
        AnalysisResult: Snapshot carrying 'ast' and 'is_valid' only.
    """
    payload = _post_json(build_url(base_url, "syntax/ast"), {"code": _require_code(code)}, timeout)
    return AnalysisResult.from_payload({"ast": payload.get("ast"), "isValid": payload.get("isValid")})


def fetch_symbol_table(
        code: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> AnalysisResult:
    """
    Fetch only the symbol table and the semantic findings.

    Returns:
        AnalysisResult: Snapshot carrying 'symbol_table' and 'semantic_errors'.
    """
    payload = _post_json(build_url(base_url, "syntax/symbols"), {"code": _require_code(code)}, timeout)
    return AnalysisResult.from_payload({
        "symbolTable": payload.get("symbolTable"),
        "semanticErrors": payload.get("semanticErrors"),
    })


def validate_structure(
        code: str,
        structure_type: str,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> StructureValidation:
    """
    Check the source against one structure rule set.

    Args:
        code: Source text.
        structure_type: 'for_loop', 'function' or 'variable_declaration'.

    Raises:
        ValueError: On blank source or an unknown structure type.
        AnalyzerServiceError: If the request fails.
    """
    if structure_type not in STRUCTURE_TYPES:
        raise ValueError(
            f"Unknown structure type '{structure_type}'. Expected one of {', '.join(sorted(STRUCTURE_TYPES))}."
        )
    body = {"code": _require_code(code), "structureType": structure_type}
    payload = _post_json(build_url(base_url, "syntax/validate"), body, timeout)
    return StructureValidation.from_payload(payload, structure_type)

# -----------------------------------------------------------------------------
# HEALTH PROBES
# -----------------------------------------------------------------------------

def check_health(base_url: str = DEFAULT_SERVER_URL, timeout: float = HEALTH_TIMEOUT) -> bool:
    """Probe the lexical service; False on any failure."""
    return _probe(build_url(base_url, "health"), timeout)


def check_syntax_health(base_url: str = DEFAULT_SERVER_URL, timeout: float = HEALTH_TIMEOUT) -> bool:
    """Probe the syntax service; False on any failure."""
    return _probe(build_url(base_url, "syntax/health"), timeout)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _require_code(code: str) -> str:
    if code is None or not code.strip():
        raise ValueError("Source code is empty.")
    return code


def _post_json(url: str, body: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    """POST a JSON body and return the decoded JSON object."""
    logger.debug(f"Network: POST {url}")
    try:
        response = requests.post(url, json=body, headers=JSON_HEADERS, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error(f"Network: Analyzer timed out after {timeout}s ({url}).")
        raise AnalyzerServiceError(f"Analyzer timed out after {timeout}s.") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.error(f"Network: Analyzer answered HTTP {status} ({url}).")
        raise AnalyzerServiceError(f"Analyzer answered HTTP {status}.", status_code=status) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Cannot reach analyzer at {url}: {e}")
        raise AnalyzerServiceError(f"Cannot reach analyzer at {url}. Is it running?") from e
    except ValueError as e:
        logger.error(f"Network: Analyzer returned invalid JSON ({url}): {e}")
        raise AnalyzerServiceError("Analyzer returned invalid JSON.") from e

    if not isinstance(data, dict):
        logger.warning("Network: Analyzer payload root is not an object.")
        raise AnalyzerServiceError("Analyzer returned a malformed payload.")
    return data


def _probe(url: str, timeout: float) -> bool:
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.debug(f"Network: Health probe failed for {url}: {e}")
        return False
    return bool(response.ok)
