from __future__ import annotations

"""
Configuration Validation Service.

Ensures that a session configuration dictionary (from disk or CLI flags)
conforms to the expected schema. Handles type coercion, server URL
normalization and enumerated-value checks, filling gaps with defaults.
"""

import logging
from typing import Any, Dict, List, Tuple

from syntaxscope.domain.config import get_default_config
from syntaxscope.domain.constants import ALL, ORIGIN_ALL, SECTION_NAMES, ErrorOrigin, SymbolKind

logger = logging.getLogger(__name__)

_VALID_ORIGINS = [ORIGIN_ALL] + [o.value for o in ErrorOrigin]
_VALID_KINDS = [ALL] + [k.value for k in SymbolKind]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.

    Raises:
        TypeError: In strict mode, on a type mismatch.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Type Coercion
    for field in ("server_url", "symbol_scope"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("include_unused", "expand_all"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["timeout"] = _as_positive_number(merged.get("timeout"), defaults["timeout"], warnings, strict)
    merged["sections"] = _as_list_str(merged.get("sections"), defaults["sections"], "sections", warnings, strict)

    # 3. Domain-Specific Normalization
    merged["server_url"] = merged["server_url"].rstrip("/") or defaults["server_url"]
    merged["sections"] = _normalize_sections(merged["sections"], warnings, strict)
    merged["symbol_kind"] = _as_choice(
        _upper(merged.get("symbol_kind")), _VALID_KINDS, defaults["symbol_kind"], "symbol_kind", warnings, strict
    )
    merged["error_origin"] = _as_choice(
        _lower(merged.get("error_origin")), _VALID_ORIGINS, defaults["error_origin"], "error_origin", warnings,
        strict
    )

    for w in warnings:
        logger.debug(f"Config validation: {w}")

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "si", "sí"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_number(value: Any, fallback: float, warnings: List[str], strict: bool) -> float:
    """Accept ints, floats and numeric strings greater than zero."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and not strict:
        try:
            number = float(value.strip())
        except ValueError:
            number = None
    else:
        number = None

    if number is None:
        msg = f"Invalid field 'timeout': expected number, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number <= 0:
        msg = f"Invalid field 'timeout': must be positive, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return number


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_choice(
        value: Any,
        choices: List[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if value is None:
        return fallback
    if value in choices:
        return value

    msg = f"Invalid field '{field}': '{value}' is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _upper(value: Any) -> Any:
    return value.strip().upper() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_sections(sections: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Keep known report sections, lower-cased and deduplicated, in given order."""
    out: List[str] = []
    for section in sections:
        s = section.strip().lower()
        if s not in SECTION_NAMES:
            if strict:
                raise ValueError(f"Unknown section '{section}'. Expected one of {', '.join(SECTION_NAMES)}.")
            warnings.append(f"Unknown section '{section}' discarded.")
            continue
        if s not in out:
            out.append(s)
    return out if out else list(SECTION_NAMES)
