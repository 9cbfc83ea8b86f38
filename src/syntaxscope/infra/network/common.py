from __future__ import annotations

from syntaxscope.domain.constants import APP_VERSION, DEFAULT_SERVER_URL, DEFAULT_TIMEOUT

USER_AGENT = f"SyntaxScope-Client/{APP_VERSION}"
JSON_HEADERS = {"User-Agent": USER_AGENT, "Content-Type": "application/json"}

__all__ = ["USER_AGENT", "JSON_HEADERS", "DEFAULT_TIMEOUT", "DEFAULT_SERVER_URL", "build_url"]


def build_url(base_url: str, endpoint: str) -> str:
    """Join the analyzer base URL and an endpoint without doubling slashes."""
    return f"{(base_url or DEFAULT_SERVER_URL).rstrip('/')}/{endpoint.lstrip('/')}"
