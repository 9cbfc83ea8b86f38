from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Persistence (Save/Load) without touching real user data.
"""

import json
from unittest.mock import patch

import pytest

from syntaxscope.domain.config import (
    get_default_app_state,
    get_default_config,
    load_app_state,
    load_config,
    save_config,
)
from syntaxscope.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_SERVER_URL


@pytest.fixture
def config_path(tmp_path):
    """
    Redirect the module-level CONFIG_FILE into a temporary directory.
    Prevents tests from reading/writing to the real OS user folder.
    """
    path = tmp_path / "SyntaxScope" / "config.json"
    with patch("syntaxscope.domain.config.CONFIG_FILE", str(path)):
        yield path


def test_load_fresh_state_returns_defaults(config_path):
    """If no config file exists, the default state structure is returned."""
    assert not config_path.exists()
    state = load_app_state()

    assert state == get_default_app_state()
    assert state["version"] == CURRENT_CONFIG_VERSION
    assert state["last_session"]["server_url"] == DEFAULT_SERVER_URL


def test_load_corrupted_file_returns_defaults(config_path):
    """If JSON is malformed, fall back to defaults safely."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{ incomplete json ", encoding="utf-8")

    state = load_app_state()
    assert state == get_default_app_state()


def test_load_non_object_returns_defaults(config_path):
    """A JSON document that is not an object is treated as corrupted."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_app_state() == get_default_app_state()


def test_partial_file_is_merged_with_defaults(config_path):
    """Stored keys override defaults; missing keys are filled in."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        json.dumps({"app_settings": {"locale": "es"}, "last_session": {"symbol_kind": "CLASS"}}),
        encoding="utf-8",
    )

    state = load_app_state()
    assert state["app_settings"]["locale"] == "es"
    assert state["last_session"]["symbol_kind"] == "CLASS"
    assert state["last_session"]["timeout"] == get_default_config()["timeout"]


def test_save_and_reload_roundtrip(config_path):
    """Saved session values are returned by load_config."""
    conf = get_default_config()
    conf["error_origin"] = "syntax"
    save_config(conf)

    assert config_path.exists()
    assert load_config()["error_origin"] == "syntax"


def test_get_default_config_completeness():
    """Default config contains every session key."""
    defaults = get_default_config()
    for k in ("server_url", "timeout", "sections", "expand_all",
              "symbol_kind", "symbol_scope", "include_unused", "error_origin"):
        assert k in defaults
