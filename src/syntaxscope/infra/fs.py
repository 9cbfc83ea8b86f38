from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user application data directory and reads operator
supplied inputs (source files, saved analyzer payloads) as UTF-8 text.
"""

import json
import os
import sys
from typing import Any, Dict

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "SyntaxScope"
UNIX_APP_DIR_NAME = ".syntaxscope"
STDIN_MARKER = "-"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/SyntaxScope
    - Linux/Mac: ~/.syntaxscope

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    # Idempotent directory creation; a read-only home still yields a usable path
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)

# -----------------------------------------------------------------------------
# INPUT READERS
# -----------------------------------------------------------------------------

def read_source(path: str) -> str:
    """
    Read a source file (or stdin when path is '-') as UTF-8 text.

    Args:
        path: File path or '-'.

    Returns:
        str: Full text content.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    if path == STDIN_MARKER:
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def read_json(path: str) -> Dict[str, Any]:
    """
    Load a JSON object from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, received {type(data).__name__}.")
    return data
