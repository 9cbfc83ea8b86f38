from __future__ import annotations

"""
Logging Core Orchestrator.

Installs a single QueueHandler on the root logger and drains it from a
background QueueListener that fans records out to the console and the
optional rotating file, so diagnostic I/O never blocks report rendering.
Configuration is idempotent unless explicitly forced.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from syntaxscope.infra.fs import get_user_data_dir
from syntaxscope.infra.logging.config import _LEVEL_MAP, LoggingConfig
from syntaxscope.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_syntaxscope_configured"
_QUEUE_LISTENER_ATTR: str = "_syntaxscope_queue_listener"
_LOG_FILE_ATTR: str = "_syntaxscope_log_file"

DEFAULT_LOG_NAME = "syntaxscope.log"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = DEFAULT_LOG_NAME) -> str:
    """
    Resolve the diagnostic log path within the user data directory.

    Returns:
        str: '<user data dir>/logs/<file_name>'.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, using a queue-based pipeline.

    Args:
        cfg: Logging settings.
        force: Tear down and rebuild an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)

    try:
        root.setLevel(level_int)
        _remove_our_handlers(root)
        _stop_existing_listener(root)

        sinks: List[logging.Handler] = []
        if cfg.console:
            sinks.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh is not None:
                sinks.append(fh)

        if not sinks:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = _tag_handler(QueueHandler(log_queue))

        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _LOG_FILE_ATTR, cfg.log_file)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        atexit.register(_safe_stop_listener, listener)
        return root

    except (OSError, ValueError, RuntimeError) as e:
        # Emergency console so diagnostics are never lost entirely
        _remove_our_handlers(root)
        _stop_existing_listener(root)
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("LOGGING FALLBACK | %(levelname)s | %(message)s"))
        root.addHandler(_tag_handler(sh))
        root.warning(f"Logging setup failed ({e}). Using emergency console.")
        return root


def shutdown_logging() -> None:
    """Flush pending records and stop the listener thread."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger.

    Args:
        name: Hierarchical logger name (usually __name__).

    Returns:
        logging.Logger: The requested logger.
    """
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the tail of the diagnostic log file.

    Args:
        n_lines: Maximum number of trailing lines.
        log_path: Explicit file; defaults to the configured file, then to
                  the default log path.

    Returns:
        str: The tail, or a short notice when no log exists.
    """
    path = log_path or getattr(logging.getLogger(), _LOG_FILE_ATTR, None) or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError as e:
        return f"Error retrieving logs: {e}"
    return "".join(lines[-n_lines:])


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener; a second stop (atexit after a reset) is a no-op."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
