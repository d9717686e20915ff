"""
Request Context and Configuration State for Logging.

The request id lives in a ContextVar so concurrent invocations served by
the local FastAPI server do not mix their log lines. In Lambda the id is
the invocation's aws_request_id, which makes CloudWatch lines searchable
by the same id the console shows.

Environment Variables:
    - SPEECH_LAMBDA_LOG_LEVEL: Log level (1-4 or name)
    - SPEECH_LAMBDA_LOG_FORMAT: "console" (default) or "json"
    - SPEECH_LAMBDA_SETTINGS: YAML settings file to read the logging section from
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

# "-" outside of an invocation
_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_log_config: Dict[str, Any] = {}
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Get current request ID from context, or "-" if not set."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """
    Set request ID in context for log correlation.

    Args:
        rid: Lambda aws_request_id, or a 12-char uuid4 prefix locally.
    """
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Get current log level as a human-readable name."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def get_log_config() -> Dict[str, Any]:
    return _log_config


def set_log_config(config: Dict[str, Any]) -> None:
    global _log_config
    _log_config = config


def read_logging_config() -> Dict[str, Any]:
    """
    Resolve logging options from the settings file and environment.

    Environment variables win over the `logging:` section of the YAML
    settings file. A missing or unreadable settings file is not an error
    here: logging must come up even when configuration is broken.

    Returns:
        Dictionary with "level" and "format" keys when set.
    """
    cfg: Dict[str, Any] = {}

    settings_path = os.getenv("SPEECH_LAMBDA_SETTINGS")
    if settings_path:
        try:
            from speech_lambda.core.config import load_settings
            settings = load_settings(settings_path)
            cfg.update(settings.raw.get("logging", {}) or {})
        except Exception:
            # Logging must still come up with a broken settings file
            pass

    if os.getenv("SPEECH_LAMBDA_LOG_LEVEL"):
        cfg["level"] = os.environ["SPEECH_LAMBDA_LOG_LEVEL"]
    if os.getenv("SPEECH_LAMBDA_LOG_FORMAT"):
        cfg["format"] = os.environ["SPEECH_LAMBDA_LOG_FORMAT"]

    return cfg
