"""Utility functions and helpers for stepshell."""

from .logging import logger, Logger
from .helpers import (
    get_nested_value,
    get_current_context,
    format_template_string,
    resolve_path,
    safe_file_write
)

__all__ = [
    "logger",
    "Logger",
    "get_nested_value",
    "get_current_context",
    "format_template_string",
    "resolve_path",
    "safe_file_write",
]
