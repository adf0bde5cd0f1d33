"""Helper utility functions for stepshell."""

import os
from pathlib import Path
from typing import Any, Dict

from ..utils.logging import logger


def get_nested_value(data: Any, path: str, default: Any = None) -> Any:
    """Access a nested value using a dot-separated path (``choices.0.message``)."""
    keys = path.split('.')
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        elif isinstance(current, list):
            try:
                idx = int(key)
                if 0 <= idx < len(current):
                    current = current[idx]
                else:
                    return default
            except ValueError:
                return default
        else:
            return default
    return current


def get_current_context(working_directory: str) -> Dict[str, str]:
    """Context variables available to the system prompt template."""
    return {
        'current_time': logger.get_current_timestamp(),
        'current_directory': working_directory,
        'current_hostname': os.uname().nodename,
    }


def format_template_string(template: str, **kwargs) -> str:
    """Safely format a template string with context variables."""
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.error(f"Missing template variable: {e}")
        return template
    except (IndexError, ValueError) as e:
        logger.error(f"Template formatting error: {e}")
        return template


def resolve_path(base: str, target: str) -> str:
    """Resolve ``target`` against ``base`` lexically.

    ``~`` is expanded; symlinks are not followed and the result need not exist.
    """
    return os.path.normpath(os.path.join(base, os.path.expanduser(target)))


def safe_file_write(file_path: Path, content: str, description: str = None) -> bool:
    """Safely write content to a file with error handling."""
    desc = description or f"file {file_path}"
    try:
        file_path.write_text(content)
        logger.system(f"Generated {desc}")
        return True
    except OSError as e:
        logger.error(f"Failed to write {desc}: {e}")
        return False
