"""LLM response parsing utilities for stepshell."""

import json
import re
from typing import Any, Optional

from ..core.steps import ParseFailure, ParseResult, Step, StepKind
from ..utils.helpers import get_nested_value
from ..utils.logging import logger


def parse_step(raw_text: str) -> ParseResult:
    """Parse one model reply into a Step.

    Malformed replies are an expected outcome: they come back as a
    ``ParseFailure`` carrying the untouched text, never as an exception.
    """
    if not isinstance(raw_text, str):
        return ParseFailure(str(raw_text), "reply is not text")

    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, ValueError, RecursionError) as e:
        return ParseFailure(raw_text, f"invalid JSON: {e}")

    if not isinstance(data, dict):
        return ParseFailure(raw_text, "top-level value is not an object")

    step_value = data.get("step")
    if not isinstance(step_value, str):
        return ParseFailure(raw_text, "missing 'step'")

    kind = StepKind.from_text(step_value.strip())
    if kind is None:
        return ParseFailure(raw_text, f"unknown step '{step_value}'")

    content = data.get("content", "")
    if content is None:
        content = ""
    if not isinstance(content, str):
        return ParseFailure(raw_text, "'content' is not a string")

    function = data.get("function")
    tool_input = data.get("input")

    if kind is StepKind.ACTION:
        if not isinstance(function, str) or not function.strip():
            return ParseFailure(raw_text, "action step without a function name")
        if tool_input is not None and not isinstance(tool_input, (str, dict)):
            return ParseFailure(raw_text, "'input' must be a string or an object")
        return Step.action(function.strip(), tool_input, content)

    # Models often echo an empty function on non-action steps; only a real name is an error
    if function not in (None, ""):
        return ParseFailure(raw_text, f"{kind.value} step names a function")

    return Step(kind, content)


def _jq_path_to_dotted(response_path: str) -> str:
    """Turn ``.choices[0].message.content`` into ``choices.0.message.content``."""
    return re.sub(r"\[(\d+)\]", r".\1", response_path.lstrip('.'))


def extract_response_content(response_data: Any, response_path: str) -> Optional[str]:
    """Extract the reply text from an LLM response using a jq-like path.

    Args:
        response_data: LLM response JSON data
        response_path: jq-like path (e.g., ".message.content", ".choices[0].message.content")

    Returns:
        Extracted content or None if not found
    """
    if not response_path.startswith('.'):
        logger.warning(f"Response path should start with '.': {response_path}")
        return None

    value = get_nested_value(response_data, _jq_path_to_dotted(response_path))
    if value is None:
        return None
    return value if isinstance(value, str) else json.dumps(value)
