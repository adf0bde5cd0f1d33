"""LLM payload preparation utilities for stepshell."""

import json
from typing import Any, Dict, List, Optional
from pathlib import Path

from ..utils.logging import logger
from ..utils.helpers import get_current_context, format_template_string
from ..constants import DEFAULT_MODEL


class PayloadBuilder:
    """Builds JSON payloads for chat API calls from the payload template."""

    def __init__(self, config: Dict[str, Any], payload_file: Path):
        """Initialize payload builder.

        Args:
            config: Application configuration
            payload_file: Path to payload template file
        """
        self.config = config
        self.payload_file = payload_file
        self._template: Optional[str] = None

    def build_system_prompt(self, working_directory: str, tool_descriptions: str) -> str:
        """Fill the configured system prompt with the current context and tool list."""
        context_vars = get_current_context(working_directory)
        context_vars["available_tools"] = tool_descriptions
        return format_template_string(self.config.get("system_prompt", ""), **context_vars).strip()

    def prepare_payload(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """Prepares the JSON payload for one chat call.

        Args:
            messages: Full chat history, system prompt first

        Returns:
            JSON payload string or None if preparation failed
        """
        template = self._load_template()
        if template is None:
            return None

        model_name = json.dumps(self.config.get("model", DEFAULT_MODEL))[1:-1]
        payload_data_str = template.replace("<model_name>", model_name)
        payload_data_str = payload_data_str.replace('"<messages>"', json.dumps(messages))

        try:
            json.loads(payload_data_str)
        except json.JSONDecodeError as e:
            logger.error(f"{self.payload_file} (after substitutions) is not valid JSON: {e}.")
            logger.debug(f"Problematic payload string: {payload_data_str}")
            return None
        return payload_data_str

    def _load_template(self) -> Optional[str]:
        if self._template is None:
            try:
                self._template = self.payload_file.read_text()
            except OSError as e:
                logger.error(f"Could not read payload template {self.payload_file}: {e}")
                return None
            if '"<messages>"' not in self._template:
                logger.warning(f"{self.payload_file} has no \"<messages>\" placeholder; history will not be sent.")
        return self._template


def create_payload_builder(config: Dict[str, Any], payload_file: Path) -> PayloadBuilder:
    """Create a configured payload builder instance."""
    return PayloadBuilder(config, payload_file)
