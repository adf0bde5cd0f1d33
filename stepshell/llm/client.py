"""LLM client and conversation handle for stepshell."""

import json
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..core.errors import LLMRequestError
from ..utils.logging import logger
from .parsers import extract_response_content
from .payload import PayloadBuilder


class LLMClient:
    """Handles HTTP communication with a chat-style LLM API."""

    def __init__(self, config: Dict[str, Any], payload_builder: PayloadBuilder,
                 session: Optional[requests.Session] = None):
        """Initialize LLM client.

        Args:
            config: Application configuration
            payload_builder: Builder for the request body
            session: Optional requests session (tests inject one)
        """
        self.config = config
        self.payload_builder = payload_builder
        self.endpoint = config.get("endpoint", "")
        self.api_key = config.get("api_key")
        self.response_path = config.get("response_path", "")
        # 0 means wait forever
        self.request_timeout = config.get("request_timeout") or None
        self.http = session or requests.Session()

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """Send the chat history and return the reply text.

        Raises:
            LLMRequestError: on transport, HTTP, JSON or response-path failure
        """
        if not self.endpoint:
            raise LLMRequestError("No LLM endpoint configured")

        payload = self.payload_builder.prepare_payload(messages)
        if payload is None:
            raise LLMRequestError("Failed to prepare payload")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        logger.debug(f"Making LLM API call to {self.endpoint} ({len(messages)} messages)")
        try:
            response = self.http.post(self.endpoint, headers=headers,
                                      data=payload.encode("utf-8"), timeout=self.request_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise LLMRequestError(f"LLM API request failed: {e}") from e

        try:
            response_data = response.json()
        except ValueError as e:
            logger.debug(f"Raw response: {response.text}")
            raise LLMRequestError(f"Failed to parse LLM response as JSON: {e}") from e

        content = extract_response_content(response_data, self.response_path)
        if content is None:
            logger.debug(f"Raw response: {json.dumps(response_data)[:2000]}")
            raise LLMRequestError(f"Response path '{self.response_path}' matched nothing")
        return content


class ChatSession:
    """Stateful conversation handle.

    Keeps its own message history (the memory of the reasoning service) and
    sends all of it on every call. A message that fails to get a reply is
    rolled back so the history only holds exchanges the service completed.
    """

    def __init__(self, client: LLMClient, system_prompt: str):
        self.client = client
        self._messages: List[Dict[str, str]] = [{"role": "system", "content": system_prompt}]

    @property
    def history(self) -> Tuple[Dict[str, str], ...]:
        return tuple(dict(message) for message in self._messages)

    def send_message(self, text: str) -> str:
        """Send one user message and return the model reply text."""
        self._messages.append({"role": "user", "content": text})
        try:
            reply = self.client.complete(list(self._messages))
        except LLMRequestError:
            self._messages.pop()
            raise
        self._messages.append({"role": "assistant", "content": reply})
        logger.debug(f"LLM reply: {reply}")
        return reply


def create_llm_client(config: Dict[str, Any], payload_builder: PayloadBuilder) -> LLMClient:
    """Create a configured LLM client instance."""
    return LLMClient(config, payload_builder)
