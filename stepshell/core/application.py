"""Main application class for stepshell."""

import signal
import sys
from typing import Optional
from pathlib import Path

from ..config.manager import create_config_manager
from ..constants import CLR_BOLD_RED, CLR_RESET, PROMPT
from ..llm import ChatSession, create_llm_client, create_payload_builder
from ..tools import create_confirmation_gate, create_default_registry
from ..utils.logging import logger
from .errors import SessionTerminated
from .loop import LoopController, TurnOutcome
from .session import SessionState


class StepShell:
    """Main application class for stepshell."""

    def __init__(self, config_dir: Optional[str] = None, debug: bool = False,
                 denial_policy: Optional[str] = None):
        """Initialize the stepshell application.

        Args:
            config_dir: Custom configuration directory path
            debug: Enable debug logging
            denial_policy: Overrides the configured denial policy
        """
        logger.set_debug(debug)

        config_path = Path(config_dir) if config_dir else None
        self.config_manager = create_config_manager(config_path)
        if self.config_manager is None:
            sys.exit(0)

        self.config = self.config_manager.config
        if denial_policy:
            self.config["denial_policy"] = denial_policy

        if not debug and self.config.get("enable_debug", False):
            logger.set_debug(True)

        self.session = SessionState.create()
        self.registry = create_default_registry()
        self.gate = create_confirmation_gate(self.config["denial_policy"])

        payload_builder = create_payload_builder(self.config, self.config_manager.payload_file)
        system_prompt = payload_builder.build_system_prompt(
            self.session.working_directory, self.registry.describe()
        )
        self.conversation = ChatSession(create_llm_client(self.config, payload_builder), system_prompt)
        self.loop = LoopController(self.conversation, self.registry, self.gate, self.session)

        self._setup_signal_handlers()

        logger.debug("Application initialization complete")

    def handle_query(self, query: str) -> TurnOutcome:
        """Run one outer turn; a terminate-on-deny ends the process here."""
        try:
            return self.loop.handle_query(query)
        except SessionTerminated as e:
            logger.system(f"Session terminated: {e.reason}")
            sys.exit(0)

    def run_interactive_mode(self) -> None:
        """Read queries at the prompt until 'exit' or end of input."""
        logger.system("Starting interactive mode. Type 'exit' or press Ctrl+D to stop.")
        logger.system(f"Denial policy: {self.gate.policy.value}")

        while True:
            try:
                query = input(f"\n{CLR_BOLD_RED}{PROMPT}{CLR_RESET}")
            except KeyboardInterrupt:
                logger.system("\nUse 'exit' to stop gracefully")
                continue
            except EOFError:
                logger.system("\nGoodbye!")
                break

            if not query.strip():
                continue

            try:
                outcome = self.handle_query(query)
            except KeyboardInterrupt:
                logger.system("\nQuery interrupted by user")
                continue

            if outcome is TurnOutcome.EXIT:
                logger.system("Goodbye!")
                break
            if outcome is not TurnOutcome.COMPLETED:
                logger.warning("Query ended without an output step")

    def run_single_task(self, query: str) -> bool:
        """Run a single query and report whether it produced an output step."""
        return self.handle_query(query) is TurnOutcome.COMPLETED

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(sig, frame):
            logger.system(f"Received signal {sig}, shutting down gracefully...")
            sys.exit(0)

        signal.signal(signal.SIGTERM, signal_handler)
        if hasattr(signal, 'SIGHUP'):
            signal.signal(signal.SIGHUP, signal_handler)

    def get_config_summary(self) -> dict:
        """Get a summary of the current configuration."""
        return {
            "endpoint": self.config.get("endpoint", "Not set"),
            "model": self.config.get("model", "Not set"),
            "response_path": self.config.get("response_path", "Not set"),
            "denial_policy": self.config.get("denial_policy"),
            "request_timeout": self.config.get("request_timeout"),
            "enable_debug": self.config.get("enable_debug", False),
            "api_key_set": bool(self.config.get("api_key")),
            "tools": ", ".join(self.registry.names),
        }

    def print_config_summary(self) -> None:
        """Print a summary of the current configuration."""
        logger.system("Configuration Summary:")
        for key, value in self.get_config_summary().items():
            logger.system(f"  {key}: {value}")


def create_application(config_dir: Optional[str] = None, debug: bool = False,
                       denial_policy: Optional[str] = None) -> StepShell:
    """Create and initialize a StepShell application instance."""
    return StepShell(config_dir, debug, denial_policy)
