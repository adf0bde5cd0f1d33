"""Loop controller: drives one user query through plan/action/observe/output steps."""

from enum import Enum
from typing import Optional

from ..constants import EXIT_COMMAND
from ..llm.parsers import parse_step
from ..tools.base import ToolRegistry
from ..tools.confirmation import ConfirmationGate
from ..utils.logging import logger
from .errors import LLMRequestError
from .session import SessionState
from .steps import ParseFailure, Step, StepKind


class LoopState(Enum):
    """Loop controller states."""
    IDLE = "idle"
    AWAITING_MODEL = "awaiting_model"
    DISPATCHING = "dispatching"
    DONE = "done"


class TurnOutcome(Enum):
    """How an outer turn ended."""
    COMPLETED = "completed"
    PARSE_FAILED = "parse_failed"
    REQUEST_FAILED = "request_failed"
    EXIT = "exit"


class LoopController:
    """Owns the transcript, the tracked directory and the conversation handle.

    ``conversation`` is anything with ``send_message(text) -> str`` that keeps
    its own memory of the exchange (see ``llm.client.ChatSession``). The first
    message of a turn is the user query, the message after a plan or observe
    step is empty, and the message after an action is the serialized
    observation so the service sees every tool result.
    """

    def __init__(self, conversation, registry: ToolRegistry, gate: ConfirmationGate,
                 session: Optional[SessionState] = None):
        self.conversation = conversation
        self.registry = registry
        self.gate = gate
        self.session = session or SessionState.create()
        self.state = LoopState.IDLE

    @property
    def transcript(self):
        return self.session.transcript

    @property
    def working_directory(self) -> str:
        return self.session.working_directory

    @staticmethod
    def is_exit(query: str) -> bool:
        return query.strip().lower() == EXIT_COMMAND

    def handle_query(self, query: str) -> TurnOutcome:
        """Run one outer turn for ``query``.

        Returns when the model emits an output step, when its reply cannot be
        parsed, or when the reasoning service fails. Raises SessionTerminated
        if a denial ends the session.
        """
        if self.is_exit(query):
            return TurnOutcome.EXIT

        self.transcript.append_user(query)
        self.state = LoopState.AWAITING_MODEL
        try:
            return self._run_turn(query)
        finally:
            self.state = LoopState.IDLE

    def _run_turn(self, message: str) -> TurnOutcome:
        while True:
            try:
                raw_text = self.conversation.send_message(message)
            except LLMRequestError as e:
                logger.error(f"Reasoning service failed, abandoning this query: {e}")
                return TurnOutcome.REQUEST_FAILED

            parsed = parse_step(raw_text)
            if isinstance(parsed, ParseFailure):
                logger.raw_response(parsed.raw_text)
                logger.debug(f"Parse failure: {parsed.reason}")
                return TurnOutcome.PARSE_FAILED

            logger.step(parsed.kind.value, parsed.display_text)

            if parsed.kind is StepKind.OUTPUT:
                self.transcript.append_model(parsed.serialize())
                self.state = LoopState.DONE
                return TurnOutcome.COMPLETED

            if parsed.kind is StepKind.ACTION:
                self.transcript.append_model(parsed.serialize())
                self.state = LoopState.DISPATCHING
                observation = self.dispatch(parsed)
                logger.step(observation.kind.value, observation.content)
                message = observation.serialize()
                self.transcript.append_model(message)
                self.state = LoopState.AWAITING_MODEL
                continue

            # plan / observe: record and ask for the next step
            self.transcript.append_model(parsed.serialize())
            message = ""

    def dispatch(self, action: Step) -> Step:
        """Run the tool an action names and wrap the outcome as an observe step."""
        tool = self.registry.lookup(action.function)
        if tool is None:
            logger.warning(f"Model asked for unknown tool '{action.function}'")
            return Step.observe(
                f"Unknown tool '{action.function}'. Available tools: {', '.join(self.registry.names)}"
            )

        tool_input = action.tool_input
        if tool.is_side_effecting(tool_input):
            command_text = tool.confirmation_text(tool_input)
            if not self.gate.confirm(command_text):
                return Step.observe(self.gate.deny(command_text))

        logger.tool(f"Dispatching {tool.name}")
        result = tool.execute(tool_input, self.session.working_directory)
        if result.working_directory is not None:
            self.session.working_directory = result.working_directory
        return Step.observe(result.content or "")
