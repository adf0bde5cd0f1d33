"""Core data model and loop for stepshell."""

from .errors import StepShellError, ConfigurationError, LLMRequestError, SessionTerminated
from .session import SessionState
from .steps import Step, StepKind, ParseFailure
from .transcript import Role, Turn, Transcript

__all__ = [
    "StepShellError",
    "ConfigurationError",
    "LLMRequestError",
    "SessionTerminated",
    "SessionState",
    "Step",
    "StepKind",
    "ParseFailure",
    "Role",
    "Turn",
    "Transcript",
]
