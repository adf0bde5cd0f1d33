"""Interactive confirmation in front of side-effecting tools."""

from enum import Enum
from typing import Callable

from ..constants import (
    CLR_BOLD_YELLOW, CLR_GREEN, CLR_RESET, DENY_ANSWER, PERMISSION_DENIED_MESSAGE, PROMPT
)
from ..core.errors import SessionTerminated
from ..utils.logging import logger


class DenialPolicy(Enum):
    """What a "no" at the confirmation prompt does to the session."""
    TERMINATE = "terminate"
    REPORT = "report"


class ConfirmationGate:
    """Yes/no guard for side-effecting actions.

    Only the exact answer ``n`` denies; anything else, including an empty
    line, approves.
    """

    def __init__(self, policy: DenialPolicy = DenialPolicy.REPORT,
                 input_func: Callable[[str], str] = input):
        self.policy = policy
        self.input_func = input_func

    def confirm(self, command_text: str) -> bool:
        """Show the command and read one line; False only for ``n``.

        Closed input counts as ``n``.
        """
        try:
            answer = self.input_func(
                f"\n You want to execute this command {CLR_BOLD_YELLOW}'{command_text}'{CLR_RESET}"
                f"{CLR_GREEN}(y/n) {CLR_RESET}{PROMPT}"
            )
        except EOFError:
            logger.warning(f"Input closed while confirming '{command_text}'")
            answer = DENY_ANSWER
        approved = answer != DENY_ANSWER
        logger.debug(f"Confirmation for '{command_text}': {answer!r} -> {'approved' if approved else 'denied'}")
        return approved

    def deny(self, command_text: str) -> str:
        """Apply the denial policy.

        Raises SessionTerminated under the terminate policy, otherwise returns
        the observation content fed back to the model.
        """
        if self.policy is DenialPolicy.TERMINATE:
            logger.user(f"Denied '{command_text}'. Ending session.")
            raise SessionTerminated(f"User denied '{command_text}'")
        logger.user(f"Denied '{command_text}'. Reporting to the model.")
        return PERMISSION_DENIED_MESSAGE


def create_confirmation_gate(policy: str = "report",
                             input_func: Callable[[str], str] = input) -> ConfirmationGate:
    """Create a gate from a policy name ("terminate" or "report")."""
    return ConfirmationGate(DenialPolicy(policy), input_func)
