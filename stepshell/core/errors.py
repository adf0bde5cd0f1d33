"""Exception types for stepshell."""


class StepShellError(Exception):
    """Base class for stepshell errors."""


class ConfigurationError(StepShellError):
    """Configuration could not be loaded or is invalid."""


class LLMRequestError(StepShellError):
    """The reasoning service could not be reached or returned an unusable reply."""


class SessionTerminated(StepShellError):
    """The whole session must end (terminate-on-deny policy)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
