"""Command execution utilities for stepshell."""

import subprocess

from ..utils.logging import logger


class CommandResult:
    """Represents the result of a command execution.

    Output goes straight to the terminal, so only the status is kept.
    """

    def __init__(self,
                 command: str,
                 exit_code: int,
                 error_message: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.error_message = error_message

    @property
    def success(self) -> bool:
        """Whether the command executed successfully."""
        return self.exit_code == 0 and not self.error_message

    def __str__(self) -> str:
        if self.error_message:
            return f"Command '{self.command}' failed: {self.error_message}"
        return f"Command '{self.command}' exited with status {self.exit_code}"


class CommandExecutor:
    """Runs shell commands with their streams attached to the terminal."""

    def execute(self, command: str, cwd: str) -> CommandResult:
        """Execute a shell command in ``cwd`` and block until it finishes.

        Args:
            command: Shell command to execute
            cwd: Working directory for the child process

        Returns:
            CommandResult object with execution details
        """
        logger.command(f"Executing command: {command} (in {cwd})")

        try:
            process = subprocess.run(command, shell=True, cwd=cwd)
        except (OSError, ValueError) as e:
            error_msg = f"could not start: {e}"
            logger.error(f"Command '{command}' {error_msg}")
            return CommandResult(command=command, exit_code=-1, error_message=error_msg)

        result = CommandResult(command=command, exit_code=process.returncode)
        if result.success:
            logger.debug(f"Command completed with exit code {result.exit_code}")
        else:
            logger.warning(f"Command exited with status {result.exit_code}")
        return result


def create_command_executor() -> CommandExecutor:
    """Create a command executor."""
    return CommandExecutor()
