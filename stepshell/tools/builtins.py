"""Built-in tools: run_command, run_query, write_file."""

import json
import re
import shlex
from pathlib import Path
from typing import Any, Callable, Optional

from ..constants import PROMPT
from ..utils.helpers import resolve_path
from ..utils.logging import logger
from .base import Tool, ToolRegistry, ToolResult
from .executor import CommandExecutor, create_command_executor

_CD_PATTERN = re.compile(r"^cd[ \t]+(?P<target>[^;&|<>\n]+)$")


def parse_directory_change(command: str) -> Optional[str]:
    """Return the target of a plain ``cd <path>`` command, else None.

    Commands that chain other shell operators are not treated as a plain
    directory change.
    """
    match = _CD_PATTERN.match(command.strip())
    if not match:
        return None
    target = match.group("target").strip()
    try:
        parts = shlex.split(target)
    except ValueError:
        return target
    return parts[0] if len(parts) == 1 else target


class RunCommandTool(Tool):
    """Runs a shell command in the tracked working directory."""

    name = "run_command"
    description = "Takes a command as input to execute on system and returns output"

    def __init__(self, executor: Optional[CommandExecutor] = None):
        self.executor = executor or create_command_executor()

    @staticmethod
    def _command_from_input(tool_input: Any) -> Optional[str]:
        if isinstance(tool_input, dict):
            tool_input = tool_input.get("command")
        if isinstance(tool_input, str) and tool_input.strip():
            return tool_input.strip()
        return None

    def is_side_effecting(self, tool_input: Any) -> bool:
        command = self._command_from_input(tool_input)
        return command is None or parse_directory_change(command) is None

    def confirmation_text(self, tool_input: Any) -> str:
        return self._command_from_input(tool_input) or str(tool_input)

    def execute(self, tool_input: Any, working_directory: str) -> ToolResult:
        command = self._command_from_input(tool_input)
        if command is None:
            return ToolResult("run_command expects a non-empty command string", success=False)

        target = parse_directory_change(command)
        if target is not None:
            # Pure path bookkeeping: no subprocess and no existence check
            new_directory = resolve_path(working_directory, target)
            logger.tool(f"Tracked directory: {working_directory} -> {new_directory}")
            return ToolResult(f"Changed directory to {new_directory}",
                              working_directory=new_directory)

        result = self.executor.execute(command, working_directory)
        return ToolResult(str(result), success=result.success)


class RunQueryTool(Tool):
    """Asks the user a free-text question at the terminal."""

    name = "run_query"
    description = ("Takes no input, rather gets some context from the user about some situation "
                   "where not able to decide what to do and returns queryOutput")

    def __init__(self, input_func: Callable[[str], str] = input):
        self.input_func = input_func

    def execute(self, tool_input: Any, working_directory: str) -> ToolResult:
        logger.debug("run_query reached, waiting for user input")
        try:
            answer = self.input_func(PROMPT)
        except EOFError:
            return ToolResult("No answer from user (input closed)", success=False)
        logger.user(f"Answered: {answer}")
        return ToolResult(answer)


class WriteFileTool(Tool):
    """Writes text to a file resolved against the tracked working directory."""

    name = "write_file"
    description = "Writes content to a given filename. Input format: { filename: string, content: string }"

    @staticmethod
    def _arguments(tool_input: Any) -> Optional[dict]:
        if isinstance(tool_input, str):
            try:
                tool_input = json.loads(tool_input)
            except (ValueError, RecursionError):
                return None
        return tool_input if isinstance(tool_input, dict) else None

    def is_side_effecting(self, tool_input: Any) -> bool:
        return True

    def confirmation_text(self, tool_input: Any) -> str:
        args = self._arguments(tool_input) or {}
        return f"write_file {args.get('filename', '?')}"

    def execute(self, tool_input: Any, working_directory: str) -> ToolResult:
        args = self._arguments(tool_input)
        if args is None:
            return ToolResult("Failed to write file: input must be {filename, content}", success=False)

        filename = args.get("filename")
        content = args.get("content", "")
        if not isinstance(filename, str) or not filename.strip():
            return ToolResult("Failed to write file: missing filename", success=False)
        if not isinstance(content, str):
            return ToolResult("Failed to write file: content must be a string", success=False)

        file_path = Path(resolve_path(working_directory, filename))
        try:
            file_path.write_text(content, encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write {file_path}: {e}")
            return ToolResult(f"Failed to write file: {e}", success=False)

        logger.tool(f"Wrote {len(content)} characters to {file_path}")
        return ToolResult(f"Successfully wrote to {file_path}")


def create_default_registry(input_func: Callable[[str], str] = input,
                            executor: Optional[CommandExecutor] = None) -> ToolRegistry:
    """Registry with the three built-in tools, in their canonical order."""
    return ToolRegistry([
        RunCommandTool(executor),
        RunQueryTool(input_func),
        WriteFileTool(),
    ])
