"""Tools, command execution and confirmation for stepshell."""

from .base import Tool, ToolRegistry, ToolResult
from .builtins import (
    RunCommandTool,
    RunQueryTool,
    WriteFileTool,
    create_default_registry,
    parse_directory_change
)
from .confirmation import ConfirmationGate, DenialPolicy, create_confirmation_gate
from .executor import CommandExecutor, CommandResult, create_command_executor

__all__ = [
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "RunCommandTool",
    "RunQueryTool",
    "WriteFileTool",
    "create_default_registry",
    "parse_directory_change",
    "ConfirmationGate",
    "DenialPolicy",
    "create_confirmation_gate",
    "CommandExecutor",
    "CommandResult",
    "create_command_executor",
]
