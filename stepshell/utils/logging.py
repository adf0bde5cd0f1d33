"""Logging utilities for stepshell."""

import sys
import datetime
from typing import TextIO

from ..constants import (
    CLR_RESET, CLR_CYAN, CLR_BOLD_CYAN, CLR_GREEN, CLR_BOLD_GREEN,
    CLR_MAGENTA, CLR_BOLD_MAGENTA, CLR_BLUE, CLR_BOLD_BLUE,
    CLR_YELLOW, CLR_BOLD_YELLOW, CLR_WHITE, CLR_BOLD_WHITE,
    CLR_RED, CLR_BOLD_RED, STEP_EMOJI
)


def _emit(text: str, stream: TextIO) -> None:
    """Print ``text``; characters the stream cannot encode are escaped."""
    try:
        print(text, file=stream)
    except UnicodeEncodeError:
        encoding = getattr(stream, "encoding", None) or "utf-8"
        print(text.encode(encoding, "backslashreplace").decode(encoding), file=stream)


class Logger:
    """Centralized logging for stepshell with color coding and level management."""

    def __init__(self, debug_enabled: bool = False):
        self.debug_enabled = debug_enabled

        # Level color mapping
        self.level_map = {
            "System": (CLR_CYAN, CLR_BOLD_CYAN),
            "User": (CLR_GREEN, CLR_BOLD_GREEN),
            "Command": (CLR_YELLOW, CLR_BOLD_YELLOW),
            "Tool": (CLR_MAGENTA, CLR_BOLD_MAGENTA),
            "Error": (CLR_RED, CLR_BOLD_RED),
            "Warning": (CLR_YELLOW, CLR_BOLD_YELLOW),
            "Debug": (CLR_WHITE, CLR_BOLD_WHITE),
        }

    def set_debug(self, enabled: bool) -> None:
        """Enable or disable debug logging."""
        self.debug_enabled = enabled

    def get_current_timestamp(self) -> str:
        """Returns the current timestamp in YYYY-MM-DD HH:MM:SS format."""
        return datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')

    def log_message(self, level: str, message: str) -> None:
        """Logs a message with a given level and color coding."""
        if level == "Debug" and not self.debug_enabled:
            return

        timestamp = self.get_current_timestamp()

        if level in self.level_map:
            header_color, content_color = self.level_map[level]
        else:  # Default for unknown types
            header_color, content_color = CLR_WHITE, CLR_BOLD_WHITE

        stream: TextIO = sys.stderr if level in ["Error", "Warning"] else sys.stdout

        header_text = f"{header_color}[{timestamp}] [{level}]: {CLR_RESET}"

        # Continuation lines line up under the first character of the message
        indent_length = len(f"[{timestamp}] [{level}]: ")
        indent_str = ' ' * indent_length

        lines = message.splitlines()
        if not lines:
            _emit(f"{header_text}{content_color}{CLR_RESET}", stream)
            return

        _emit(f"{header_text}{content_color}{lines[0]}{CLR_RESET}", stream)
        for line in lines[1:]:
            _emit(f"{indent_str}{content_color}{line}{CLR_RESET}", stream)

        stream.flush()

    def step(self, kind: str, text: str) -> None:
        """Echo a model step the way the REPL shows it: emoji, step name, text."""
        label = kind.upper()
        emoji = STEP_EMOJI.get(label, "")
        _emit(f"\n {emoji} {CLR_BOLD_BLUE}{label}{CLR_RESET}: {text}", sys.stdout)
        sys.stdout.flush()

    def raw_response(self, raw_text: str) -> None:
        """Print an unparseable model reply untouched."""
        _emit(f"{CLR_BOLD_RED}☠️ Error happened. Raw Response: {CLR_RESET}{raw_text}", sys.stderr)
        sys.stderr.flush()

    def system(self, message: str) -> None:
        """Log a system message."""
        self.log_message("System", message)

    def user(self, message: str) -> None:
        """Log a user message."""
        self.log_message("User", message)

    def command(self, message: str) -> None:
        """Log a command execution message."""
        self.log_message("Command", message)

    def tool(self, message: str) -> None:
        """Log a tool dispatch message."""
        self.log_message("Tool", message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log_message("Error", message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log_message("Warning", message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.log_message("Debug", message)


# Global logger instance (debug setting is applied by the application)
logger = Logger()
