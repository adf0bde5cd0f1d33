"""Constants used throughout the stepshell package."""

from pathlib import Path
from colorama import Fore, Style

# Package information
PACKAGE_NAME = "stepshell"

# Configuration paths
CONFIG_DIR = Path.home() / ".config" / "stepshell"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
PAYLOAD_FILE = CONFIG_DIR / "payload.json"

# ANSI Color Codes (using colorama)
CLR_RESET = Style.RESET_ALL
CLR_RED = Fore.RED
CLR_BOLD_RED = Style.BRIGHT + Fore.RED
CLR_GREEN = Fore.GREEN
CLR_BOLD_GREEN = Style.BRIGHT + Fore.GREEN
CLR_YELLOW = Fore.YELLOW
CLR_BOLD_YELLOW = Style.BRIGHT + Fore.YELLOW
CLR_BLUE = Fore.BLUE
CLR_BOLD_BLUE = Style.BRIGHT + Fore.BLUE
CLR_MAGENTA = Fore.MAGENTA
CLR_BOLD_MAGENTA = Style.BRIGHT + Fore.MAGENTA
CLR_CYAN = Fore.CYAN
CLR_BOLD_CYAN = Style.BRIGHT + Fore.CYAN
CLR_WHITE = Fore.WHITE
CLR_BOLD_WHITE = Style.BRIGHT + Fore.WHITE

# Step display
STEP_EMOJI = {
    "PLAN": "🧠",
    "ACTION": "🤖",
    "OBSERVE": "💭",
    "OUTPUT": "✅",
}

# Confirmation denial policies
DENIAL_POLICIES = ["terminate", "report"]

# Interactive surface
PROMPT = "> "
EXIT_COMMAND = "exit"
DENY_ANSWER = "n"
PERMISSION_DENIED_MESSAGE = "Permission denied"

# Default configuration values
DEFAULT_MODEL = "llama3.2:latest"
DEFAULT_API_KEY_ENV = "STEPSHELL_API_KEY"
DEFAULT_DENIAL_POLICY = "report"
DEFAULT_REQUEST_TIMEOUT = 120
DEFAULT_ENABLE_DEBUG = False
