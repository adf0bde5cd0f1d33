"""
stepshell - LLM-driven shell agent speaking a plan/action/observe/output step protocol.

A single user query is turned into a sequence of model-directed steps. Action
steps run one local tool (shell command, file write or a question to the
user), with side-effecting tools behind an interactive confirmation.
"""

__version__ = "1.0.0"

# Main API imports
from .core.application import StepShell, create_application
from .core.loop import LoopController, LoopState, TurnOutcome
from .config.manager import ConfigManager, create_config_manager

__all__ = [
    "StepShell",
    "create_application",
    "LoopController",
    "LoopState",
    "TurnOutcome",
    "ConfigManager",
    "create_config_manager",
    "__version__",
]
