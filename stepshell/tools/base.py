"""Tool interface and registry for stepshell."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool execution.

    A tool never raises for operational failures; it sets ``success`` to False
    and explains in ``content``. ``working_directory`` is set only when the
    tool asks the loop controller to move the tracked directory.
    """
    content: str
    success: bool = True
    working_directory: Optional[str] = None


class Tool:
    """A named local capability the model can invoke from an action step."""

    name: str = ""
    description: str = ""

    def is_side_effecting(self, tool_input: Any) -> bool:
        """Whether this call must pass the confirmation gate first."""
        return False

    def confirmation_text(self, tool_input: Any) -> str:
        """Text shown to the user when asking for confirmation."""
        return f"{self.name} {tool_input!r}"

    def execute(self, tool_input: Any, working_directory: str) -> ToolResult:
        raise NotImplementedError


class ToolRegistry:
    """Fixed, ordered mapping of tool name to tool, built once at startup."""

    def __init__(self, tools: Iterable[Tool]):
        registry: Dict[str, Tool] = {}
        for tool in tools:
            if not tool.name:
                raise ValueError(f"Tool {tool!r} has no name")
            if tool.name in registry:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            registry[tool.name] = tool
        self._tools = registry

    def lookup(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(tuple(self._tools.values()))

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._tools)

    def describe(self) -> str:
        """Tool list for the system prompt, one ``- name : description`` per line."""
        return "\n".join(f"- {tool.name} : {tool.description}" for tool in self)
