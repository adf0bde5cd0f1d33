"""Step model: one structured directive emitted by the reasoning service."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class StepKind(Enum):
    """The four kinds of step in the plan/action/observe/output protocol."""
    PLAN = "plan"
    ACTION = "action"
    OBSERVE = "observe"
    OUTPUT = "output"

    @classmethod
    def from_text(cls, value: str) -> Optional["StepKind"]:
        """Case-insensitive lookup; returns None for unknown values."""
        for kind in cls:
            if kind.value == value.lower():
                return kind
        return None


@dataclass(frozen=True)
class Step:
    """A parsed step.

    ``function`` is set iff ``kind`` is ACTION. ``tool_input`` is whatever the
    model sent as ``input`` (string, mapping or None).
    """
    kind: StepKind
    content: str = ""
    function: Optional[str] = None
    tool_input: Any = None

    def __post_init__(self):
        if self.kind is StepKind.ACTION and not self.function:
            raise ValueError("an action step requires a function name")
        if self.kind is not StepKind.ACTION and self.function is not None:
            raise ValueError(f"a {self.kind.value} step cannot name a function")

    @classmethod
    def plan(cls, content: str) -> "Step":
        return cls(StepKind.PLAN, content)

    @classmethod
    def observe(cls, content: str) -> "Step":
        return cls(StepKind.OBSERVE, content)

    @classmethod
    def output(cls, content: str) -> "Step":
        return cls(StepKind.OUTPUT, content)

    @classmethod
    def action(cls, function: str, tool_input: Any = None, content: str = "") -> "Step":
        return cls(StepKind.ACTION, content, function, tool_input)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"step": self.kind.value, "content": self.content}
        if self.kind is StepKind.ACTION:
            data["function"] = self.function
            if self.tool_input is not None:
                data["input"] = self.tool_input
        return data

    def serialize(self) -> str:
        """JSON text of the step, as stored in the transcript."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @property
    def display_text(self) -> str:
        """What the REPL shows: the function name for actions, else the content."""
        return self.function if self.kind is StepKind.ACTION else self.content


@dataclass(frozen=True)
class ParseFailure:
    """Raw model text that does not decode into a valid Step."""
    raw_text: str
    reason: str = ""


ParseResult = Union[Step, ParseFailure]
