"""Append-only conversation transcript."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple


class Role(Enum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class Turn:
    """One transcript entry: the raw user text or the serialized step."""
    role: Role
    text: str


class Transcript:
    """Ordered log of turns. Entries are never removed or reordered.

    The reasoning service keeps its own memory behind the conversation handle;
    this log is the locally owned mirror used for diagnostics and tests.
    """

    def __init__(self):
        self._turns: List[Turn] = []

    def append(self, role: Role, text: str) -> Turn:
        turn = Turn(role, text)
        self._turns.append(turn)
        return turn

    def append_user(self, text: str) -> Turn:
        return self.append(Role.USER, text)

    def append_model(self, text: str) -> Turn:
        return self.append(Role.MODEL, text)

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]
