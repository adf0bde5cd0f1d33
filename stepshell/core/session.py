"""Per-process session state."""

import os
from dataclasses import dataclass, field
from typing import Optional

from .transcript import Transcript


@dataclass
class SessionState:
    """Tracked working directory plus the transcript.

    ``working_directory`` starts at the real process directory and only the
    loop controller changes it afterwards; ``os.chdir`` is never called.
    """
    working_directory: str = field(default_factory=os.getcwd)
    transcript: Transcript = field(default_factory=Transcript)

    @classmethod
    def create(cls, working_directory: Optional[str] = None) -> "SessionState":
        return cls(working_directory=working_directory or os.getcwd())
