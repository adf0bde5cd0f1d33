import json

import pytest

from stepshell.core.loop import LoopController
from stepshell.core.session import SessionState
from stepshell.tools import ConfirmationGate, DenialPolicy, create_default_registry


class ScriptedConversation:
    """Conversation handle that replays canned model replies."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.sent = []

    def send_message(self, text):
        self.sent.append(text)
        if not self.replies:
            raise AssertionError(f"no scripted reply left for message {text!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def step(kind, content="", **extra):
    data = {"step": kind, "content": content}
    data.update(extra)
    return json.dumps(data)


def answers(*values):
    """input() replacement returning ``values`` in order and recording prompts."""
    remaining = list(values)
    prompts = []

    def _input(prompt=""):
        prompts.append(prompt)
        if not remaining:
            raise AssertionError(f"unexpected prompt: {prompt!r}")
        return remaining.pop(0)

    _input.prompts = prompts
    return _input


@pytest.fixture
def make_controller(tmp_path):
    def _make(replies, confirm=(), query_answers=(), policy=DenialPolicy.REPORT):
        conversation = ScriptedConversation(replies)
        gate = ConfirmationGate(policy, answers(*confirm))
        registry = create_default_registry(input_func=answers(*query_answers))
        session = SessionState.create(str(tmp_path))
        return LoopController(conversation, registry, gate, session)
    return _make
