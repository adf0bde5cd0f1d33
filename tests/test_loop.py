import json
import os
import subprocess
from unittest.mock import patch

import pytest

from stepshell.core.errors import LLMRequestError, SessionTerminated
from stepshell.core.loop import LoopState, TurnOutcome
from stepshell.core.transcript import Role
from stepshell.tools import DenialPolicy

from conftest import step


def kinds(transcript):
    """Transcript as (role, step-or-text) pairs."""
    result = []
    for turn in transcript:
        if turn.role is Role.USER:
            result.append(("user", turn.text))
        else:
            result.append(("model", json.loads(turn.text)["step"]))
    return result

# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------

@patch("stepshell.tools.executor.subprocess.run")
def test_list_files_scenario(mock_run, make_controller, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess("ls", 0)
    loop = make_controller(
        [
            step("plan", "I have to call run_command to list files"),
            step("action", function="run_command", input="ls"),
            step("output", "Listed the files"),
        ],
        confirm=["y"],
    )

    outcome = loop.handle_query("list files")

    assert outcome is TurnOutcome.COMPLETED
    assert loop.state is LoopState.IDLE
    mock_run.assert_called_once_with("ls", shell=True, cwd=str(tmp_path))
    assert kinds(loop.transcript) == [
        ("user", "list files"),
        ("model", "plan"),
        ("model", "action"),
        ("model", "observe"),
        ("model", "output"),
    ]
    action = json.loads(loop.transcript[2].text)
    assert action["function"] == "run_command"
    assert action["input"] == "ls"


@patch("stepshell.tools.executor.subprocess.run")
def test_messages_sent_to_conversation(mock_run, make_controller):
    mock_run.return_value = subprocess.CompletedProcess("ls", 0)
    loop = make_controller(
        [
            step("plan", "thinking"),
            step("action", function="run_command", input="ls"),
            step("output", "done"),
        ],
        confirm=["y"],
    )

    loop.handle_query("list files")

    sent = loop.conversation.sent
    assert sent[0] == "list files"
    assert sent[1] == ""
    assert json.loads(sent[2]) == {"step": "observe", "content": "Command 'ls' exited with status 0"}
    assert sent[2] == loop.transcript[3].text


def test_non_json_reply_abandons_turn(make_controller):
    loop = make_controller(["I think you should run ls", step("output", "hello")])

    outcome = loop.handle_query("list files")

    assert outcome is TurnOutcome.PARSE_FAILED
    assert loop.state is LoopState.IDLE
    assert kinds(loop.transcript) == [("user", "list files")]

    assert loop.handle_query("say hello") is TurnOutcome.COMPLETED
    assert kinds(loop.transcript)[-2:] == [("user", "say hello"), ("model", "output")]


def test_parse_failure_mid_turn_leaves_prior_turns(make_controller):
    loop = make_controller([step("plan", "first"), '{"step": "jump"}'])

    outcome = loop.handle_query("do it")

    assert outcome is TurnOutcome.PARSE_FAILED
    assert len(loop.transcript) == 2
    assert len(loop.conversation.sent) == 2


def test_observe_step_from_model_continues(make_controller):
    loop = make_controller([step("observe", "nothing to do"), step("output", "ok")])

    assert loop.handle_query("check") is TurnOutcome.COMPLETED
    assert kinds(loop.transcript)[1:] == [("model", "observe"), ("model", "output")]
    assert loop.conversation.sent == ["check", ""]


def test_request_failure_abandons_turn(make_controller):
    loop = make_controller([LLMRequestError("connection refused")])

    assert loop.handle_query("hello") is TurnOutcome.REQUEST_FAILED
    assert len(loop.transcript) == 1


@pytest.mark.parametrize("query", ["exit", "EXIT", " Exit "])
def test_exit_query_ends_without_model_call(make_controller, query):
    loop = make_controller([])

    assert loop.handle_query(query) is TurnOutcome.EXIT
    assert len(loop.transcript) == 0
    assert loop.conversation.sent == []

# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

@patch("stepshell.tools.executor.subprocess.run")
def test_unknown_tool_is_reported_as_observation(mock_run, make_controller):
    loop = make_controller([
        step("action", function="format_disk", input="/dev/sda"),
        step("output", "could not do it"),
    ])

    assert loop.handle_query("wipe") is TurnOutcome.COMPLETED

    mock_run.assert_not_called()
    observation = json.loads(loop.transcript[2].text)
    assert observation["step"] == "observe"
    assert "Unknown tool 'format_disk'" in observation["content"]
    assert [k for _, k in kinds(loop.transcript)].count("observe") == 1


def test_run_query_bypasses_gate(make_controller):
    loop = make_controller(
        [step("action", function="run_query"), step("output", "thanks")],
        query_answers=["snake.py"],
    )

    loop.handle_query("create a file")

    assert json.loads(loop.transcript[2].text) == {"step": "observe", "content": "snake.py"}


def test_empty_tool_result_becomes_empty_observation(make_controller):
    loop = make_controller(
        [step("action", function="run_query"), step("output", "ok")],
        query_answers=[""],
    )

    loop.handle_query("ask me")

    assert json.loads(loop.transcript[2].text)["content"] == ""


@patch("stepshell.tools.executor.subprocess.run")
def test_cd_updates_tracked_directory_without_subprocess(mock_run, make_controller, tmp_path):
    loop = make_controller([
        step("action", function="run_command", input="cd nowhere/yet"),
        step("output", "moved"),
    ])
    real_cwd = os.getcwd()

    loop.handle_query("go to nowhere")

    mock_run.assert_not_called()
    assert loop.working_directory == os.path.join(str(tmp_path), "nowhere", "yet")
    assert os.getcwd() == real_cwd


def test_write_after_cd_lands_in_subdir(make_controller, tmp_path):
    (tmp_path / "subdir").mkdir()
    loop = make_controller(
        [
            step("action", function="run_command", input="cd subdir"),
            step("action", function="write_file", input={"filename": "a.txt", "content": "hi"}),
            step("output", "written"),
        ],
        confirm=["y"],
    )

    loop.handle_query("write a.txt in subdir")

    assert (tmp_path / "subdir" / "a.txt").read_text(encoding="utf-8") == "hi"
    assert not (tmp_path / "a.txt").exists()


@patch("stepshell.tools.executor.subprocess.run")
def test_tracked_directory_persists_across_queries(mock_run, make_controller, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess("ls", 0)
    loop = make_controller(
        [
            step("action", function="run_command", input="cd src"),
            step("output", "moved"),
            step("action", function="run_command", input="ls"),
            step("output", "listed"),
        ],
        confirm=["y"],
    )

    loop.handle_query("go to src")
    loop.handle_query("list")

    assert mock_run.call_args.kwargs["cwd"] == os.path.join(str(tmp_path), "src")

# ---------------------------------------------------------------------------
# Denial policies
# ---------------------------------------------------------------------------

@patch("stepshell.tools.executor.subprocess.run")
def test_denial_reported_to_model(mock_run, make_controller):
    loop = make_controller(
        [
            step("action", function="run_command", input="rm -rf build"),
            step("output", "ok, leaving it"),
        ],
        confirm=["n"],
        policy=DenialPolicy.REPORT,
    )

    assert loop.handle_query("clean up") is TurnOutcome.COMPLETED

    mock_run.assert_not_called()
    assert json.loads(loop.transcript[2].text) == {"step": "observe", "content": "Permission denied"}
    assert json.loads(loop.conversation.sent[1])["content"] == "Permission denied"


@patch("stepshell.tools.executor.subprocess.run")
def test_denial_terminates_session(mock_run, make_controller):
    loop = make_controller(
        [step("action", function="run_command", input="rm -rf build")],
        confirm=["n"],
        policy=DenialPolicy.TERMINATE,
    )

    with pytest.raises(SessionTerminated):
        loop.handle_query("clean up")

    mock_run.assert_not_called()
    assert loop.state is LoopState.IDLE


def test_denied_write_does_not_touch_disk(make_controller, tmp_path):
    loop = make_controller(
        [
            step("action", function="write_file", input={"filename": "a.txt", "content": "x"}),
            step("output", "skipped"),
        ],
        confirm=["n"],
    )

    loop.handle_query("write")

    assert not (tmp_path / "a.txt").exists()


@patch("stepshell.tools.executor.subprocess.run")
def test_closed_input_at_confirmation_is_a_denial(mock_run, make_controller):
    loop = make_controller(
        [
            step("action", function="run_command", input="rm -rf build"),
            step("output", "skipped"),
        ],
    )

    def closed(prompt=""):
        raise EOFError

    loop.gate.input_func = closed

    assert loop.handle_query("clean up") is TurnOutcome.COMPLETED
    mock_run.assert_not_called()
    assert json.loads(loop.conversation.sent[1])["content"] == "Permission denied"
