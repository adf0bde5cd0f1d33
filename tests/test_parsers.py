import json

import pytest

from stepshell.core.steps import ParseFailure, Step, StepKind
from stepshell.llm.parsers import extract_response_content, parse_step

# ---------------------------------------------------------------------------
# Step parsing
# ---------------------------------------------------------------------------

def test_parse_plan_step():
    result = parse_step('{"step": "plan", "content": "check the folder"}')
    assert result == Step.plan("check the folder")


@pytest.mark.parametrize("value", ["PLAN", "Plan", " plan "])
def test_step_name_is_case_insensitive(value):
    result = parse_step(json.dumps({"step": value, "content": "x"}))
    assert isinstance(result, Step)
    assert result.kind is StepKind.PLAN


def test_parse_action_with_string_input():
    result = parse_step('{"step": "action", "function": "run_command", "input": "ls"}')
    assert result.kind is StepKind.ACTION
    assert result.function == "run_command"
    assert result.tool_input == "ls"
    assert result.content == ""


def test_parse_action_with_object_input():
    raw = json.dumps({"step": "action", "function": "write_file",
                      "input": {"filename": "a.txt", "content": "hi"}})
    result = parse_step(raw)
    assert result.tool_input == {"filename": "a.txt", "content": "hi"}


def test_parse_action_without_input():
    result = parse_step('{"step": "action", "function": "run_query"}')
    assert result.function == "run_query"
    assert result.tool_input is None


def test_non_action_may_carry_empty_function():
    result = parse_step('{"step": "observe", "content": "ok", "function": ""}')
    assert result == Step.observe("ok")


@pytest.mark.parametrize("raw", [
    "",
    "Sure! Here is the plan.",
    "{not json",
    "[1, 2, 3]",
    '"plan"',
    '{"content": "no step"}',
    '{"step": "dance", "content": "x"}',
    '{"step": 3, "content": "x"}',
    '{"step": "plan", "content": 42}',
    '{"step": "action", "content": "no function"}',
    '{"step": "action", "function": "   "}',
    '{"step": "action", "function": "run_command", "input": 5}',
    '{"step": "plan", "content": "x", "function": "run_command"}',
])
def test_malformed_text_is_a_parse_failure(raw):
    result = parse_step(raw)
    assert isinstance(result, ParseFailure)
    assert result.raw_text == raw


def test_parse_failure_keeps_reason():
    result = parse_step("nope")
    assert "invalid JSON" in result.reason


def test_serialize_round_trips_through_parser():
    action = Step.action("write_file", {"filename": "a.txt", "content": "x"}, "writing")
    assert parse_step(action.serialize()) == action


def test_action_step_requires_function():
    with pytest.raises(ValueError):
        Step(StepKind.ACTION, "x")

# ---------------------------------------------------------------------------
# Response path extraction
# ---------------------------------------------------------------------------

def test_extract_ollama_style_path():
    data = {"message": {"role": "assistant", "content": "hello"}}
    assert extract_response_content(data, ".message.content") == "hello"


def test_extract_openai_style_path():
    data = {"choices": [{"message": {"content": "hi there"}}]}
    assert extract_response_content(data, ".choices[0].message.content") == "hi there"


def test_extract_missing_path_returns_none():
    assert extract_response_content({"choices": []}, ".choices[0].message.content") is None


def test_extract_requires_leading_dot():
    assert extract_response_content({"response": "x"}, "response") is None


def test_deeply_nested_reply_is_a_parse_failure():
    raw = "[" * 200000
    result = parse_step(raw)
    assert isinstance(result, ParseFailure)
    assert result.raw_text == raw
