import json
from unittest.mock import patch

import pytest

from stepshell.cli import create_parser, main
from stepshell.core.application import StepShell
from stepshell.core.loop import TurnOutcome


@pytest.fixture(autouse=True)
def no_terminal_setup():
    with patch("stepshell.cli.colorama_init"), patch("stepshell.cli.load_dotenv"):
        yield


@pytest.fixture
def config_dir(tmp_path):
    """A config directory whose templates have already been generated."""
    main(["--config-dir", str(tmp_path)])
    return tmp_path


def test_first_run_only_writes_templates(tmp_path):
    main(["--config-dir", str(tmp_path)])
    assert (tmp_path / "config.yaml").exists()
    assert (tmp_path / "payload.json").exists()


def test_parser_denial_policy_choices():
    parser = create_parser()
    assert parser.parse_args(["--denial-policy", "terminate"]).denial_policy == "terminate"
    with pytest.raises(SystemExit):
        parser.parse_args(["--denial-policy", "sometimes"])


def test_config_summary(config_dir, capsys):
    main(["--config-dir", str(config_dir), "--config-summary", "--denial-policy", "terminate"])
    out = capsys.readouterr().out
    assert "denial_policy: terminate" in out
    assert "run_command, run_query, write_file" in out


def test_single_query_exit_status(config_dir):
    with patch.object(StepShell, "handle_query", return_value=TurnOutcome.COMPLETED):
        with pytest.raises(SystemExit) as excinfo:
            main(["--config-dir", str(config_dir), "list", "files"])
    assert excinfo.value.code == 0


def test_interactive_mode_stops_on_exit(config_dir, monkeypatch):
    lines = iter(["", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    app = StepShell(str(config_dir))

    with patch.object(app.conversation, "send_message") as send:
        app.run_interactive_mode()

    send.assert_not_called()
    assert len(app.loop.transcript) == 0


def test_interactive_mode_stops_on_eof(config_dir, monkeypatch):
    def closed(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    StepShell(str(config_dir)).run_interactive_mode()


@patch("stepshell.tools.executor.subprocess.run")
def test_interactive_mode_survives_closed_confirmation_input(mock_run, config_dir, monkeypatch):
    lines = iter(["clean up", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    app = StepShell(str(config_dir))

    def closed(prompt=""):
        raise EOFError

    app.gate.input_func = closed
    replies = [
        '{"step": "action", "function": "run_command", "input": "rm -rf build"}',
        '{"step": "output", "content": "skipped"}',
    ]
    with patch.object(app.conversation, "send_message", side_effect=replies):
        app.run_interactive_mode()

    mock_run.assert_not_called()
    assert json.loads(app.loop.transcript[2].text)["content"] == "Permission denied"
