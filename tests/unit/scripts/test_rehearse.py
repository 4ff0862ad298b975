"""Tests for the terminal rehearsal script."""

import json
import logging

import pytest

from orator.logging_config import scenario_var, session_id_var
from orator.scripts.rehearse import main, run

INTERVIEW = {
    "type": "InterviewContext",
    "interviewType": "behavioral interview",
    "role": "Consultant",
    "company": "McKinsey",
    "focusAreas": ["Leadership"],
}


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "interview.json"
    path.write_text(json.dumps(INTERVIEW), encoding="utf-8")
    return path


@pytest.fixture
def stub_env(monkeypatch):
    monkeypatch.setenv("STUB_LLM_DELAY_MS", "0")
    monkeypatch.setenv(
        "STUB_LLM_REPLIES",
        "Tell me about a time you led a team.||What was the outcome?||Clear and well structured.",
    )


def _feed_input(monkeypatch, lines):
    remaining = list(lines)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


class TestRehearse:
    def test_session_with_feedback(self, monkeypatch, capsys, scenario_file, stub_env):
        _feed_input(monkeypatch, ["I led a team of five.", "", "/feedback"])

        exit_code = main([str(scenario_file), "--provider", "stub"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "partner> Tell me about a time you led a team." in out
        assert "partner> What was the outcome?" in out
        assert "feedback> Clear and well structured." in out

    def test_quit_without_feedback(self, monkeypatch, capsys, scenario_file, stub_env):
        _feed_input(monkeypatch, ["/quit"])

        exit_code = main([str(scenario_file), "--provider", "stub"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "partner> Tell me about a time you led a team." in out
        assert "feedback>" not in out

    def test_end_of_input(self, monkeypatch, scenario_file, stub_env):
        _feed_input(monkeypatch, [])

        assert main([str(scenario_file), "--provider", "stub"]) == 0

    def test_invalid_scenario(self, capsys, tmp_path, stub_env):
        path = tmp_path / "debate.json"
        path.write_text(json.dumps({"type": "DebateContext"}), encoding="utf-8")

        exit_code = main([str(path), "--provider", "stub"])

        assert exit_code == 2
        assert "INVALID_PRACTICE_CONTEXT" in capsys.readouterr().err

    def test_scenario_not_utf8(self, capsys, tmp_path, stub_env):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"type": "InterviewContext", "role": "Caf\xe9"}')

        exit_code = main([str(path), "--provider", "stub"])

        assert exit_code == 2
        assert "not valid JSON" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_conversation_context_cleared(self, monkeypatch, scenario_file, stub_env):
        _feed_input(monkeypatch, ["/quit"])

        assert await run(scenario_file, "stub") == 0

        assert session_id_var.get() is None
        assert scenario_var.get() is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit, match="Missing file"):
            main([str(tmp_path / "nope.json")])
