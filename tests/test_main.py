"""Unit tests for main.py, the CLI entry point.

Tests focus on:
- --help flags work for top-level and sub-commands
- version, check and invoke behave against a fake connector
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from tests.fakes import zoho_record, zoho_success
from zoho_tasks import __version__
from zoho_tasks.main import app

runner = CliRunner()


def _invoke(*args, catch_exceptions: bool = True):
    return runner.invoke(app, list(args), catch_exceptions=catch_exceptions)


@pytest.fixture()
def wired(monkeypatch, make_client, connector, env_credentials):
    monkeypatch.setattr("zoho_tasks.main.get_client", make_client)
    monkeypatch.setattr("zoho_tasks.functions.tasks.get_client", make_client)
    return connector


class TestTopLevelHelp:
    def test_help_flag_exits_zero(self):
        result = _invoke("--help")
        assert result.exit_code == 0

    def test_help_shows_sub_commands(self):
        output = _invoke("--help").output.lower()
        for name in ("tasks", "config", "check", "invoke", "version"):
            assert name in output

    def test_tasks_help(self):
        result = _invoke("tasks", "--help")
        assert result.exit_code == 0
        assert "delete" in result.output

    def test_typo_suggests_command(self):
        result = _invoke("taks")
        assert result.exit_code != 0
        assert "tasks" in result.output


def test_version():
    result = _invoke("version")
    assert result.exit_code == 0
    assert __version__ in result.output


class TestCheck:
    def test_check_success(self, wired):
        wired.respond("getRecords", {"data": [zoho_record()]})

        result = _invoke("check")

        assert result.exit_code == 0, result.output
        assert "env-user" in result.output
        assert "working" in result.output
        assert wired.calls[0].query == {"per_page": 1}

    def test_check_credential_failure(self, wired):
        wired.respond("getRecords", {"message": "credential not found"}, status=404)

        result = _invoke("check")

        assert result.exit_code == 3
        assert "ALLOY_CREDENTIAL_ID" in result.output

    def test_check_without_settings(self):
        result = _invoke("check")

        assert result.exit_code == 3
        assert "Missing connector settings" in result.output


class TestInvoke:
    def test_invoke_list(self, wired):
        wired.respond("getRecords", {"data": [zoho_record("1", "Alpha")]})

        result = _invoke("invoke", "get")

        assert result.exit_code == 0, result.output
        assert "HTTP 200" in result.output
        assert "Alpha" in result.output

    def test_invoke_create(self, wired):
        wired.respond("insertRecords", zoho_success("900"))

        result = _invoke("invoke", "POST", "--data", json.dumps({"title": "New"}))

        assert result.exit_code == 0, result.output
        assert "HTTP 201" in result.output
        assert wired.calls[0].request_body == {"data": [{"Subject": "New"}]}

    def test_invoke_delete_with_id(self, wired):
        wired.respond("deleteRecords", zoho_success("5"))

        result = _invoke("invoke", "DELETE", "--id", "5")

        assert result.exit_code == 0, result.output
        assert wired.calls[0].query == {"ids": "5"}

    def test_invoke_failure_exits_non_zero(self, wired):
        result = _invoke("invoke", "PUT", "--id", "5", "--data", "{}")

        assert result.exit_code == 1
        assert "HTTP 400" in result.output
        assert wired.calls == []

    def test_invoke_bad_json(self, wired):
        result = _invoke("invoke", "POST", "--data", "{oops")

        assert result.exit_code == 2
        assert wired.calls == []
