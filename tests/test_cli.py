from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard import cli
from taskboard.cli import main
from taskboard.client import TaskApiClient
from taskboard.config import Settings
from taskboard.server.api import create_app
from taskboard.store import Container


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch):
    container = Container("sqlite://")
    app = create_app(settings=Settings(database_url="sqlite://"), container=container, enable_cors=False)
    client = TaskApiClient(client=TestClient(app))
    monkeypatch.setattr(cli, "_make_client", lambda args: client)
    yield client
    container.dispose()


def _stdout_json(capsys: pytest.CaptureFixture[str]):
    return json.loads(capsys.readouterr().out)


def test_task_add_list_done_edit(api: TaskApiClient, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(['tasks', 'add', 'CLI Task']) == 0
    assert _stdout_json(capsys) == {"id": 1, "title": "CLI Task", "isDone": False, "userId": 1}

    assert main(['tasks', 'done', '1']) == 0
    assert _stdout_json(capsys)["isDone"] is True

    assert main(['tasks', 'edit', '1', 'Renamed']) == 0
    out = _stdout_json(capsys)
    assert out["title"] == "Renamed"
    assert out["isDone"] is True

    assert main(['tasks', 'undone', '1']) == 0
    assert _stdout_json(capsys)["isDone"] is False

    assert main(['tasks', 'list']) == 0
    assert [t["title"] for t in _stdout_json(capsys)] == ["Renamed"]


def test_task_errors_exit_nonzero(api: TaskApiClient, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(['tasks', 'add', '   ']) == 1
    assert "Title is required" in capsys.readouterr().err

    assert main(['tasks', 'done', '5']) == 1
    assert "Task with id 5 not found" in capsys.readouterr().err


def test_rm_confirmation(api: TaskApiClient, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    api.create_task("Remove me")

    monkeypatch.setattr("builtins.input", lambda _prompt: "n")
    assert main(['tasks', 'rm', '1']) == 1
    assert len(api.list_tasks()) == 1

    assert main(['tasks', 'rm', '1', '--yes']) == 0
    assert api.list_tasks() == []


def test_seed_is_idempotent(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    assert main(['--database-url', url, 'seed']) == 0
    first = _stdout_json(capsys)
    assert main(['--database-url', url, 'seed']) == 0
    second = _stdout_json(capsys)

    assert first == second == {"user": {"id": 1, "email": "default@example.com"}}


def test_seed_reports_store_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    url = f"sqlite:///{tmp_path / 'missing' / 'seed.db'}"
    assert main(['--database-url', url, 'seed']) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Seeding failed" in captured.err


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        main([])
