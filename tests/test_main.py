"""Composition root and CLI tests."""

import json

import pytest
from falcon.testing import TestClient

from doclife import main
from doclife.config import Settings


@pytest.fixture
def memory_settings(monkeypatch) -> Settings:
    settings = Settings(
        storage_backend="memory",
        submit_worker_enabled=False,
        approve_worker_enabled=False,
        concurrency_test_timeout_seconds=10.0,
    )
    monkeypatch.setattr(main, "get_settings", lambda: settings)
    return settings


def test_app_with_memory_storage(memory_settings: Settings) -> None:
    client = TestClient(main.create_doclife_app(memory_settings))

    created = client.simulate_post("/v1/documents", json={"author": "alice", "title": "Memo"})
    fetched = client.simulate_get(f"/v1/documents/{created.json['id']}")

    assert created.status_code == 201
    assert fetched.json["document"]["title"] == "Memo"
    assert client.simulate_get("/v1/health/ready").status_code == 200


def test_concurrency_cli_creates_and_approves(memory_settings: Settings, capsys) -> None:
    exit_code = main.concurrency_test_main(["--create", "--threads", "5", "--attempts", "20"])

    report = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert report["successful_attempts"] == 1
    assert report["conflict_attempts"] == 19
    assert report["registry_entries_count"] == 1
    assert report["final_status"] == "APPROVED"


def test_concurrency_cli_unknown_document(memory_settings: Settings) -> None:
    exit_code = main.concurrency_test_main(
        ["--document-id", "00000000-0000-0000-0000-000000000000"]
    )
    assert exit_code == 1


def test_concurrency_cli_requires_target() -> None:
    with pytest.raises(SystemExit):
        main.concurrency_test_main(["--threads", "3"])


def test_postgres_is_default_backend(monkeypatch) -> None:
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    assert Settings(_env_file=None).storage_backend == "postgres"


def test_concurrency_cli_help_mentions_memory_backend(capsys) -> None:
    with pytest.raises(SystemExit):
        main.concurrency_test_main(["--help"])
    assert "memory backend starts empty" in " ".join(capsys.readouterr().out.split())
