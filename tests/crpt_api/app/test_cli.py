from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from crpt_api.cli import app
from crpt_api.config.urls import DOCUMENT_CREATE_URL
from crpt_api.infra.serializer import JsonDocumentSerializer


def _write_document(path: Path, document) -> Path:
    path.write_bytes(JsonDocumentSerializer().encode(document))
    return path


def test_help_shows_commands(runner: CliRunner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("submit", "encode", "demo"):
        assert command in result.stdout


def test_demo_dry_run_prints_wire_json(runner: CliRunner):
    result = runner.invoke(app, ["demo", "--dry-run"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["docID"] == "DOC123"
    assert data["regDate"] == "2022-04-15"


def test_encode_pretty_prints_valid_file(runner: CliRunner, tmp_path: Path, document):
    path = _write_document(tmp_path / "doc.json", document)
    result = runner.invoke(app, ["encode", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["products"][0]["uitCode"] == "UITCODE1"


def test_encode_rejects_invalid_file(runner: CliRunner, tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text('{"docID": 1}')
    result = runner.invoke(app, ["encode", str(path)])
    assert result.exit_code == 1


def test_submit_posts_file(runner: CliRunner, tmp_path: Path, document, mock_httpx_client):
    mock_httpx_client(url=DOCUMENT_CREATE_URL, status_code=200, content=b'{"value": "ok"}')
    path = _write_document(tmp_path / "doc.json", document)

    result = runner.invoke(app, ["submit", str(path), "--signature", "sig"])

    assert result.exit_code == 0
    assert "status: 200" in result.stdout
    assert '{"value": "ok"}' in result.stdout
    assert len(mock_httpx_client.calls) == 1


def test_submit_reports_http_error_status_without_failing(runner: CliRunner, tmp_path: Path, document, mock_httpx_client):
    path = _write_document(tmp_path / "doc.json", document)
    result = runner.invoke(app, ["submit", str(path), "-s", "sig", "--endpoint", "http://unregistered/create"])
    assert result.exit_code == 0
    assert "status: 404" in result.stdout


def test_submit_rejects_invalid_capacity(runner: CliRunner, tmp_path: Path, document, mock_httpx_client):
    path = _write_document(tmp_path / "doc.json", document)
    result = runner.invoke(app, ["submit", str(path), "-s", "sig", "--capacity", "0"])
    assert result.exit_code == 1
    assert mock_httpx_client.calls == []


def test_demo_submits_concurrently(runner: CliRunner, mock_httpx_client, monkeypatch):
    monkeypatch.setenv("CRPT_API_CAPACITY", "2")
    monkeypatch.setenv("CRPT_API_INTERVAL_SECONDS", "0.1")
    mock_httpx_client(url=DOCUMENT_CREATE_URL, status_code=200)

    result = runner.invoke(app, ["demo", "--count", "4"])

    assert result.exit_code == 0
    assert result.stdout.count("status: 200") == 4
    assert len(mock_httpx_client.calls) == 4
