import json

import pytest

from conftest import make_handler, make_s3
from speech_lambda import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("S3_BUCKET_NAME", "SPEECH_LAMBDA_SETTINGS"):
        monkeypatch.delenv(name, raising=False)


def test_cli_dry_run(capsys):
    code = cli.main(["--text", "dry run test", "--dry-run"])
    assert code == 0
    out = capsys.readouterr().out
    assert "DRY_RUN_OK" in out


def test_cli_dry_run_json(capsys):
    code = cli.main(["Hallo", "--voice", "Vicki", "--language", "de-DE", "--dry-run", "--json"])
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    summary = json.loads(next(line for line in lines if line.startswith("{")))
    assert summary["voice"] == "Vicki"
    assert summary["language"] == "de-DE"
    assert summary["engines"] == ["neural", "standard"]


def test_cli_dry_run_rejects_long_text(capsys):
    code = cli.main(["--text", "a" * 3001, "--dry-run"])
    assert code == 1
    assert "TEXT_TOO_LONG" in capsys.readouterr().out


def test_cli_requires_text():
    with pytest.raises(SystemExit):
        cli.main([])


def test_cli_invokes_handler(capsys, monkeypatch):
    fake = make_handler()
    monkeypatch.setattr("speech_lambda.handler.get_handler", lambda settings=None: fake)
    code = cli.main(["Hello world", "--json"])
    assert code == 0
    body = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert body["fileName"].startswith("speech-")


def test_cli_returns_1_on_failure(capsys, monkeypatch):
    fake = make_handler(s3=make_s3(fail=True))
    monkeypatch.setattr("speech_lambda.handler.get_handler", lambda settings=None: fake)
    assert cli.main(["Hello world"]) == 1
    assert "status: 500" in capsys.readouterr().out


def test_cli_event_file(tmp_path, capsys, monkeypatch):
    fake = make_handler()
    monkeypatch.setattr("speech_lambda.handler.get_handler", lambda settings=None: fake)
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"httpMethod": "OPTIONS"}), encoding="utf-8")
    assert cli.main(["--event", str(event_path)]) == 0
    assert "status: 200" in capsys.readouterr().out
