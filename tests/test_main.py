from __future__ import annotations

import pytest

from crm_portal import __main__ as entrypoint


def test_main_exits_with_status_1_without_token(monkeypatch, capsys) -> None:
    monkeypatch.setattr(entrypoint, "load_dotenv", lambda: False)
    monkeypatch.delenv("HUBSPOT_TOKEN", raising=False)

    def _fail_run(*args, **kwargs):
        raise AssertionError("server must not start without a token")

    monkeypatch.setattr(entrypoint.uvicorn, "run", _fail_run)

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main()

    assert excinfo.value.code == 1
    assert "HUBSPOT_TOKEN" in capsys.readouterr().err


def test_main_serves_on_configured_port(monkeypatch) -> None:
    monkeypatch.setattr(entrypoint, "load_dotenv", lambda: False)
    monkeypatch.setenv("HUBSPOT_TOKEN", "pat-abc")
    monkeypatch.setenv("PORT", "4321")
    monkeypatch.delenv("BIND_HOST", raising=False)

    calls: list[dict] = []

    def _fake_run(app, **kwargs):
        calls.append(kwargs)

    monkeypatch.setattr(entrypoint.uvicorn, "run", _fake_run)

    entrypoint.main()

    assert calls == [{"host": "0.0.0.0", "port": 4321, "log_config": None}]


def test_main_exits_with_status_1_on_invalid_config(monkeypatch, capsys) -> None:
    monkeypatch.setattr(entrypoint, "load_dotenv", lambda: False)
    monkeypatch.setenv("HUBSPOT_TOKEN", "pat-abc")
    monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

    def _fail_run(*args, **kwargs):
        raise AssertionError("server must not start with an invalid config")

    monkeypatch.setattr(entrypoint.uvicorn, "run", _fail_run)

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main()

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err
