from unittest.mock import patch, Mock

import pytest

import main
from dependencies.credentials import HTTPAuthFormatError


def test_main_runs_uvicorn(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9200")

    with patch("main.uvicorn.run") as mock_run:
        main.main()

    mock_run.assert_called_once()
    app = mock_run.call_args.args[0]
    assert mock_run.call_args.kwargs == {"host": "127.0.0.1", "port": 9200}
    assert app.state.settings.port == 9200


@pytest.mark.parametrize("env_var, value", [("HTTP_AUTH", "alice:"), ("AUTH_FILE", "/nonexistent/auth.yml"), ("METRICS_PATH", "metrics")])
def test_main_exits_on_configuration_error(monkeypatch, caplog, env_var, value):
    monkeypatch.setenv(env_var, value)

    with patch("main.uvicorn.run") as mock_run, pytest.raises(SystemExit) as exc_info:
        main.main()

    assert exc_info.value.code == 1
    mock_run.assert_not_called()
    assert caplog.records[-1].levelname == "CRITICAL"


def test_main_logs_the_reason(caplog):
    with patch("main.create_app", Mock(side_effect=HTTPAuthFormatError("HTTP_AUTH should be formatted as user:password"))), pytest.raises(SystemExit):
        main.main()

    assert "HTTP_AUTH should be formatted as user:password" in caplog.text
