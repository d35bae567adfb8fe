"""Tests for server configuration loading and the start script."""

import json

import pytest

from dashboard.config import ConfigError, DashboardSettings, load_settings
from scripts import start_web


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MOODGRID_CONFIG", "MOODGRID_DASHBOARD_HOST", "MOODGRID_DASHBOARD_PORT", "MOODGRID_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path, data):
    path = tmp_path / "conf.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_hostname_and_port(tmp_path):
    settings = load_settings(write_config(tmp_path, {"hostname": "127.0.0.1", "port": 8123}))
    assert isinstance(settings, DashboardSettings)
    assert settings.DASHBOARD_HOST == "127.0.0.1"
    assert settings.DASHBOARD_PORT == 8123


def test_upper_case_keys_are_accepted(tmp_path):
    path = write_config(tmp_path, {"hostname": "0.0.0.0", "port": 80, "log_level": "debug", "DATA_DIR": "elsewhere"})
    settings = load_settings(path)
    assert settings.LOG_LEVEL == "DEBUG"
    assert str(settings.DATA_DIR) == "elsewhere"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="could not find config"):
        load_settings(tmp_path / "nope.json")


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = write_config(tmp_path, {"hostname": "localhost", "port": 9000})
    monkeypatch.setenv("MOODGRID_CONFIG", str(path))
    assert load_settings().DASHBOARD_PORT == 9000


def test_missing_port_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(write_config(tmp_path, {"hostname": "127.0.0.1"}))


def test_environment_fills_gaps(tmp_path, monkeypatch):
    monkeypatch.setenv("MOODGRID_DASHBOARD_PORT", "8765")
    settings = load_settings(write_config(tmp_path, {"hostname": "127.0.0.1"}))
    assert settings.DASHBOARD_PORT == 8765


@pytest.mark.parametrize("data", [{"hostname": "h", "port": 0}, {"hostname": "h", "port": 70000},
                                  {"hostname": "h", "port": 80, "log_level": "LOUD"}, {"hostname": " ", "port": 80}])
def test_invalid_values(tmp_path, data):
    with pytest.raises(ConfigError):
        load_settings(write_config(tmp_path, data))


def test_invalid_json(tmp_path):
    path = tmp_path / "conf.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid JSON"):
        load_settings(path)


def test_non_object_json(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(write_config(tmp_path, [1, 2]))


def test_log_file_follows_settings(tmp_path):
    settings = load_settings(write_config(tmp_path, {"hostname": "h", "port": 80, "logs_dir": "var/log"}))
    assert settings.log_file is not None
    assert settings.log_file.name == "moodgrid.log"
    settings = load_settings(write_config(tmp_path, {"hostname": "h", "port": 80, "log_to_file": False}))
    assert settings.log_file is None


def test_start_script_exits_without_config(tmp_path, capsys):
    assert start_web.main(["--config", str(tmp_path / "missing.json")]) == 1
    assert "could not find config" in capsys.readouterr().err


def test_start_script_runs_uvicorn_with_overrides(tmp_path, monkeypatch):
    calls = {}

    def fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(start_web.uvicorn, "run", fake_run)
    monkeypatch.setattr(start_web, "setup_logger", lambda *args, **kwargs: None)
    path = write_config(tmp_path, {"hostname": "127.0.0.1", "port": 8000, "data_dir": str(tmp_path / "data")})

    assert start_web.main(["--config", str(path), "--port", "8111"]) == 0
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 8111
    assert calls["log_level"] == "info"
    assert calls["app"].state.settings.DASHBOARD_PORT == 8111
