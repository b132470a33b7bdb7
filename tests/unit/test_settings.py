"""
Unit Tests for settings loading and the logs manager
"""

from unittest.mock import patch

from config.settings import load_settings
from storage.logs_manager import LogsManager


def _load(monkeypatch, tmp_path, **env):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path / "reports"))
    for key in ("LOG_LEVEL", "LOG_CONSOLE_OUTPUT", "ALLOW_INTERNSHIP_REDECISION"):
        monkeypatch.delenv(key, raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    # Keep a developer's .env out of the test
    with patch("config.settings.load_dotenv"):
        return load_settings()


def test_defaults(monkeypatch, tmp_path):
    settings = _load(monkeypatch, tmp_path)
    assert settings['system']['log_level'] == 'INFO'
    assert settings['logging']['console_output'] is False
    assert settings['policy']['allow_internship_redecision'] is False
    assert (tmp_path / "data" / "logs").is_dir()
    assert (tmp_path / "reports").is_dir()


def test_flags_and_level(monkeypatch, tmp_path):
    settings = _load(
        monkeypatch, tmp_path,
        LOG_LEVEL="debug", LOG_CONSOLE_OUTPUT="yes", ALLOW_INTERNSHIP_REDECISION="1",
    )
    assert settings['system']['log_level'] == 'DEBUG'
    assert settings['logging']['console_output'] is True
    assert settings['policy']['allow_internship_redecision'] is True


def test_invalid_values_fall_back(monkeypatch, tmp_path, capsys):
    settings = _load(monkeypatch, tmp_path, LOG_LEVEL="LOUD", ALLOW_INTERNSHIP_REDECISION="sometimes")
    assert settings['system']['log_level'] == 'INFO'
    assert settings['policy']['allow_internship_redecision'] is False
    assert "WARNING" in capsys.readouterr().out


def test_logs_manager_writes_daily_file(settings, capsys):
    manager = LogsManager(settings)
    manager.initialize()
    manager.info("quiet message")
    manager.warning("loud message")
    manager.shutdown()

    content = manager.log_file.read_text(encoding="utf-8")
    assert "quiet message" in content
    assert "[WARNING] loud message" in content
    assert manager.log_file.name.startswith("app_")

    out = capsys.readouterr().out
    assert "quiet message" not in out
    assert "loud message" in out
