import pytest

from directory_admin.config import settings
from directory_admin.config.settings import AppConfig, DEFAULT_WEAVY_URL, DEFAULT_REQUEST_TIMEOUT


@pytest.fixture(autouse=True)
def no_run_secrets(monkeypatch, tmp_path):
    """Point /run/secrets at an empty directory."""
    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    for var in ("WEAVY_API_KEY", "WEAVY_URL", "WEAVY_REQUEST_TIMEOUT", "FLASK_SECRET_KEY", "FLASK_SESSION_COOKIE_SECURE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def test_load_settings_defaults_when_environment_empty():
    cfg = settings.load_settings()
    assert cfg.api_key == ""
    assert cfg.base_url == DEFAULT_WEAVY_URL
    assert cfg.request_timeout == DEFAULT_REQUEST_TIMEOUT
    assert cfg.secret_key
    assert cfg.is_configured is False


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("WEAVY_API_KEY", "wys_env")
    monkeypatch.setenv("WEAVY_URL", "https://example.weavy.io/")
    monkeypatch.setenv("WEAVY_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("FLASK_SESSION_COOKIE_SECURE", "false")

    cfg = settings.load_settings()

    assert cfg.api_key == "wys_env"
    assert cfg.base_url == "https://example.weavy.io"
    assert cfg.request_timeout == 12.5
    assert cfg.session_cookie_secure is False
    assert cfg.is_configured is True


def test_api_key_prefers_run_secrets(monkeypatch, no_run_secrets):
    (no_run_secrets / "weavy_api_key").write_text("wys_from_file\n")
    monkeypatch.setenv("WEAVY_API_KEY", "wys_env")

    cfg = settings.load_settings()

    assert cfg.api_key == "wys_from_file"


@pytest.mark.parametrize("raw", ["abc", "-1", "0"])
def test_invalid_timeout_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("WEAVY_REQUEST_TIMEOUT", raw)
    assert settings.load_settings().request_timeout == DEFAULT_REQUEST_TIMEOUT


def test_api_key_is_never_printed(monkeypatch, capsys):
    monkeypatch.setenv("WEAVY_API_KEY", "wys_super_secret")
    settings.load_settings()
    captured = capsys.readouterr()
    assert "wys_super_secret" not in captured.out + captured.err
    assert "api_key=***" in captured.err


def test_is_configured_requires_both_values():
    assert AppConfig(api_key="k", base_url="").is_configured is False
    assert AppConfig(api_key="", base_url="https://x").is_configured is False
    assert AppConfig(api_key="k", base_url="https://x").is_configured is True


def test_explicit_overrides_win_and_silence_empty_key_warning(monkeypatch, capsys):
    monkeypatch.setenv("WEAVY_URL", "https://env.test")

    cfg = settings.load_settings(api_key="wys_flag", base_url="https://flag.test/")

    assert cfg.api_key == "wys_flag"
    assert cfg.base_url == "https://flag.test"
    err = capsys.readouterr().err
    assert "WEAVY_API_KEY is empty" not in err
    assert "base_url=https://flag.test;" in err
