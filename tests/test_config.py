import pytest

from config import DEFAULT_MODEL, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "FLEET_LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(tmp_path):
    settings = get_settings(tmp_path)
    assert settings.openai_api_key is None
    assert settings.openai_model == DEFAULT_MODEL
    assert settings.log_level == "INFO"


def test_placeholder_key_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-your-key-here")
    assert get_settings(tmp_path).openai_api_key is None


def test_values_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-live-123 ")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("FLEET_LOG_LEVEL", "debug")
    settings = get_settings(tmp_path)
    assert settings.openai_api_key == "sk-live-123"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.log_level == "DEBUG"


def test_env_file_in_project_dir_is_loaded(tmp_path):
    (tmp_path / ".env").write_text("OPENAI_MODEL=from-dotenv\n", encoding="utf-8")
    assert get_settings(tmp_path).openai_model == "from-dotenv"
