from pathlib import Path

from config.settings import DEFAULT_CONTENT_PATH, get_settings


def test_defaults(monkeypatch):
    for name in ("WRAP_CONTENT_PATH", "WRAP_LOG_LEVEL", "WRAP_LOG_JSON", "WRAP_CARD_FONT_PATH", "WRAP_CARD_OUTPUT_PATH"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.content_path == DEFAULT_CONTENT_PATH
    assert Path(settings.content_path).is_file()
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.card_font_path is None
    assert settings.card_output_path == "my-semester-wrap.png"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WRAP_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("WRAP_LOG_JSON", "true")
    monkeypatch.setenv("WRAP_SHARE_URL", "https://wrap.example")
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.share_url == "https://wrap.example"
