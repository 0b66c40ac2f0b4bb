from sarima_engine import config


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SARIMA_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SARIMA_LOG_JSON", "true")
    monkeypatch.setenv("SARIMA_ARTIFACTS_DIR", "/tmp/out")
    config.reset_settings_cache()
    try:
        settings = config.get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.artifacts_dir == "/tmp/out"
    finally:
        config.reset_settings_cache()


def test_settings_defaults(monkeypatch):
    for name in ("SARIMA_LOG_LEVEL", "SARIMA_LOG_JSON", "SARIMA_ARTIFACTS_DIR"):
        monkeypatch.delenv(name, raising=False)
    config.reset_settings_cache()
    settings = config.get_settings()
    assert settings == config.Settings()
    config.reset_settings_cache()
