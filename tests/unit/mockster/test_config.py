"""Tests for environment-driven settings."""

from mockster.config import DEFAULT_MAX_POINTS, DEFAULT_MAX_SAMPLES, Settings, get_settings


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch) -> None:
        for key in (
            "MOCKSTER_HOST",
            "PORT",
            "LOG_LEVEL",
            "LOG_FORMAT",
            "MOCKSTER_PATH_PREFIX",
            "MOCKSTER_HONOR_LATENCY",
            "MOCKSTER_MAX_LATENCY_MS",
            "MOCKSTER_MAX_POINTS",
            "MOCKSTER_MAX_SAMPLES",
        ):
            monkeypatch.delenv(key, raising=False)

        settings = Settings.from_env()
        assert settings == Settings()
        assert settings.port == 8001
        assert settings.max_points == DEFAULT_MAX_POINTS
        assert settings.max_samples == DEFAULT_MAX_SAMPLES
        assert settings.honor_latency is True

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("MOCKSTER_HOST", "127.0.0.1")
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("MOCKSTER_HONOR_LATENCY", "false")
        monkeypatch.setenv("MOCKSTER_MAX_LATENCY_MS", "500")
        monkeypatch.setenv("MOCKSTER_MAX_POINTS", "100")
        monkeypatch.setenv("MOCKSTER_MAX_SAMPLES", "2500")

        settings = Settings.from_env()
        assert settings.host == "127.0.0.1"
        assert settings.port == 9090
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "JSON"
        assert settings.honor_latency is False
        assert settings.max_latency_ms == 500
        assert settings.max_points == 100
        assert settings.max_samples == 2500

    def test_invalid_int_falls_back(self, monkeypatch, caplog) -> None:
        monkeypatch.setenv("PORT", "eighty")
        assert Settings.from_env().port == 8001
        assert "PORT" in caplog.text

    def test_max_points_floor(self, monkeypatch) -> None:
        monkeypatch.setenv("MOCKSTER_MAX_POINTS", "0")
        assert Settings.from_env().max_points == 1

    def test_max_samples_floor(self, monkeypatch) -> None:
        monkeypatch.setenv("MOCKSTER_MAX_SAMPLES", "-5")
        assert Settings.from_env().max_samples == 1

    def test_prefix_normalized(self, monkeypatch) -> None:
        monkeypatch.setenv("MOCKSTER_PATH_PREFIX", "prometheus/")
        assert Settings.from_env().path_prefix == "/prometheus"

    def test_get_settings_is_cached(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "1234")
        first = get_settings()
        monkeypatch.setenv("PORT", "4321")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().port == 4321
