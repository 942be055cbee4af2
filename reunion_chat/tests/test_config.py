"""
Tests for settings loading.
"""

from reunion_chat.config import Settings, get_settings, load_config


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        config = Settings(_env_file=None)

        assert config.gemini_api_key == ""
        assert config.max_message_length == 1000
        assert config.provider_timeout_seconds == 30.0
        assert config.chat_rate_limit == "100/15 minutes"

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")

        assert Settings(_env_file=None).gemini_api_key == "secret"

    def test_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("REUNION_RATE_LIMIT_MAX_REQUESTS", "5")
        monkeypatch.setenv("REUNION_RATE_LIMIT_ENABLED", "false")

        config = Settings(_env_file=None)

        assert config.rate_limit_max_requests == 5
        assert config.rate_limit_enabled is False


class TestYamlConfig:
    """Tests for config.yaml overrides."""

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.yaml") == {}

    def test_yaml_values_applied(self, tmp_path, monkeypatch):
        monkeypatch.delenv("REUNION_PORT", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            "server:\n"
            "  port: 9090\n"
            "rate_limit:\n"
            "  max_requests: 20\n"
            "provider:\n"
            "  model: gemini-2.0-flash\n"
            "cors:\n"
            "  origins:\n"
            "    - https://reunion.example.org\n"
        )

        config = get_settings(path)

        assert config.port == 9090
        assert config.rate_limit_max_requests == 20
        assert config.gemini_model == "gemini-2.0-flash"
        assert config.cors_origins == ["https://reunion.example.org"]

    def test_environment_beats_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REUNION_PORT", "7000")
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  port: 9090\n")

        assert get_settings(path).port == 7000

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("rate_limit:\n  window_minutes: 30\n")
        monkeypatch.setenv("REUNION_CONFIG_PATH", str(path))

        assert load_config() == {"rate_limit": {"window_minutes": 30}}
