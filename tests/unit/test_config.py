"""Settings unit tests"""

import pytest
from pydantic import ValidationError

from src.config import Settings, PLACEHOLDER_API_KEY


class TestSettingsDefaults:
    """Defaults with a clean environment"""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("OPENAI_API_KEY", "MOCK_LLM", "ENVIRONMENT", "LOG_LEVEL", "PORT"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.port == 3000
        assert config.environment == "development"
        assert config.model_version == "1.0.0"
        assert config.llm_model == "gpt-3.5-turbo"
        assert config.llm_temperature == 0.3
        assert config.llm_max_tokens == 300
        assert config.llm_timeout_seconds == 10.0
        assert config.openai_api_key is None
        assert config.external_assessment_enabled is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-live-123")
        config = Settings(_env_file=None)

        assert config.port == 8080
        assert config.has_openai_key is True
        assert config.external_assessment_enabled is True


class TestSettingsValidation:
    """Field validators"""

    def test_placeholder_key_is_not_a_key(self):
        config = Settings(_env_file=None, openai_api_key=PLACEHOLDER_API_KEY)
        assert config.has_openai_key is False

    def test_mock_llm_enables_assessment(self):
        config = Settings(_env_file=None, openai_api_key=None, mock_llm=True)
        assert config.external_assessment_enabled is True

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, port=port)
