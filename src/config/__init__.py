"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from typing import List, Optional


# API key value that the demo environment ships with; never a real credential
PLACEHOLDER_API_KEY = "demo-key"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="remediation-router", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    model_version: str = Field(
        default="1.0.0",
        description="Version of the classification model reported in results"
    )
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port", ge=1, le=65535)

    # ========== External Assessment (OpenAI) ==========
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key; external assessment is skipped when unset"
    )
    mock_llm: bool = Field(
        default=False,
        description="Use mock LLM responses for testing (no API calls)"
    )
    llm_model: str = Field(
        default="gpt-3.5-turbo",
        description="Chat model used for the external assessment"
    )
    llm_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for the assessment call",
        ge=0.0,
        le=1.0
    )
    llm_max_tokens: int = Field(
        default=300,
        description="Max tokens the assessment may generate",
        ge=1,
        le=4000
    )
    llm_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the assessment call",
        gt=0,
        le=120
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=()
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production", "test"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level names."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def has_openai_key(self) -> bool:
        """True when a real (non-placeholder) OpenAI key is configured."""
        return bool(self.openai_api_key) and self.openai_api_key != PLACEHOLDER_API_KEY

    @property
    def external_assessment_enabled(self) -> bool:
        """Whether classification will attempt an external assessment."""
        return self.mock_llm or self.has_openai_key


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Channel(str):
    """Channels a support ticket can arrive through."""
    MOBILE_APP = "mobile_app"
    WEB_APP = "web_app"
    API = "api"
    PHONE = "phone"
    EMAIL = "email"
    CHAT = "chat"
    BRANCH = "branch"
    INTEGRATION = "integration"


class Severity(str):
    """Ticket severity levels, lowest first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DecisionCategory(str):
    """The two remediation paths a ticket can be routed to."""
    TECHNICAL_REMEDIATION = "technical_remediation"    # code-level fix
    OPERATIONAL_WORKFLOW = "operational_workflow"      # workflow / process handling


# ========== Lists for validation ==========

VALID_CHANNELS = [
    Channel.MOBILE_APP, Channel.WEB_APP, Channel.API, Channel.PHONE,
    Channel.EMAIL, Channel.CHAT, Channel.BRANCH, Channel.INTEGRATION
]
# Ordered: low < medium < high < critical
SEVERITY_LEVELS = [
    Severity.LOW, Severity.MEDIUM,
    Severity.HIGH, Severity.CRITICAL
]
DECISION_CATEGORIES = [
    DecisionCategory.TECHNICAL_REMEDIATION,
    DecisionCategory.OPERATIONAL_WORKFLOW
]
