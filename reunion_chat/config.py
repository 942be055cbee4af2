"""
Configuration management for the reunion chat relay.

Settings come from environment variables (``REUNION_`` prefix, plus
``GEMINI_API_KEY`` for the provider credential), layered over an optional
config.yaml in the project root.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    api_title: str = "Reunion Chatbot Backend"
    api_version: str = "1.0.0"
    api_description: str = "Chat relay for the Pearson College UWC 20th Reunion"
    service_name: str = "reunion-chatbot-backend"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS Settings
    cors_origins: list[str] = [
        "https://your-reunion-website.com",
        "http://localhost:3000",
        "http://localhost:8000",
        "http://localhost:8080",
        "http://localhost:8088",
        "http://localhost:5000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8080",
        "http://127.0.0.1:8088",
        "http://127.0.0.1:5000",
    ]
    cors_origin_regex: str = (
        r"https://([a-z0-9-]+\.)+(netlify\.app|vercel\.app|github\.io|pages\.dev)$"
    )

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_minutes: int = 15
    rate_limit_storage_uri: str = "memory://"

    # Provider Settings
    gemini_api_key: str = Field(
        "", validation_alias=AliasChoices("GEMINI_API_KEY", "REUNION_GEMINI_API_KEY")
    )
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    provider_timeout_seconds: float = 30.0

    # Message validation
    max_message_length: int = 1000

    model_config = SettingsConfigDict(env_prefix="REUNION_", env_file=".env", extra="ignore")

    @property
    def chat_rate_limit(self) -> str:
        """Rate limit string understood by slowapi, e.g. ``100/15 minutes``."""
        return f"{self.rate_limit_max_requests}/{self.rate_limit_window_minutes} minutes"

    @property
    def retry_after(self) -> str:
        return f"{self.rate_limit_window_minutes} minutes"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration overrides from a YAML file.

    Args:
        config_path: Path to the YAML file. Defaults to REUNION_CONFIG_PATH or
            config.yaml in the project root (one level above the package).

    Returns:
        Configuration dictionary (empty when no file exists)
    """
    if config_path is None:
        env_path = os.environ.get("REUNION_CONFIG_PATH")
        if env_path:
            config_path = Path(env_path)
        else:
            config_path = Path(__file__).parent.parent / "config.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    return config


def _flatten_config(config: dict[str, Any]) -> dict[str, Any]:
    """Map the sectioned YAML layout onto flat Settings field names."""
    values: dict[str, Any] = {}

    server = config.get("server", {})
    for key in ("host", "port"):
        if key in server:
            values[key] = server[key]

    rate_limit = config.get("rate_limit", {})
    for key in ("enabled", "max_requests", "window_minutes", "storage_uri"):
        if key in rate_limit:
            values[f"rate_limit_{key}"] = rate_limit[key]

    provider = config.get("provider", {})
    if "model" in provider:
        values["gemini_model"] = provider["model"]
    if "base_url" in provider:
        values["gemini_base_url"] = provider["base_url"]
    if "timeout_seconds" in provider:
        values["provider_timeout_seconds"] = provider["timeout_seconds"]

    cors = config.get("cors", {})
    if "origins" in cors:
        values["cors_origins"] = cors["origins"]
    if "origin_regex" in cors:
        values["cors_origin_regex"] = cors["origin_regex"]

    return values


def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get application settings.

    YAML values fill in defaults; anything set in the environment wins.

    Returns:
        Settings instance
    """
    defaults = Settings()
    overrides = _flatten_config(load_config(config_path))

    # Fields explicitly set from the environment keep their values
    explicit = defaults.model_fields_set
    for name, value in overrides.items():
        if name not in explicit:
            setattr(defaults, name, value)

    return defaults


# Global settings instance
settings = get_settings()
