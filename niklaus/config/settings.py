"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InferenceSettings(BaseSettings):
    """Support assistant inference provider configuration."""

    model_config = SettingsConfigDict(env_prefix="INFERENCE_")

    provider: Literal["gemini", "ollama"] = "gemini"
    model_name: str = "gemini-2.5-flash"
    api_key: str = ""
    host: str = "http://localhost:11434"
    timeout: int = 60
    max_tokens: int = 2048
    temperature: float = 0.4

    # Circuit breaker settings
    failure_threshold: int = 3
    cooldown_seconds: int = 60


class SupportSettings(BaseSettings):
    """Fixed texts used by the support chat."""

    model_config = SettingsConfigDict(env_prefix="SUPPORT_")

    system_instruction: str = (
        "Você é o suporte Niklaus B2B. Responda em Português, seja profissional "
        "e ajude com dúvidas de pedidos, prazos e faturamento."
    )
    empty_reply_text: str = "Desculpe, não consegui processar sua dúvida agora."
    failure_text: str = "Erro ao conectar com a IA. Tente novamente em instantes."
    greeting: str = "Olá! Como posso ajudar com seus pedidos hoje?"


class StoreSettings(BaseSettings):
    """In-memory collaborator configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    # JSON file with accounts, entities and products loaded at startup
    seed_path: Path | None = None


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Idle client sessions kept in memory
    max_sessions: int = 500


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Niklaus B2B"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    inference: InferenceSettings = Field(default_factory=InferenceSettings)
    support: SupportSettings = Field(default_factory=SupportSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
