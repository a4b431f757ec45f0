from pathlib import Path
from typing import Any, List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Market data
    coingecko_api_key: str = Field(default="", description="Coingecko API key")
    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="Base URL for the Coingecko REST API",
    )
    enable_coingecko: bool = Field(default=True, description="Enable Coingecko provider")
    request_timeout_seconds: int = Field(default=15, description="Outbound request timeout")

    # LLM Provider Settings
    llm_provider: str = Field(default="anthropic", description="Default LLM provider")
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key",
        validation_alias=AliasChoices("anthropic_api_key", "llm_api_key", "ANTHROPIC_API_KEY", "LLM_API_KEY"),
    )
    llm_model: str = Field(default="claude-sonnet-4-20250514", description="Default LLM model")
    max_tokens: int = Field(default=1024, description="Maximum tokens for LLM response")
    temperature: float = Field(default=0.2, description="LLM temperature setting")

    @property
    def has_coingecko_key(self) -> bool:
        return bool(self.coingecko_api_key)

    @property
    def has_anthropic_key(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def has_llm_key(self) -> bool:
        """Check if we have an API key for the configured LLM provider"""
        if self.llm_provider.lower() in ["anthropic", "claude"]:
            return self.has_anthropic_key
        return False

    def missing_required(self) -> List[str]:
        missing: List[str] = []
        if not self.has_llm_key:
            missing.append(f"{self.llm_provider.upper()}_API_KEY")
        if not self.has_coingecko_key:
            missing.append("COINGECKO_API_KEY")
        return missing

    def ensure_required(self) -> None:
        """Fail fast when credentials the service cannot run without are absent."""

        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"{', '.join(missing)} not set in the environment variables. "
                "Please check your .env file."
            )

    def model_post_init(self, __context: Any) -> None:
        super().model_post_init(__context)
        object.__setattr__(self, "coingecko_base_url", self.coingecko_base_url.rstrip("/"))


# Global settings instance
settings = Settings()
