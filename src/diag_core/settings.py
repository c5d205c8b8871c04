"""Application settings via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class GradingSettings(BaseSettings):
    """Grading engine behaviour."""

    model_config = SettingsConfigDict(env_prefix="GRADING_")

    reject_duplicates: bool = True
    human_oversight_id: str = "human_oversight"


class DrafterSettings(BaseSettings):
    """LLM drafting endpoint settings."""

    model_config = SettingsConfigDict(env_prefix="DRAFTER_")

    api_url: str = "https://api.anthropic.com"
    api_key: str = ""
    api_version: str = "2023-06-01"
    model: str = "claude-sonnet-4-6"
    max_tokens: int = 4096
    timeout: float = 60.0


class ServiceSettings(BaseSettings):
    """HTTP service settings."""

    model_config = SettingsConfigDict(env_prefix="SERVICE_")

    name: str = "grading-api"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
