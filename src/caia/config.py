"""Configuration management for Caia."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .errors import ConfigurationError

ENV_FILES = (".env", ".env.local")


def load_env_files(directory: Optional[Path] = None) -> list[Path]:
    """Load .env then .env.local from ``directory`` without overriding the environment.

    Returns the files that were found and loaded.
    """
    base = directory or Path.cwd()
    loaded = []
    for name in ENV_FILES:
        path = base / name
        if path.is_file():
            load_dotenv(path, override=False)
            loaded.append(path)
    return loaded


load_env_files()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


class Settings(BaseModel):
    """Application settings."""

    # LLM Provider settings ('anthropic' or 'openrouter')
    llm_provider: str = Field(default_factory=lambda: os.getenv("LLM_PROVIDER", "anthropic"))

    # Anthropic API key (required when LLM_PROVIDER=anthropic)
    anthropic_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY"))

    # OpenRouter API configuration (required when LLM_PROVIDER=openrouter)
    openrouter_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY"))
    openrouter_model: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_MODEL", "anthropic/claude-3.5-sonnet")
    )

    # Model configuration
    model_name: str = Field(default_factory=lambda: os.getenv("MODEL_NAME", "claude-3-5-sonnet-latest"))
    max_tokens: int = Field(default_factory=lambda: int(os.getenv("MAX_TOKENS", "1024")))

    # Workspace that is indexed and that instructions are applied to
    workspace_root: Path = Field(default_factory=lambda: Path(os.getenv("CAIA_WORKSPACE", ".")))

    # Characters of file content shown before asking for confirmation
    preview_max_chars: int = Field(default_factory=lambda: int(os.getenv("PREVIEW_MAX_CHARS", "200")))

    # Logging
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    log_file: Optional[Path] = Field(default_factory=lambda: _env_path("CAIA_LOG_FILE"))

    # LLM call log (JSONL, one record per streamed response)
    enable_call_logging: bool = Field(default_factory=lambda: _env_flag("ENABLE_CALL_LOGGING"))
    call_log_path: Path = Field(
        default_factory=lambda: Path(os.getenv("CALL_LOG_PATH", "logs/llm_calls.jsonl"))
    )

    @property
    def active_model(self) -> str:
        """Model name for the selected provider."""
        if self.llm_provider == "openrouter":
            return self.openrouter_model
        return self.model_name


def require_api_key(settings: Settings) -> str:
    """Return the API key for the configured provider or raise ConfigurationError."""
    if settings.llm_provider == "openrouter":
        key, env_name = settings.openrouter_api_key, "OPENROUTER_API_KEY"
    else:
        key, env_name = settings.anthropic_api_key, "ANTHROPIC_API_KEY"

    if key:
        return key

    raise ConfigurationError(
        f"{env_name} not found in environment variables or .env files.\n"
        "Please either:\n"
        f"1. Create a .env file in {Path.cwd()} with {env_name}='your-api-key', or\n"
        f"2. Set it in your environment with: export {env_name}='your-api-key'"
    )


settings = Settings()
