"""
Application settings loaded from environment variables.

This module uses Pydantic Settings to manage configuration from:
1. Environment variables
2. .env file
3. Default values
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from pokechat.errors import MissingCredentialError


DEFAULT_KB_PATH = Path(__file__).resolve().parent.parent / "kb" / "megas.json"


class Settings(BaseSettings):
    """
    Application settings with type validation.

    All settings can be overridden via environment variables or .env file.
    For example, to change the chat model, set GEMINI_MODEL=gemini-2.5-pro
    """

    # Gemini configuration
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    embedding_model: str = "models/text-embedding-004"

    # Seconds before an embedding or chat call is abandoned
    request_timeout: float = 60.0

    # Knowledge base and retrieval tuneables
    kb_path: Path = DEFAULT_KB_PATH
    similarity_threshold: float = 0.60  # embeddings can be modest on short queries
    retrieval_top_k: int = 2
    kb_debug: bool = False

    # Terminal
    default_bot: str = "pokedex-generic"

    # Data paths
    data_dir: Path = Path("data")
    save_transcripts: bool = True

    # Logging
    log_level: str = "WARNING"
    log_dir: Path = Path("logs")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    def require_api_key(self) -> str:
        """
        Return the Google API key or fail.

        Raises:
            MissingCredentialError: If GOOGLE_API_KEY is unset or blank
        """
        if not self.google_api_key or not self.google_api_key.strip():
            raise MissingCredentialError("Missing GOOGLE_API_KEY in environment or .env")
        return self.google_api_key


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: The application settings
    """
    return Settings()
