"""
Configuration management using Pydantic Settings.

Environment variables:
- OCR_API_KEY: API key for the OCR (vision chat) server
- OCR_SERVER_URL: Base URL for the OCR server
- OCR_COORDINATE_PAIRING: 'line' or 'positional'
- TRANSLATION_LLM_PROVIDER: 'openai' or 'ollama'
- DATABASE_URL: SQLAlchemy database URL
- MEDIA_ROOT: Directory holding uploaded images
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OCR (vision model behind an OpenAI-compatible endpoint)
    ocr_api_key: str = "123"
    ocr_server_url: str = "http://localhost:8000/v1"
    ocr_model: str = "gemini-2.5-flash-lite"
    ocr_max_tokens: int = 4096
    ocr_temperature: float = 0.0
    ocr_coordinate_pairing: str = "line"

    # Translation
    translation_llm_provider: str = "openai"
    translation_model: str = "gpt-4o-mini"
    translation_api_key: Optional[str] = None
    translation_max_retries: int = 1
    ollama_base_url: str = "http://localhost:11434"
    ollama_timeout: int = 300

    # Storage
    database_url: str = "sqlite:///image_translation.db"
    media_root: str = "media"

    # Extraction rules
    require_positive_area: bool = False

    log_level: str = "INFO"

    def get_translation_llm_config(self) -> dict:
        """Get translation client configuration as dictionary."""
        return {
            'provider': self.translation_llm_provider,
            'model': self.translation_model,
            'api_key': self.translation_api_key,
            'ollama_base_url': self.ollama_base_url,
            'ollama_timeout': self.ollama_timeout,
        }


# Global settings instance
settings = Settings()
