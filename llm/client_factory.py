"""
Factory for the translation LLM clients.
"""
from typing import Any, Dict

from .llm_client_base import BaseLLMClient
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient

SUPPORTED_PROVIDERS = ('openai', 'ollama')


class LLMClientFactory:
    """
    Builds the client matching a provider name.
    """

    @staticmethod
    def create_client(provider: str, model: str, **kwargs) -> BaseLLMClient:
        """
        Create an LLM client for ``provider``.

        Args:
            provider: 'openai' or 'ollama' (case-insensitive)
            model: Model name
            **kwargs: api_key / base_url for OpenAI,
                ollama_base_url / ollama_timeout for Ollama

        Raises:
            ValueError: If provider is not supported
        """
        provider = (provider or '').lower().strip()

        if provider == 'openai':
            return OpenAIClient(
                model=model,
                api_key=kwargs.get('api_key'),
                base_url=kwargs.get('base_url')
            )
        if provider == 'ollama':
            return OllamaClient(
                model=model,
                base_url=kwargs.get('ollama_base_url') or 'http://localhost:11434',
                timeout=kwargs.get('ollama_timeout') or 300
            )
        raise ValueError(
            f"Unsupported LLM provider: '{provider}'. "
            f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> BaseLLMClient:
        """Create a client from ``Settings.get_translation_llm_config()`` output."""
        options = dict(config)
        return cls.create_client(options.pop('provider'), options.pop('model'), **options)
