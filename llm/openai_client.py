"""
OpenAI client implementation.

This wraps the OpenAI API and implements the BaseLLMClient interface.
"""

import os
from typing import Optional, Dict, List
from openai import AsyncOpenAI
from .llm_client_base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """
    LLM client for OpenAI (or any OpenAI-compatible) API.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
        **kwargs
    ):
        """
        Initialize OpenAI client.

        Args:
            model: OpenAI model name (e.g., 'gpt-4o-mini')
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            base_url: Optional base URL of an OpenAI-compatible server
            client: Pre-built AsyncOpenAI instance (skips key lookup)
            **kwargs: Additional configuration
        """
        super().__init__(model, **kwargs)

        if client is not None:
            self.client = client
            return

        # Get API key from parameter or environment
        self.api_key = api_key or os.getenv('OPENAI_API_KEY')
        if not self.api_key:
            raise ValueError(
                "OpenAI API key not found. Please set OPENAI_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self.client = AsyncOpenAI(api_key=self.api_key, base_url=base_url)

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Call OpenAI chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            Model response text
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=self.build_messages(prompt, chat_history),
            **kwargs
        )

        content = response.choices[0].message.content
        return (content or "").strip()

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()
