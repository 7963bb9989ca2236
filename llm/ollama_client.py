"""
Ollama client implementation.

This wraps the Ollama API and implements the BaseLLMClient interface.
"""

import httpx
import json
from typing import Optional, Dict, List
from .llm_client_base import BaseLLMClient


class OllamaClient(BaseLLMClient):
    """
    LLM client for Ollama (local LLM server).
    """

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Ollama client.

        Args:
            model: Ollama model name (e.g., 'qwen2.5:7b', 'llama3:latest')
            base_url: Ollama server URL (default: http://localhost:11434)
            timeout: Request timeout in seconds (default: 300)
            transport: Optional httpx transport (used by tests)
            **kwargs: Additional configuration
        """
        super().__init__(model, **kwargs)

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Call Ollama chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            **kwargs: Additional parameters (temperature, etc.)

        Returns:
            Model response text

        Raises:
            ConnectionError: If cannot connect to Ollama server
            RuntimeError: If server returns an error or malformed JSON
        """
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, chat_history),
            "stream": False,
        }

        # Add optional parameters
        options = {}
        if 'temperature' in kwargs:
            options['temperature'] = kwargs['temperature']
        if options:
            payload['options'] = options

        try:
            response = await self.client.post("/api/chat", json=payload)
            response.raise_for_status()

            result = response.json()
            return result['message']['content'].strip()

        except httpx.ConnectError as e:
            raise ConnectionError(
                f"Could not connect to Ollama server at {self.base_url}. "
                f"Please ensure Ollama is running (e.g., 'ollama serve') and "
                f"you have pulled the model (e.g., 'ollama pull {self.model}'). "
                f"Error: {e}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise RuntimeError(
                f"Ollama server returned error: {e.response.status_code} - {e.response.text}"
            ) from e
        except (json.JSONDecodeError, KeyError) as e:
            raise RuntimeError(
                f"Invalid JSON response from Ollama: {response.text}"
            ) from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
