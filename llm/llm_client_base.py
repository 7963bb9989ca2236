"""
Base abstract class for LLM clients.

This defines the interface that all translation provider implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients.

    All LLM provider implementations (OpenAI, Ollama, etc.) must inherit from this
    class and implement the abstract methods.
    """

    def __init__(self, model: str, **kwargs):
        """
        Initialize the LLM client.

        Args:
            model: Model name/identifier
            **kwargs: Additional provider-specific configuration
        """
        self.model = model
        self.config = kwargs

    @abstractmethod
    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Perform a chat completion request.

        Args:
            prompt: The user prompt/message
            chat_history: Optional conversation history in format [{"role": "user/assistant", "content": "..."}]
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            The model's response as a string

        Raises:
            Exception: If the API call fails
        """
        pass

    @staticmethod
    def build_messages(
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None
    ) -> List[Dict[str, str]]:
        """Append the prompt to any prior conversation."""
        messages = []
        if chat_history:
            messages.extend(chat_history)
        messages.append({"role": "user", "content": prompt})
        return messages

    async def close(self):
        """Release network resources held by the client."""
        return None
