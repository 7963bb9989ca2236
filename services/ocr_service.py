"""
OCR Service - Reads text blocks from an image via a vision chat model.

This service builds the numbered-block prompt, calls an OpenAI-compatible
chat completion endpoint with the image attached, and returns the raw
answer for the ResponseParser.
"""
import logging
from typing import Optional

from core.constants import DEFAULT_OCR_PARAMS, OCR_PROMPT_TEMPLATE
from core.exceptions import UpstreamServiceError
from utils.image_utils import MediaImage, to_data_url

logger = logging.getLogger(__name__)


class OCRService:
    """Service for OCR processing using a vision LLM."""

    def __init__(
        self,
        client,
        model: str = "gemini-2.5-flash-lite",
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ):
        """
        Initialize OCR service.

        Args:
            client: AsyncOpenAI client instance
            model: Model name
            max_tokens: Completion token limit
            temperature: Sampling temperature
        """
        self.client = client
        self.model = model
        self.max_tokens = max_tokens or DEFAULT_OCR_PARAMS['max_tokens']
        self.temperature = (
            DEFAULT_OCR_PARAMS['temperature'] if temperature is None else temperature
        )

    @staticmethod
    def build_prompt(width: int, height: int) -> str:
        """OCR instructions for an image of the given size."""
        return OCR_PROMPT_TEMPLATE.format(width=width, height=height)

    async def extract_raw_text(self, image: MediaImage) -> str:
        """
        Run OCR on one image.

        Args:
            image: Resolved image payload

        Returns:
            The model's raw answer (possibly "No text found")

        Raises:
            UpstreamServiceError: If the call failed or returned no text
        """
        logger.info(
            "Extracting text from %s (%dx%d)", image.image_id, image.width, image.height
        )
        prompt = self.build_prompt(image.width, image.height)

        try:
            response = await self._call_model(prompt, to_data_url(image.data, image.mime_type))
        except Exception as e:
            logger.error("OCR call failed for %s: %s", image.image_id, e)
            raise UpstreamServiceError("ocr", str(e)) from e

        text = self._response_text(response)
        if not text or not text.strip():
            raise UpstreamServiceError("ocr", "model returned empty text")

        logger.debug("OCR answer for %s: %s", image.image_id, text[:300])
        return text

    async def _call_model(self, prompt: str, image_url: str):
        """Call the chat completion API with image and prompt."""
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_url}}
                ]
            }],
            max_tokens=self.max_tokens,
            temperature=self.temperature
        )

    async def close(self):
        """Close the chat client when it exposes ``close()``."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()

    @staticmethod
    def _response_text(response) -> Optional[str]:
        choices = getattr(response, 'choices', None)
        if not choices:
            return None
        return choices[0].message.content
