"""
Translation Service - Translations of extracted text blocks.

Translations are keyed by the stable text id of the extraction they were
made from, so they survive edits of the extraction itself.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.constants import TRANSLATION_PROMPT_TEMPLATE
from core.exceptions import NotFoundError, UpstreamServiceError
from data.db_models import Translation
from data.repositories import TranslationRepository
from llm.llm_client_base import BaseLLMClient

logger = logging.getLogger(__name__)


class Translator:
    """
    Thin wrapper over an LLM client that translates one text at a time.
    """

    def __init__(self, llm_client: BaseLLMClient, max_retries: int = 1):
        """
        Initialize translator.

        Args:
            llm_client: LLM client for translations
            max_retries: Total attempts per call; 1 means no retry
        """
        self.llm_client = llm_client
        self.max_retries = max(1, max_retries)

    async def translate(self, text: str, target_language: str) -> str:
        """
        Translate a piece of text.

        Args:
            text: Source text
            target_language: Target language code (e.g., 'es', 'fr')

        Returns:
            Trimmed translated text

        Raises:
            UpstreamServiceError: If every attempt failed or the answer was empty
        """
        if not text or not text.strip():
            return ""

        prompt = TRANSLATION_PROMPT_TEMPLATE.format(
            target_language=target_language, text=text
        )

        last_error = None
        for attempt in range(self.max_retries):
            try:
                response = await self.llm_client.chat_completion(prompt)
            except Exception as e:
                last_error = e
                logger.warning(
                    "Translation to %s failed (attempt %d/%d): %s",
                    target_language, attempt + 1, self.max_retries, e
                )
                continue

            translated = (response or "").strip()
            if translated:
                return translated
            last_error = ValueError("empty response")

        raise UpstreamServiceError("translation", str(last_error))

    async def close(self):
        """Release the underlying LLM client."""
        await self.llm_client.close()


class TranslationService:
    """Service for creating and maintaining translations."""

    def __init__(self, session: Session, translator: Translator):
        """
        Initialize translation service.

        Args:
            session: SQLAlchemy database session
            translator: Translator used for new or changed translations
        """
        self.session = session
        self.translator = translator
        self.translations = TranslationRepository(session)

    def get(self, translation_id: str) -> Translation:
        translation = self.translations.get_by_id(translation_id)
        if translation is None:
            raise NotFoundError("Translation", translation_id)
        return translation

    async def create_translation(
        self,
        image_id: str,
        original_text_id: str,
        original_text: str,
        target_language: str,
        owner_id: Optional[str] = None
    ) -> Translation:
        """
        Translate an extraction's text and store the result.

        Nothing is stored when the translation call fails.
        """
        translated = await self.translator.translate(original_text, target_language)

        translation = self.translations.create(
            image_id=image_id,
            original_text_id=original_text_id,
            original_text=original_text,
            target_language=target_language,
            translated_text=translated,
            owner_id=owner_id
        )
        self.session.commit()
        logger.info(
            "Created %s translation %s for text %s",
            target_language, translation.id, original_text_id
        )
        return translation

    def edit_translation(self, translation_id: str, new_text: str) -> Translation:
        """Overwrite a translation by hand."""
        translation = self.get(translation_id)
        translation.translated_text = new_text
        self.session.commit()
        return translation

    async def change_language(
        self,
        translation_id: str,
        new_target_language: str
    ) -> Translation:
        """Re-translate the stored original text into another language."""
        translation = self.get(translation_id)
        translated = await self.translator.translate(
            translation.original_text, new_target_language
        )
        translation.target_language = new_target_language
        translation.translated_text = translated
        self.session.commit()
        return translation

    def delete_translation(self, translation_id: str):
        translation = self.get(translation_id)
        self.translations.delete(translation)
        self.session.commit()

    def list_for_text(self, original_text_id: str) -> List[Translation]:
        return self.translations.list_for_text(original_text_id)

    def list_for_image(
        self,
        image_id: str,
        target_language: Optional[str] = None
    ) -> List[Translation]:
        return self.translations.list_for_image(image_id, target_language)
