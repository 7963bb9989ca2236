"""
Service wiring - Builds clients and services from settings.
"""
from typing import Optional

from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from config.settings import Settings, settings as default_settings
from llm.client_factory import LLMClientFactory
from llm.llm_client_base import BaseLLMClient
from utils.image_utils import FileSystemMediaResolver
from .extraction_service import ExtractionService
from .extraction_store import ExtractionStore
from .ocr_service import OCRService
from .reconciler import TranslationReconciler
from .response_parser import ResponseParser
from .translation_service import TranslationService, Translator


def get_ocr_client(settings: Optional[Settings] = None) -> AsyncOpenAI:
    """
    AsyncOpenAI client configured for the OCR server.
    """
    settings = settings or default_settings
    return AsyncOpenAI(
        api_key=settings.ocr_api_key,
        base_url=settings.ocr_server_url
    )


def get_ocr_service(
    client: Optional[AsyncOpenAI] = None,
    settings: Optional[Settings] = None
) -> OCRService:
    """
    OCR service, creating a client if none is given.
    """
    settings = settings or default_settings
    if client is None:
        client = get_ocr_client(settings)

    return OCRService(
        client=client,
        model=settings.ocr_model,
        max_tokens=settings.ocr_max_tokens,
        temperature=settings.ocr_temperature
    )


def get_translation_client(settings: Optional[Settings] = None) -> BaseLLMClient:
    """
    Translation client from settings.

    The caller owns the client and should ``await client.close()`` when done.
    """
    settings = settings or default_settings
    return LLMClientFactory.from_config(settings.get_translation_llm_config())


def get_translator(
    llm_client: Optional[BaseLLMClient] = None,
    settings: Optional[Settings] = None
) -> Translator:
    settings = settings or default_settings
    if llm_client is None:
        llm_client = get_translation_client(settings)
    return Translator(llm_client, max_retries=settings.translation_max_retries)


def get_translation_service(session: Session, translator: Translator) -> TranslationService:
    return TranslationService(session, translator)


def build_extraction_service(
    session: Session,
    ocr_service: Optional[OCRService] = None,
    translator: Optional[Translator] = None,
    media_resolver=None,
    settings: Optional[Settings] = None
) -> ExtractionService:
    """
    Extraction service bound to one session, with reconciliation enabled.

    Clients created here belong to the returned service; release them with
    ``await service.close()``.
    """
    settings = settings or default_settings
    translator = translator or get_translator(settings=settings)

    return ExtractionService(
        store=ExtractionStore(session, settings.require_positive_area),
        ocr_service=ocr_service or get_ocr_service(settings=settings),
        media_resolver=media_resolver or FileSystemMediaResolver(settings.media_root),
        reconciler=TranslationReconciler(session, translator),
        parser=ResponseParser(settings.ocr_coordinate_pairing)
    )
