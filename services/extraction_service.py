"""
Extraction Service

Orchestrates the OCR workflow for one image (resolve, OCR, parse, store)
and source text edits followed by translation reconciliation.
"""
import logging
from typing import Optional

from core.models import ExtractionOutcome, ReconcileReport, TextEdited
from .extraction_store import ExtractionStore
from .ocr_service import OCRService
from .reconciler import TranslationReconciler
from .response_parser import ResponseParser, extract_declared_count

logger = logging.getLogger(__name__)


class ExtractionService:
    """Service tying OCR, parsing, storage and reconciliation together."""

    def __init__(
        self,
        store: ExtractionStore,
        ocr_service: OCRService,
        media_resolver,
        reconciler: Optional[TranslationReconciler] = None,
        parser: Optional[ResponseParser] = None
    ):
        """
        Initialize extraction service.

        Args:
            store: Extraction store bound to the request's session
            ocr_service: OCR collaborator
            media_resolver: Object with ``resolve(image_id) -> MediaImage``
            reconciler: Translation reconciler; edits skip reconciliation without one
            parser: Response parser (default: line pairing)
        """
        self.store = store
        self.ocr_service = ocr_service
        self.media_resolver = media_resolver
        self.reconciler = reconciler
        self.parser = parser or ResponseParser()

    async def extract_text_from_media(self, image_id: str) -> ExtractionOutcome:
        """
        OCR an image and store every recognized block.

        Raises:
            NotFoundError: If the image cannot be resolved
            UpstreamServiceError: If the OCR call fails; nothing is stored
        """
        image = self.media_resolver.resolve(image_id)
        raw = await self.ocr_service.extract_raw_text(image)

        blocks = self.parser.parse(raw)
        results = self.store.create_from_parsed_blocks(image_id, blocks)

        return ExtractionOutcome(
            image_id=image_id,
            raw_response=raw,
            result_ids=[r.id for r in results],
            declared_count=extract_declared_count(raw)
        )

    async def edit_text(self, result_id: str, new_text: str) -> ReconcileReport:
        """
        Change a result's text, then re-translate its translations.

        Reconciliation failures are reported, never raised: the edit itself
        has already been committed.
        """
        event = self.store.edit_text(result_id, new_text)
        return await self.reconcile(event)

    async def reconcile(self, event: TextEdited) -> ReconcileReport:
        if self.reconciler is None:
            return ReconcileReport(text_id=event.text_id)
        return await self.reconciler.handle(event)

    async def close(self):
        """
        Release the OCR and translation clients.

        Services built by ``services.dependencies`` own their clients; call
        this once the service is no longer needed.
        """
        await self.ocr_service.close()
        if self.reconciler is not None:
            await self.reconciler.translator.close()
