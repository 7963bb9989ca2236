"""
Translation Reconciler - Keeps translations in step with edited source text.

When the text of an extraction changes, every translation recorded for
its text id is re-translated into that translation's own language. Each
language is handled on its own: a failing call is logged and reported,
and the remaining languages are still attempted.
"""
import logging

from sqlalchemy.orm import Session

from core.models import ReconcileReport, TextEdited
from data.repositories import TranslationRepository
from .translation_service import Translator

logger = logging.getLogger(__name__)


class TranslationReconciler:
    """Re-generates stale translations after a source text edit."""

    def __init__(self, session: Session, translator: Translator):
        self.session = session
        self.translator = translator
        self.translations = TranslationRepository(session)

    async def sync_all(self, text_id: str, new_text: str) -> ReconcileReport:
        """
        Re-translate every translation of ``text_id``.

        Args:
            text_id: Stable text id of the edited extraction
            new_text: The new source text

        Returns:
            Report of updated translation ids and failed (id, error) pairs.
            No translations for ``text_id`` gives an empty report.
        """
        report = ReconcileReport(text_id=text_id)
        translations = self.translations.list_for_text(text_id)

        if not translations:
            logger.debug("No translations to reconcile for %s", text_id)
            return report

        for translation in translations:
            translation_id, language = translation.id, translation.target_language
            try:
                translated = await self.translator.translate(new_text, language)
                translation.original_text = new_text
                translation.translated_text = translated
                # One commit per language; a failed write only loses its own language
                self.session.commit()
            except Exception as e:
                self.session.rollback()
                logger.warning(
                    "Could not re-translate %s into %s: %s", text_id, language, e
                )
                report.failed.append((translation_id, str(e)))
                continue

            report.updated.append(translation_id)

        logger.info(
            "Reconciled %s: %d updated, %d failed",
            text_id, len(report.updated), len(report.failed)
        )
        return report

    async def handle(self, event: TextEdited) -> ReconcileReport:
        """Consume a TextEdited event."""
        return await self.sync_all(event.text_id, event.new_text)
