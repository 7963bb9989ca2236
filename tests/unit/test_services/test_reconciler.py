"""
Unit tests for services.reconciler module.
"""
import asyncio

from sqlalchemy.exc import SQLAlchemyError

from core.models import TextEdited
from data.db_models import Translation
from data.repositories import TranslationRepository
from services.reconciler import TranslationReconciler
from services.translation_service import Translator


def _seed(session, text_id="img1_0", languages=("es", "fr")):
    repo = TranslationRepository(session)
    rows = [
        repo.create(
            image_id="img1",
            original_text_id=text_id,
            original_text="Hello",
            target_language=lang,
            translated_text=f"old {lang}"
        )
        for lang in languages
    ]
    session.commit()
    return {row.target_language: row for row in rows}


def _fail_commit_for(session, monkeypatch, language):
    """Make commits that carry a change to ``language`` fail."""
    real_commit = session.commit

    def commit():
        if any(isinstance(o, Translation) and o.target_language == language for o in session.dirty):
            raise SQLAlchemyError("disk I/O error")
        real_commit()

    monkeypatch.setattr(session, "commit", commit)


class TestTranslationReconciler:
    """Tests for TranslationReconciler class."""

    def test_updates_every_language(self, test_db_session, translator):
        """Test each translation is re-translated into its own language."""
        rows = _seed(test_db_session)
        reconciler = TranslationReconciler(test_db_session, translator)

        report = asyncio.run(reconciler.sync_all("img1_0", "Goodbye"))

        assert report.ok
        assert set(report.updated) == {rows['es'].id, rows['fr'].id}
        assert rows['es'].translated_text == "[es] Goodbye"
        assert rows['fr'].translated_text == "[fr] Goodbye"
        assert rows['es'].original_text == "Goodbye"

    def test_failure_isolated_per_language(self, test_db_session, make_llm):
        """Test a failing language does not stop the others."""
        rows = _seed(test_db_session)
        translator = Translator(make_llm(failing_languages=["es"]))
        reconciler = TranslationReconciler(test_db_session, translator)

        report = asyncio.run(reconciler.sync_all("img1_0", "Goodbye"))
        test_db_session.expire_all()

        assert not report.ok
        assert report.updated == [rows['fr'].id]
        assert [tid for tid, _ in report.failed] == [rows['es'].id]
        assert rows['es'].translated_text == "old es"
        assert rows['es'].original_text == "Hello"
        assert rows['fr'].translated_text == "[fr] Goodbye"

    def test_write_failure_isolated_per_language(self, test_db_session, translator, monkeypatch):
        """Test a failed save for one language is rolled back and the rest still update."""
        rows = _seed(test_db_session)
        _fail_commit_for(test_db_session, monkeypatch, "es")
        reconciler = TranslationReconciler(test_db_session, translator)

        report = asyncio.run(reconciler.sync_all("img1_0", "Goodbye"))

        assert report.updated == [rows['fr'].id]
        assert [tid for tid, _ in report.failed] == [rows['es'].id]
        assert "disk I/O error" in report.failed[0][1]
        assert rows['es'].translated_text == "old es"
        assert rows['fr'].translated_text == "[fr] Goodbye"

    def test_no_translations_is_noop(self, test_db_session, translator, fake_llm):
        """Test nothing is called when the text has no translations."""
        reconciler = TranslationReconciler(test_db_session, translator)

        report = asyncio.run(reconciler.sync_all("img1_9", "Whatever"))

        assert report.attempted == 0
        assert report.ok
        assert fake_llm.calls == []

    def test_only_matching_text_id(self, test_db_session, translator):
        """Test translations of other text ids are untouched."""
        rows = _seed(test_db_session, languages=("es",))
        other = _seed(test_db_session, text_id="img1_1", languages=("es",))
        reconciler = TranslationReconciler(test_db_session, translator)

        asyncio.run(reconciler.sync_all("img1_0", "Changed"))

        assert rows['es'].translated_text == "[es] Changed"
        assert other['es'].translated_text == "old es"

    def test_handle_event(self, test_db_session, translator):
        """Test a TextEdited event drives the same sync."""
        rows = _seed(test_db_session, languages=("de",))
        reconciler = TranslationReconciler(test_db_session, translator)
        event = TextEdited(text_id="img1_0", new_text="Neu", image_id="img1", result_id="r1")

        report = asyncio.run(reconciler.handle(event))

        assert report.updated == [rows['de'].id]
