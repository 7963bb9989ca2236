"""
Repository pattern for data access.

Provides clean separation between data access and business logic.
Repositories add and flush; committing is left to the calling service.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from core.models import Coordinate
from data.db_models import (
    ExtractionResult, Location, ImageSequence, Translation, RenderOutput
)


class ExtractionResultRepository:
    """Repository for ExtractionResult (and its owned Location) operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        image_id: str,
        text_id: str,
        ordinal: int,
        extracted_text: str,
        from_coord: Coordinate,
        to_coord: Coordinate
    ) -> ExtractionResult:
        """Create a result together with its location."""
        result = ExtractionResult(
            image_id=image_id,
            text_id=text_id,
            ordinal=ordinal,
            extracted_text=extracted_text
        )
        location = Location()
        location.set_box(from_coord, to_coord)
        result.location = location

        self.session.add(result)
        self.session.flush()
        return result

    def get_by_id(self, result_id: str) -> Optional[ExtractionResult]:
        """Get result by ID."""
        return self.session.query(ExtractionResult).filter(
            ExtractionResult.id == result_id
        ).first()

    def get_by_text_id(self, text_id: str, image_id: str) -> Optional[ExtractionResult]:
        """Get result by its per-image text id."""
        return self.session.query(ExtractionResult).filter(
            ExtractionResult.text_id == text_id,
            ExtractionResult.image_id == image_id
        ).first()

    def list_for_image(self, image_id: str) -> List[ExtractionResult]:
        """All results for an image in creation order."""
        return self.session.query(ExtractionResult)\
            .filter(ExtractionResult.image_id == image_id)\
            .order_by(ExtractionResult.ordinal, ExtractionResult.created_at)\
            .all()

    def delete(self, result: ExtractionResult):
        """Delete a result; its location goes with it."""
        self.session.delete(result)
        self.session.flush()


class LocationRepository:
    """Repository for Location lookups."""

    def __init__(self, session: Session):
        self.session = session

    def get_for_result(self, result_id: str) -> Optional[Location]:
        return self.session.query(Location).filter(
            Location.extraction_result_id == result_id
        ).first()

    def list_for_image(self, image_id: str) -> List[Location]:
        return self.session.query(Location)\
            .join(ExtractionResult)\
            .filter(ExtractionResult.image_id == image_id)\
            .all()


class ImageSequenceRepository:
    """Repository for per-image ordinal counters."""

    def __init__(self, session: Session):
        self.session = session

    def next_ordinal(self, image_id: str) -> int:
        """
        Reserve the next ordinal for an image.

        The counter row is locked for the rest of the transaction on
        backends that support SELECT ... FOR UPDATE. A missing counter is
        seeded from the number of results already stored for the image.
        """
        sequence = self.session.query(ImageSequence)\
            .filter(ImageSequence.image_id == image_id)\
            .with_for_update()\
            .first()

        if sequence is None:
            existing = self.session.query(ExtractionResult)\
                .filter(ExtractionResult.image_id == image_id)\
                .count()
            sequence = ImageSequence(image_id=image_id, next_ordinal=existing)
            self.session.add(sequence)

        ordinal = sequence.next_ordinal
        sequence.next_ordinal = ordinal + 1
        self.session.flush()
        return ordinal


class TranslationRepository:
    """Repository for Translation operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        image_id: str,
        original_text_id: str,
        original_text: str,
        target_language: str,
        translated_text: str,
        owner_id: Optional[str] = None
    ) -> Translation:
        """Create a translation."""
        translation = Translation(
            owner_id=owner_id,
            image_id=image_id,
            original_text_id=original_text_id,
            original_text=original_text,
            target_language=target_language,
            translated_text=translated_text
        )
        self.session.add(translation)
        self.session.flush()
        return translation

    def get_by_id(self, translation_id: str) -> Optional[Translation]:
        """Get translation by ID."""
        return self.session.query(Translation).filter(
            Translation.id == translation_id
        ).first()

    def list_for_text(self, original_text_id: str) -> List[Translation]:
        """All translations of one text id, oldest first."""
        return self.session.query(Translation)\
            .filter(Translation.original_text_id == original_text_id)\
            .order_by(Translation.created_at)\
            .all()

    def list_for_image(
        self,
        image_id: str,
        target_language: Optional[str] = None
    ) -> List[Translation]:
        """Translations for an image, optionally for one language."""
        query = self.session.query(Translation)\
            .filter(Translation.image_id == image_id)

        if target_language:
            query = query.filter(Translation.target_language == target_language)

        return query.order_by(Translation.created_at).all()

    def delete(self, translation: Translation):
        self.session.delete(translation)
        self.session.flush()


class RenderOutputRepository:
    """Repository for RenderOutput operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        image_id: str,
        instructions: list,
        owner_id: Optional[str] = None
    ) -> RenderOutput:
        """Create a render output."""
        output = RenderOutput(
            image_id=image_id,
            instructions=instructions,
            owner_id=owner_id
        )
        self.session.add(output)
        self.session.flush()
        return output

    def get_by_id(self, output_id: str) -> Optional[RenderOutput]:
        return self.session.query(RenderOutput).filter(
            RenderOutput.id == output_id
        ).first()

    def list_for_image(self, image_id: str) -> List[RenderOutput]:
        return self.session.query(RenderOutput)\
            .filter(RenderOutput.image_id == image_id)\
            .order_by(RenderOutput.created_at.desc())\
            .all()

    def delete_for_image(self, image_id: str, owner_id: Optional[str] = None) -> int:
        """Delete previous outputs for an image; returns how many were removed."""
        query = self.session.query(RenderOutput)\
            .filter(RenderOutput.image_id == image_id)
        if owner_id is not None:
            query = query.filter(RenderOutput.owner_id == owner_id)
        return query.delete(synchronize_session=False)
