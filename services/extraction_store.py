"""
Extraction Store - Owns extraction results and their locations.

Every mutating call is one unit of work: a result and its location are
written (or deleted) in the same commit. Text ids are built from a
per-image ordinal counter, so they stay unique after deletions; sibling
ordinals are never renumbered.
"""
import logging
from typing import Callable, Iterable, List, Optional

from sqlalchemy.orm import Session

from core.constants import TEXT_ID_TEMPLATE
from core.exceptions import NotFoundError, OverlappingRegionError
from core.models import Coordinate, ParsedTextBlock, TextEdited
from data.db_models import ExtractionResult, Location
from data.repositories import (
    ExtractionResultRepository,
    ImageSequenceRepository,
    LocationRepository
)
from utils.bbox_utils import find_overlap, validate_box

logger = logging.getLogger(__name__)

TextEditedListener = Callable[[TextEdited], None]


def make_text_id(image_id: str, ordinal: int) -> str:
    return TEXT_ID_TEMPLATE.format(image_id=image_id, ordinal=ordinal)


class ExtractionStore:
    """Store for ExtractionResult/Location pairs of one or more images."""

    def __init__(self, session: Session, require_positive_area: bool = False):
        """
        Initialize extraction store.

        Args:
            session: SQLAlchemy database session
            require_positive_area: Reject boxes whose bottom-right corner
                does not strictly exceed the top-left one
        """
        self.session = session
        self.require_positive_area = require_positive_area
        self.results = ExtractionResultRepository(session)
        self.locations = LocationRepository(session)
        self.sequences = ImageSequenceRepository(session)
        self._listeners: List[TextEditedListener] = []

    def subscribe(self, listener: TextEditedListener):
        """Register a callback invoked after a text edit is committed."""
        self._listeners.append(listener)

    def _commit(self):
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _create(
        self,
        image_id: str,
        text: str,
        from_coord: Coordinate,
        to_coord: Coordinate
    ) -> ExtractionResult:
        ordinal = self.sequences.next_ordinal(image_id)
        return self.results.create(
            image_id=image_id,
            text_id=make_text_id(image_id, ordinal),
            ordinal=ordinal,
            extracted_text=text,
            from_coord=from_coord,
            to_coord=to_coord
        )

    def create_from_parsed_blocks(
        self,
        image_id: str,
        blocks: Iterable[ParsedTextBlock]
    ) -> List[ExtractionResult]:
        """
        Persist OCR blocks for an image, in block order.

        Negative coordinates reported by the model are clamped to zero.

        Args:
            image_id: Image the blocks were read from
            blocks: Parsed blocks

        Returns:
            Created results, one per block
        """
        created = []
        try:
            for block in blocks:
                from_coord, to_coord = block.from_coord, block.to_coord
                if from_coord.is_negative() or to_coord.is_negative():
                    logger.warning(
                        "Clamping negative coordinates of block %d on image %s",
                        block.ordinal, image_id
                    )
                    from_coord, to_coord = from_coord.clamped(), to_coord.clamped()
                created.append(self._create(image_id, block.text, from_coord, to_coord))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Stored %d extraction result(s) for image %s", len(created), image_id)
        return created

    def add_manual(
        self,
        image_id: str,
        from_coord,
        to_coord,
        text: str = ""
    ) -> ExtractionResult:
        """
        Add a user-drawn region to an image.

        Args:
            image_id: Image to add the region to
            from_coord: Top-left corner (Coordinate, (x, y) or {'x', 'y'})
            to_coord: Bottom-right corner
            text: Initial text, empty by default

        Raises:
            InvalidCoordinatesError: On a negative (or degenerate) box
            OverlappingRegionError: If the box touches or intersects an
                existing region on the same image
        """
        box = validate_box(
            Coordinate.from_value(from_coord),
            Coordinate.from_value(to_coord),
            self.require_positive_area
        )

        existing = self.locations.list_for_image(image_id)
        hit = find_overlap(box, [loc.box for loc in existing])
        if hit is not None:
            raise OverlappingRegionError(image_id, existing[hit].extraction_result.text_id)

        try:
            result = self._create(image_id, text, box.from_coord, box.to_coord)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Added manual extraction %s on image %s", result.text_id, image_id)
        return result

    def get(self, result_id: str) -> ExtractionResult:
        """
        Raises:
            NotFoundError: If no result has this id
        """
        result = self.results.get_by_id(result_id)
        if result is None:
            raise NotFoundError("ExtractionResult", result_id)
        return result

    def edit_text(self, result_id: str, new_text: str) -> TextEdited:
        """
        Replace the text of a result.

        Listeners are notified only after the commit succeeded. A listener
        that raises is logged and skipped; the edit stays committed.

        Returns:
            The TextEdited event for downstream translation sync
        """
        result = self.get(result_id)
        result.extracted_text = new_text
        self._commit()

        event = TextEdited(
            text_id=result.text_id,
            new_text=new_text,
            image_id=result.image_id,
            result_id=result.id
        )
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("TextEdited listener failed for %s", event.text_id)
        return event

    def edit_location(self, result_id: str, from_coord, to_coord) -> Location:
        """
        Overwrite the box of a result in place (same location id).

        Raises:
            InvalidCoordinatesError: On a negative (or degenerate) box
            NotFoundError: If no result has this id
        """
        box = validate_box(
            Coordinate.from_value(from_coord),
            Coordinate.from_value(to_coord),
            self.require_positive_area
        )
        result = self.get(result_id)
        location = result.location
        if location is None:
            raise NotFoundError("Location", result_id)

        location.set_box(box.from_coord, box.to_coord)
        self._commit()
        return location

    def delete(self, result_id: str):
        """Delete a result and its location by result id."""
        self._delete(self.get(result_id))

    def delete_by_text_id(self, text_id: str, image_id: str):
        """
        Delete a result and its location by (text id, image id).

        Raises:
            NotFoundError: If the image has no result with this text id
        """
        result = self.results.get_by_text_id(text_id, image_id)
        if result is None:
            raise NotFoundError("ExtractionResult", f"{image_id}/{text_id}")
        self._delete(result)

    def _delete(self, result: ExtractionResult):
        text_id = result.text_id
        try:
            self.results.delete(result)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info("Deleted extraction %s", text_id)

    def delete_all_for_image(self, image_id: str) -> int:
        """
        Remove every result of an image.

        The ordinal counter is kept so text ids of deleted results, which
        translations may still reference, are never handed out again.
        """
        results = self.results.list_for_image(image_id)
        try:
            for result in results:
                self.session.delete(result)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return len(results)

    def list_for_image(self, image_id: str) -> List[ExtractionResult]:
        """All results of an image in creation order."""
        return self.results.list_for_image(image_id)

    def get_location(self, result_id: str) -> Optional[Location]:
        """Location of a result, or None if the result does not exist."""
        return self.locations.get_for_result(result_id)
