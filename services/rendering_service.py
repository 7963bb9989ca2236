"""
Rendering Service

Stores validated overlay instructions for an image. The actual drawing is
done by the client; only the latest output per image is kept.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from data.db_models import RenderOutput
from data.repositories import RenderOutputRepository
from .overlay_validator import InstructionLike, filter_valid_instructions

logger = logging.getLogger(__name__)


class RenderingService:
    """Service for storing and retrieving render outputs."""

    def __init__(self, session: Session):
        """
        Initialize rendering service.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.outputs = RenderOutputRepository(session)

    def render(
        self,
        image_id: str,
        instructions: Iterable[InstructionLike],
        owner_id: Optional[str] = None
    ) -> RenderOutput:
        """
        Validate instructions and store them as the image's current output.

        Args:
            image_id: Image the overlay belongs to
            instructions: Overlay instructions (models or dicts)
            owner_id: Optional owner, scoping replacement of older outputs

        Returns:
            The stored RenderOutput
        """
        valid = filter_valid_instructions(instructions)

        try:
            removed = self.outputs.delete_for_image(image_id, owner_id)
            if removed:
                logger.info("Replaced %d old render output(s) for %s", removed, image_id)

            output = self.outputs.create(
                image_id=image_id,
                instructions=[i.model_dump(exclude_none=True) for i in valid],
                owner_id=owner_id
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return output

    def get_output(self, output_id: str) -> RenderOutput:
        output = self.outputs.get_by_id(output_id)
        if output is None:
            raise NotFoundError("RenderOutput", output_id)
        return output

    def list_outputs_for_image(self, image_id: str) -> List[RenderOutput]:
        return self.outputs.list_for_image(image_id)
