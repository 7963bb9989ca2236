"""
Database models for extraction results, translations and render outputs.

Stores recognized text blocks with their bounding boxes, per-image
ordinal counters, translations keyed by text id, and rendering
instructions.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Text, DateTime, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

from core.models import BoundingBox, Coordinate

Base = declarative_base()


def generate_uuid():
    """Generate UUID string for primary keys."""
    return str(uuid.uuid4())


class ExtractionResult(Base):
    """One recognized text block on one image."""

    __tablename__ = 'extraction_results'
    __table_args__ = (
        UniqueConstraint('image_id', 'text_id', name='uq_extraction_image_text'),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    image_id = Column(String, nullable=False, index=True)
    text_id = Column(String, nullable=False)
    ordinal = Column(Integer, nullable=False)
    extracted_text = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    location = relationship(
        "Location",
        back_populates="extraction_result",
        uselist=False,
        cascade="all, delete-orphan"
    )

    @property
    def location_id(self):
        return self.location.id if self.location else None

    def __repr__(self):
        return f"<ExtractionResult(id={self.id}, text_id={self.text_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'image_id': self.image_id,
            'text_id': self.text_id,
            'ordinal': self.ordinal,
            'extracted_text': self.extracted_text,
            'location': self.location.to_dict() if self.location else None
        }


class Location(Base):
    """Axis-aligned bounding box of exactly one extraction result."""

    __tablename__ = 'locations'

    id = Column(String, primary_key=True, default=generate_uuid)
    extraction_result_id = Column(
        String, ForeignKey('extraction_results.id'), nullable=False, unique=True
    )

    # Absolute pixel coordinates, never negative
    from_x = Column(Integer, nullable=False)
    from_y = Column(Integer, nullable=False)
    to_x = Column(Integer, nullable=False)
    to_y = Column(Integer, nullable=False)

    # Relationships
    extraction_result = relationship("ExtractionResult", back_populates="location")

    @property
    def from_coord(self) -> Coordinate:
        return Coordinate(self.from_x, self.from_y)

    @property
    def to_coord(self) -> Coordinate:
        return Coordinate(self.to_x, self.to_y)

    @property
    def box(self) -> BoundingBox:
        return BoundingBox(self.from_coord, self.to_coord)

    def set_box(self, from_coord: Coordinate, to_coord: Coordinate):
        self.from_x, self.from_y = from_coord.x, from_coord.y
        self.to_x, self.to_y = to_coord.x, to_coord.y

    def __repr__(self):
        return (
            f"<Location(id={self.id}, box=({self.from_x},{self.from_y})"
            f"-({self.to_x},{self.to_y}))>"
        )

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'extraction_result_id': self.extraction_result_id,
            'from_coord': [self.from_x, self.from_y],
            'to_coord': [self.to_x, self.to_y]
        }


class ImageSequence(Base):
    """Per-image ordinal counter backing text id generation."""

    __tablename__ = 'image_sequences'

    image_id = Column(String, primary_key=True)
    next_ordinal = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<ImageSequence(image_id={self.image_id}, next={self.next_ordinal})>"


class Translation(Base):
    """Translated text of one extraction, keyed by its stable text id."""

    __tablename__ = 'translations'

    id = Column(String, primary_key=True, default=generate_uuid)
    owner_id = Column(String)
    image_id = Column(String, nullable=False, index=True)
    original_text_id = Column(String, nullable=False, index=True)
    original_text = Column(Text, nullable=False, default="")
    target_language = Column(String, nullable=False)
    translated_text = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return (
            f"<Translation(id={self.id}, text_id={self.original_text_id}, "
            f"lang={self.target_language})>"
        )

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'owner_id': self.owner_id,
            'image_id': self.image_id,
            'original_text_id': self.original_text_id,
            'original_text': self.original_text,
            'target_language': self.target_language,
            'translated_text': self.translated_text
        }


class RenderOutput(Base):
    """Validated overlay instructions for one image."""

    __tablename__ = 'render_outputs'

    id = Column(String, primary_key=True, default=generate_uuid)
    owner_id = Column(String)
    image_id = Column(String, nullable=False, index=True)

    # List of overlay instruction dicts
    instructions = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<RenderOutput(id={self.id}, image_id={self.image_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'owner_id': self.owner_id,
            'image_id': self.image_id,
            'instructions': self.instructions,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
