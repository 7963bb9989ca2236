"""
Core domain models for the OCR/translation workflow.

These are pure data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Coordinate:
    """Pixel position, (0, 0) is the top-left corner of the image."""
    x: int
    y: int

    @classmethod
    def from_value(cls, value) -> 'Coordinate':
        """Build from a Coordinate, an (x, y) pair or a {'x', 'y'} dict."""
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, dict):
            return cls(int(value['x']), int(value['y']))
        x, y = value
        return cls(int(x), int(y))

    def is_negative(self) -> bool:
        return self.x < 0 or self.y < 0

    def clamped(self) -> 'Coordinate':
        """Copy with negative components raised to zero."""
        return Coordinate(max(self.x, 0), max(self.y, 0))

    def to_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y}


ORIGIN = Coordinate(0, 0)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box from a top-left to a bottom-right coordinate."""
    from_coord: Coordinate
    to_coord: Coordinate

    @property
    def width(self) -> int:
        """Calculate width."""
        return self.to_coord.x - self.from_coord.x

    @property
    def height(self) -> int:
        """Calculate height."""
        return self.to_coord.y - self.from_coord.y

    @property
    def area(self) -> int:
        """Calculate area."""
        return self.width * self.height

    def has_positive_area(self) -> bool:
        return self.width > 0 and self.height > 0

    def overlaps(self, other: 'BoundingBox') -> bool:
        """Inclusive intersection test: touching edges count as overlap."""
        return not (
            self.to_coord.x < other.from_coord.x
            or self.from_coord.x > other.to_coord.x
            or self.to_coord.y < other.from_coord.y
            or self.from_coord.y > other.to_coord.y
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'from': self.from_coord.to_dict(),
            'to': self.to_coord.to_dict(),
        }


@dataclass(frozen=True)
class ParsedTextBlock:
    """One numbered block recovered from an OCR answer."""
    ordinal: int
    text: str
    from_coord: Coordinate = ORIGIN
    to_coord: Coordinate = ORIGIN

    @property
    def box(self) -> BoundingBox:
        return BoundingBox(self.from_coord, self.to_coord)


@dataclass(frozen=True)
class TextEdited:
    """Emitted after an extraction's source text has been committed."""
    text_id: str
    new_text: str
    image_id: str
    result_id: str


@dataclass
class ReconcileReport:
    """Outcome of re-translating every translation of one text id."""
    text_id: str
    updated: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.updated) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class ExtractionOutcome:
    """Result of running OCR on one image."""
    image_id: str
    raw_response: str
    result_ids: List[str] = field(default_factory=list)
    declared_count: Optional[int] = None

    @property
    def block_count(self) -> int:
        return len(self.result_ids)
