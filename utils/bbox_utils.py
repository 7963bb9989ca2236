"""
Bounding box utilities for OCR workflow.

Handles coordinate annotation parsing and box validation.
"""
import re
from typing import List, Optional, Tuple

from core.constants import COORDINATE_PATTERN
from core.exceptions import InvalidCoordinatesError
from core.models import BoundingBox, Coordinate

_COORDINATE_RE = re.compile(COORDINATE_PATTERN)


def _to_pair(match) -> Tuple[Coordinate, Coordinate]:
    x1, y1, x2, y2 = (int(g) for g in match.groups())
    return Coordinate(x1, y1), Coordinate(x2, y2)


def extract_coordinate_annotations(text: str) -> List[Tuple[Coordinate, Coordinate]]:
    """
    Find every ``(from: {x:I, y:I}, to: {x:I, y:I})`` annotation.

    Args:
        text: Raw OCR answer (or a single line of it)

    Returns:
        List of (from, to) pairs in left-to-right textual order
    """
    return [_to_pair(m) for m in _COORDINATE_RE.finditer(text)]


def find_coordinate_annotation(line: str) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Return the first annotation on a line, or None."""
    match = _COORDINATE_RE.search(line)
    return _to_pair(match) if match else None


def validate_box(
    from_coord: Coordinate,
    to_coord: Coordinate,
    require_positive_area: bool = False
) -> BoundingBox:
    """
    Check a user-supplied box before it is written.

    Args:
        from_coord: Top-left corner
        to_coord: Bottom-right corner
        require_positive_area: Also reject boxes where ``to`` does not
            strictly exceed ``from`` on both axes

    Returns:
        The validated BoundingBox

    Raises:
        InvalidCoordinatesError: On negative components (or a degenerate
            box when ``require_positive_area`` is set)
    """
    if from_coord.is_negative() or to_coord.is_negative():
        raise InvalidCoordinatesError("Coordinates cannot be negative.")

    box = BoundingBox(from_coord, to_coord)
    if require_positive_area and not box.has_positive_area():
        raise InvalidCoordinatesError(
            "Bottom-right coordinate must exceed top-left coordinate."
        )
    return box


def find_overlap(box: BoundingBox, others) -> Optional[int]:
    """
    Index of the first box in ``others`` that intersects ``box``, or None.
    """
    for idx, other in enumerate(others):
        if box.overlaps(other):
            return idx
    return None
