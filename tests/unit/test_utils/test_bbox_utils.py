"""
Unit tests for utils.bbox_utils module.
"""
import pytest

from core.exceptions import InvalidCoordinatesError
from core.models import BoundingBox, Coordinate
from utils.bbox_utils import (
    extract_coordinate_annotations,
    find_coordinate_annotation,
    find_overlap,
    validate_box
)


class TestCoordinateAnnotations:
    """Tests for annotation parsing."""

    def test_tolerant_spacing(self):
        """Test annotations with and without spaces are found."""
        text = (
            "1: a (from: {x:1,y:2}, to: {x:3,y:4})\n"
            "2: b (from:{ x : 5 , y : 6 },to:{x:7, y:8})"
        )

        assert extract_coordinate_annotations(text) == [
            (Coordinate(1, 2), Coordinate(3, 4)),
            (Coordinate(5, 6), Coordinate(7, 8)),
        ]

    def test_single_line(self):
        """Test first annotation on a line."""
        pair = find_coordinate_annotation("1: a (from: {x:-1, y:2}, to: {x:3, y:4})")

        assert pair == (Coordinate(-1, 2), Coordinate(3, 4))
        assert find_coordinate_annotation("1: plain") is None

    def test_non_numeric_ignored(self):
        """Test annotations with non-integers are not matched."""
        assert extract_coordinate_annotations("(from: {x:1.5, y:2}, to: {x:3, y:4})") == []


class TestValidateBox:
    """Tests for validate_box function."""

    def test_valid(self):
        """Test a normal box is returned."""
        box = validate_box(Coordinate(0, 0), Coordinate(10, 10))

        assert box == BoundingBox(Coordinate(0, 0), Coordinate(10, 10))

    def test_negative(self):
        """Test any negative component fails."""
        with pytest.raises(InvalidCoordinatesError):
            validate_box(Coordinate(5, -1), Coordinate(10, 10))
        with pytest.raises(InvalidCoordinatesError):
            validate_box(Coordinate(5, 1), Coordinate(-10, 10))

    def test_positive_area_flag(self):
        """Test degenerate boxes pass only without the flag."""
        validate_box(Coordinate(10, 10), Coordinate(10, 10))

        with pytest.raises(InvalidCoordinatesError):
            validate_box(Coordinate(10, 10), Coordinate(10, 10), require_positive_area=True)


class TestFindOverlap:
    """Tests for find_overlap function."""

    def test_first_conflict_index(self):
        """Test the index of the first intersecting box is returned."""
        others = [
            BoundingBox(Coordinate(100, 100), Coordinate(110, 110)),
            BoundingBox(Coordinate(0, 0), Coordinate(10, 10)),
        ]

        assert find_overlap(BoundingBox(Coordinate(5, 5), Coordinate(15, 15)), others) == 1

    def test_no_conflict(self):
        """Test None for disjoint or empty input."""
        box = BoundingBox(Coordinate(20, 20), Coordinate(30, 30))

        assert find_overlap(box, [BoundingBox(Coordinate(0, 0), Coordinate(10, 10))]) is None
        assert find_overlap(box, []) is None
