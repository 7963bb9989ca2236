"""
Unit tests for services.rendering_service module.
"""
import pytest

from core.exceptions import NotFoundError
from core.schemas import OverlayInstruction, OverlayPosition
from services.rendering_service import RenderingService


def _instruction(text, x, y, x2, y2):
    return OverlayInstruction(text=text, position=OverlayPosition(x=x, y=y, x2=x2, y2=y2))


@pytest.fixture
def service(test_db_session):
    return RenderingService(test_db_session)


class TestRenderingService:
    """Tests for RenderingService class."""

    def test_render_stores_only_valid(self, service):
        """Test invalid elements are dropped before storing."""
        output = service.render("img1", [
            _instruction("Hola", 10, 20, 200, 60),
            _instruction("bad", 10, 20, 5, 60),
        ])

        stored = service.get_output(output.id)

        assert stored.image_id == "img1"
        assert stored.instructions == [
            {'text': 'Hola', 'position': {'x': 10, 'y': 20, 'x2': 200, 'y2': 60}}
        ]

    def test_latest_output_replaces_previous(self, service):
        """Test only the most recent output is kept per image."""
        first = service.render("img1", [_instruction("one", 0, 0, 10, 10)])
        first_id = first.id

        second = service.render("img1", [_instruction("two", 0, 0, 10, 10)])

        outputs = service.list_outputs_for_image("img1")
        assert [o.id for o in outputs] == [second.id]
        with pytest.raises(NotFoundError):
            service.get_output(first_id)

    def test_images_are_independent(self, service):
        """Test rendering one image leaves another's output in place."""
        service.render("img1", [_instruction("one", 0, 0, 10, 10)])
        service.render("img2", [_instruction("two", 0, 0, 10, 10)])

        assert len(service.list_outputs_for_image("img1")) == 1
        assert len(service.list_outputs_for_image("img2")) == 1

    def test_render_all_invalid(self, service):
        """Test an output with no valid elements is still stored."""
        output = service.render("img1", [_instruction("bad", 5, 5, 0, 0)])

        assert service.get_output(output.id).instructions == []

    def test_get_unknown(self, service):
        """Test unknown ids fail with NotFound."""
        with pytest.raises(NotFoundError):
            service.get_output("nope")
