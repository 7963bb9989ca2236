"""
Error taxonomy for extraction, translation and rendering operations.

An OCR answer that yields no text blocks is not an error: the parser
returns an empty list.
"""


class ImageTranslationError(Exception):
    """Base class for all recoverable errors raised by the services."""


class NotFoundError(ImageTranslationError):
    """Referenced entity does not exist or is not owned by the caller."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class InvalidCoordinatesError(ImageTranslationError):
    """Negative or degenerate bounding box."""


class OverlappingRegionError(ImageTranslationError):
    """Manually added region intersects an existing one on the same image."""

    def __init__(self, image_id: str, conflicting_text_id: str):
        self.image_id = image_id
        self.conflicting_text_id = conflicting_text_id
        super().__init__(
            f"Region overlaps existing extraction {conflicting_text_id} "
            f"on image {image_id}"
        )


class UpstreamServiceError(ImageTranslationError):
    """OCR or translation collaborator failed or returned nothing."""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service} failed: {message}")
