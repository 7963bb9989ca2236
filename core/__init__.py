"""Core package - Domain models, errors and constants."""

from .models import (
    Coordinate,
    BoundingBox,
    ParsedTextBlock,
    TextEdited,
    ReconcileReport,
    ExtractionOutcome,
    ORIGIN
)
from .schemas import OverlayInstruction, OverlayPosition
from .exceptions import (
    ImageTranslationError,
    NotFoundError,
    InvalidCoordinatesError,
    OverlappingRegionError,
    UpstreamServiceError
)
from .constants import (
    NO_TEXT_SENTINEL,
    COORDINATE_PATTERN,
    OCR_PROMPT_TEMPLATE,
    TRANSLATION_PROMPT_TEMPLATE,
    DEFAULT_OCR_PARAMS,
    PAIRING_LINE,
    PAIRING_POSITIONAL
)

__all__ = [
    'Coordinate',
    'BoundingBox',
    'ParsedTextBlock',
    'TextEdited',
    'ReconcileReport',
    'ExtractionOutcome',
    'ORIGIN',
    'OverlayInstruction',
    'OverlayPosition',
    'ImageTranslationError',
    'NotFoundError',
    'InvalidCoordinatesError',
    'OverlappingRegionError',
    'UpstreamServiceError',
    'NO_TEXT_SENTINEL',
    'COORDINATE_PATTERN',
    'OCR_PROMPT_TEMPLATE',
    'TRANSLATION_PROMPT_TEMPLATE',
    'DEFAULT_OCR_PARAMS',
    'PAIRING_LINE',
    'PAIRING_POSITIONAL'
]
