"""Services package - OCR parsing, extraction storage, translation and rendering."""

from .response_parser import (
    ResponseParser,
    parse_numbered_text_list,
    parse_coordinates_list,
    extract_declared_count,
    iter_text_blocks,
    parse_text_blocks
)
from .extraction_store import ExtractionStore, make_text_id
from .overlay_validator import filter_valid_instructions, build_instructions
from .translation_service import Translator, TranslationService
from .reconciler import TranslationReconciler
from .rendering_service import RenderingService
from .ocr_service import OCRService
from .extraction_service import ExtractionService

__all__ = [
    'ResponseParser',
    'parse_numbered_text_list',
    'parse_coordinates_list',
    'extract_declared_count',
    'iter_text_blocks',
    'parse_text_blocks',
    'ExtractionStore',
    'make_text_id',
    'filter_valid_instructions',
    'build_instructions',
    'Translator',
    'TranslationService',
    'TranslationReconciler',
    'RenderingService',
    'OCRService',
    'ExtractionService'
]
