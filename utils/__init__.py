"""Utilities package - Helper functions for image, bbox, and text processing."""

from .image_utils import (
    MediaImage,
    FileSystemMediaResolver,
    load_image_bytes,
    to_data_url
)

from .bbox_utils import (
    extract_coordinate_annotations,
    find_coordinate_annotation,
    validate_box,
    find_overlap
)

from .text_utils import (
    clean_block_text,
    strip_trailing_annotation,
    strip_quotes,
    strip_html_tags
)

__all__ = [
    # Image utils
    'MediaImage',
    'FileSystemMediaResolver',
    'load_image_bytes',
    'to_data_url',

    # BBox utils
    'extract_coordinate_annotations',
    'find_coordinate_annotation',
    'validate_box',
    'find_overlap',

    # Text utils
    'clean_block_text',
    'strip_trailing_annotation',
    'strip_quotes',
    'strip_html_tags'
]
