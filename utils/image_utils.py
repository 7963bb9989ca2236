"""
Image utilities for OCR workflow.

Handles image loading, encoding, and resolving image ids to stored files.
"""
import base64
import logging
import os
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class MediaImage:
    """Binary image payload plus what the OCR prompt needs to know about it."""
    image_id: str
    data: bytes
    mime_type: str
    width: int
    height: int


def load_image_bytes(data: bytes, max_size: Optional[int] = None) -> Tuple[bytes, str, int, int]:
    """
    Normalize raw image bytes for the OCR model.

    Args:
        data: Encoded image (PNG, JPEG, ...)
        max_size: Maximum dimension before resizing; None keeps the original size

    Returns:
        Tuple of (png_bytes, mime_type, width, height)
    """
    img = Image.open(BytesIO(data))

    # Fix EXIF orientation
    img = ImageOps.exif_transpose(img)

    # Convert to RGB
    if img.mode in ('RGBA', 'LA', 'P'):
        img = img.convert('RGB')

    if max_size and max(img.size) > max_size:
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

    buf = BytesIO()
    img.save(buf, format='PNG')
    width, height = img.size
    return buf.getvalue(), 'image/png', width, height


def bytes_to_base64(data: bytes) -> str:
    """Base64-encode image bytes as ASCII text."""
    return base64.b64encode(data).decode()


def to_data_url(data: bytes, mime_type: str = 'image/png') -> str:
    """Build a data URL suitable for an ``image_url`` chat content part."""
    return f"data:{mime_type};base64,{bytes_to_base64(data)}"


class FileSystemMediaResolver:
    """Resolves image ids to files stored under a media root directory."""

    def __init__(self, media_root: str, max_size: Optional[int] = None):
        self.media_root = os.path.abspath(media_root)
        self.max_size = max_size

    def path_for(self, image_id: str) -> str:
        path = os.path.abspath(os.path.join(self.media_root, image_id))
        # Image ids must not escape the media root
        if os.path.commonpath([self.media_root, path]) != self.media_root:
            raise NotFoundError("Image", image_id)
        return path

    def resolve(self, image_id: str) -> MediaImage:
        """
        Load an image by id.

        Raises:
            NotFoundError: If no readable image exists for ``image_id``
        """
        path = self.path_for(image_id)
        if not os.path.isfile(path):
            raise NotFoundError("Image", image_id)

        with open(path, 'rb') as f:
            raw = f.read()

        try:
            data, mime_type, width, height = load_image_bytes(raw, self.max_size)
        except UnidentifiedImageError:
            raise NotFoundError("Image", image_id)

        logger.debug("Resolved image %s (%dx%d)", image_id, width, height)
        return MediaImage(
            image_id=image_id,
            data=data,
            mime_type=mime_type,
            width=width,
            height=height
        )
