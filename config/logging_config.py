"""Logging setup shared by scripts and services."""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a single stream handler to the root logger.

    Args:
        level: Log level name. Defaults to ``settings.log_level``.
    """
    if level is None:
        from config.settings import settings
        level = settings.log_level

    root = logging.getLogger()
    root.setLevel(level.upper())

    # Avoid stacking handlers when called more than once
    if not any(getattr(h, '_image_translation', False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._image_translation = True
        root.addHandler(handler)
