"""Data access layer - Database models and connections."""

from .db_models import (
    Base,
    ExtractionResult,
    Location,
    ImageSequence,
    Translation,
    RenderOutput
)
from .database import (
    DatabaseManager,
    get_db_manager,
    session_scope,
    init_database
)

__all__ = [
    # Models
    'Base',
    'ExtractionResult',
    'Location',
    'ImageSequence',
    'Translation',
    'RenderOutput',

    # Database
    'DatabaseManager',
    'get_db_manager',
    'session_scope',
    'init_database'
]
