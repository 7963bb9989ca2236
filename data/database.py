"""
Engine and session handling for the extraction/translation store.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .db_models import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> Dict[str, Any]:
    if not database_url.startswith('sqlite'):
        return {}
    options: Dict[str, Any] = {'connect_args': {'check_same_thread': False}}
    # In-memory SQLite only lives as long as its single connection
    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        options['poolclass'] = StaticPool
    return options


class DatabaseManager:
    """Owns the engine and hands out sessions bound to it."""

    def __init__(self, database_url: Optional[str] = None):
        """
        Args:
            database_url: SQLAlchemy URL; ``settings.database_url`` when None
        """
        if database_url is None:
            from config.settings import settings
            database_url = settings.database_url

        self.database_url = database_url
        self.engine = create_engine(database_url, echo=False, **_engine_options(database_url))
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Created tables at %s", self.database_url)

    def drop_tables(self):
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Dropped all tables at %s", self.database_url)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Session for one unit of work.

        Commits when the block exits cleanly and rolls back when it raises.
        Services commit on their own as well, so the final commit is often a no-op.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager(database_url: Optional[str] = None) -> DatabaseManager:
    """Process-wide manager; ``database_url`` only applies on the first call."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: Optional[str] = None) -> DatabaseManager:
    db_manager = get_db_manager(database_url)
    db_manager.create_tables()
    return db_manager


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Session from the process-wide manager.

    Usage:
        with session_scope() as session:
            ExtractionStore(session).list_for_image("poster.png")
    """
    with get_db_manager().session() as session:
        yield session
