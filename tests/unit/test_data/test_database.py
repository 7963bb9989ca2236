"""
Unit tests for data.database module.
"""
import pytest
from sqlalchemy import inspect

from data.database import DatabaseManager
from data.db_models import Translation


class TestDatabaseManager:
    """Tests for DatabaseManager class."""

    def test_create_and_drop_tables(self):
        """Test every table is created and dropped."""
        manager = DatabaseManager("sqlite://")

        manager.create_tables()
        tables = set(inspect(manager.engine).get_table_names())
        manager.drop_tables()

        assert {
            'extraction_results', 'locations', 'image_sequences',
            'translations', 'render_outputs'
        } <= tables
        assert inspect(manager.engine).get_table_names() == []

    def test_session_commits(self):
        """Test a clean block is committed."""
        manager = DatabaseManager("sqlite://")
        manager.create_tables()

        with manager.session() as session:
            session.add(Translation(
                image_id="img1", original_text_id="img1_0",
                original_text="Hi", target_language="es", translated_text="Hola"
            ))

        with manager.session() as session:
            assert session.query(Translation).count() == 1

    def test_session_rolls_back(self):
        """Test an exception discards pending changes."""
        manager = DatabaseManager("sqlite://")
        manager.create_tables()

        with pytest.raises(RuntimeError):
            with manager.session() as session:
                session.add(Translation(
                    image_id="img1", original_text_id="img1_0",
                    original_text="Hi", target_language="es", translated_text="Hola"
                ))
                session.flush()
                raise RuntimeError("boom")

        with manager.session() as session:
            assert session.query(Translation).count() == 0

    def test_file_database(self, tmp_path):
        """Test a file-backed SQLite URL works."""
        manager = DatabaseManager(f"sqlite:///{tmp_path / 'store.db'}")

        manager.create_tables()

        assert (tmp_path / "store.db").exists()
