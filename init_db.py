#!/usr/bin/env python3
"""
Initialize the image translation database.

Creates all tables for extraction results, locations, ordinal counters,
translations and render outputs.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.logging_config import configure_logging
from data.database import DatabaseManager
from data.db_models import Base

logger = logging.getLogger("init_db")


def main():
    parser = argparse.ArgumentParser(
        description='Initialize image translation database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL setting)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys data!)'
    )
    parser.add_argument(
        '--yes',
        action='store_true',
        help='Do not ask for confirmation before dropping tables'
    )

    args = parser.parse_args()
    configure_logging()

    db_manager = DatabaseManager(args.database_url)
    logger.info("Database URL: %s", db_manager.database_url)

    if args.drop_existing:
        if not args.yes:
            confirm = input("Drop existing tables? This will DELETE ALL DATA! (yes/no): ")
            if confirm.lower() != 'yes':
                logger.info("Aborted.")
                return 1
        db_manager.drop_tables()

    db_manager.create_tables()
    logger.info("Tables: %s", ", ".join(sorted(Base.metadata.tables)))
    return 0


if __name__ == '__main__':
    sys.exit(main())
