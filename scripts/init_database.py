#!/usr/bin/env python
"""
Create (or reset) the CineRank database schema.

Usage:
    # Create missing tables
    python scripts/init_database.py

    # Drop everything and start over
    python scripts/init_database.py --reset

    # Target a specific database instead of DATABASE_URL
    python scripts/init_database.py --database-url sqlite:///data/cinerank.db
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cinerank.database import init_database, verify_schema
from cinerank.utils.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Initialize the CineRank database")
    parser.add_argument(
        '--reset',
        action='store_true',
        help='Drop all tables before creating them (deletes all data)'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='SQLAlchemy database URL (default: DATABASE_URL)'
    )
    args = parser.parse_args()

    setup_logging(level="INFO")

    try:
        db_manager = init_database(database_url=args.database_url, reset=args.reset)
    except RuntimeError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if verify_schema(db_manager):
        print("Database initialization successful")
    else:
        print("Database initialization failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
