"""
Database module for CineRank.

This module provides database models, connection management, and the catalog
query operations using SQLAlchemy ORM.
"""

from cinerank.database.models import Base, User, Movie, Tag, Review, movie_tags
from cinerank.database.connection import DatabaseManager, get_db_manager
from cinerank.database.init_db import init_database, verify_schema
from cinerank.database import crud

__all__ = [
    # Models
    'Base',
    'User',
    'Movie',
    'Tag',
    'Review',
    'movie_tags',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
