"""
API route handlers.
"""

from cinerank.api.routers import pages, auth, admin, movies, reviews, system

__all__ = ["pages", "auth", "admin", "movies", "reviews", "system"]
