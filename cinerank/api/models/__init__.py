"""
Pydantic schemas for API request/response validation.
"""

from cinerank.api.models.movie import MovieCreate, MovieResponse, MovieWithStatsResponse
from cinerank.api.models.review import ReviewCreate, ReviewResponse

__all__ = [
    "MovieCreate",
    "MovieResponse",
    "MovieWithStatsResponse",
    "ReviewCreate",
    "ReviewResponse",
]
