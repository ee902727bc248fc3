"""
Movie API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cinerank.api.dependencies import get_db, require_auth
from cinerank.api.models.movie import MovieCreate, MovieResponse, MovieWithStatsResponse
from cinerank.database import crud
from cinerank.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("", response_model=list[MovieWithStatsResponse])
def list_movies(
    query: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """List movies with review statistics, optionally filtered by title or tag."""
    movies = crud.list_movies_with_stats(db, query)
    return [MovieWithStatsResponse.from_stats(m) for m in movies]


@router.get("/{movie_id}", response_model=MovieWithStatsResponse)
def get_movie(movie_id: int, db: Session = Depends(get_db)):
    """Get movie details by ID."""
    return MovieWithStatsResponse.from_stats(crud.get_movie_by_id(db, movie_id))


@router.post("", response_model=MovieResponse, status_code=201)
def create_movie(
    movie_in: MovieCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
):
    """Create a movie with tags."""
    movie = crud.create_movie(
        db,
        title=movie_in.title,
        year=movie_in.year,
        director=movie_in.director,
        plot=movie_in.plot,
        poster_url=movie_in.poster_url,
        imdb_rating=movie_in.imdb_rating,
        tags=movie_in.tags,
    )
    logger.info("User %s added movie %s via API", user.id, movie.id)
    return MovieResponse.model_validate(movie)
