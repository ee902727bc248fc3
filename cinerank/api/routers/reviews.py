"""
Review API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cinerank.api.dependencies import get_db, require_auth
from cinerank.api.models.review import ReviewCreate, ReviewResponse
from cinerank.core.errors import NotFoundError
from cinerank.database import crud
from cinerank.database.models import User

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

RECENT_REVIEWS_LIMIT = 10


@router.get("", response_model=list[ReviewResponse])
def list_reviews(
    movie_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    """Reviews of one movie, or the most recent reviews when no movie is given."""
    if movie_id is None:
        reviews = crud.get_recent_reviews(db, limit=RECENT_REVIEWS_LIMIT)
    else:
        reviews = crud.get_reviews_by_movie_id(db, movie_id)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.post("", response_model=ReviewResponse, status_code=201)
def create_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
):
    """Add a review written by the logged-in user."""
    if crud.get_movie(db, review_in.movie_id) is None:
        raise NotFoundError("Movie not found")
    review = crud.create_review(
        db,
        movie_id=review_in.movie_id,
        user_id=user.id,
        rating=review_in.rating,
        title=review_in.title,
        content=review_in.content,
    )
    return ReviewResponse.model_validate(review)
