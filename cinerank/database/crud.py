"""
Catalog queries for movies, tags, reviews and users.

Every function takes the SQLAlchemy session as its first argument and commits
its own writes. Constraint failures are rolled back and re-raised as
ConstraintViolationError.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from cinerank.core.errors import ConstraintViolationError, InvalidInputError, NotFoundError
from cinerank.database.models import Movie, Review, Tag, User, ROLES, ROLE_USER

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class MovieWithStats:
    """A movie with review statistics computed at read time."""

    movie: Movie
    review_count: int = 0
    average_rating: float = 0.0


def _commit(session: Session, what: str) -> None:
    """Commit, turning integrity errors into ConstraintViolationError."""
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.info("Constraint violation while saving %s: %s", what, e.orig)
        raise ConstraintViolationError(f"Could not save {what}: constraint violated") from e


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ==================== USER OPERATIONS ====================

def create_user(
    session: Session,
    username: str,
    email: str,
    password_hash: str,
    role: str = ROLE_USER,
) -> User:
    """
    Create a new user.

    Args:
        session: Database session
        username: Display name
        email: Login email, must be unique
        password_hash: Already-hashed password
        role: 'user' (default) or 'admin'

    Returns:
        Created User object

    Raises:
        InvalidInputError: If role is unknown
        ConstraintViolationError: If the email is already registered
    """
    if role not in ROLES:
        raise InvalidInputError(f"Role must be one of {', '.join(ROLES)}")

    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        role=role,
    )
    session.add(user)
    _commit(session, "user")
    session.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.role)
    return user


def get_user_by_id(session: Session, user_id: int) -> Optional[User]:
    """Get a user by ID, or None."""
    return session.query(User).filter(User.id == user_id).first()


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Get a user by email, or None."""
    return session.query(User).filter(User.email == email).first()


def list_users(session: Session) -> List[User]:
    """All users, newest first."""
    return session.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user_count(session: Session) -> int:
    """Total number of users."""
    return session.query(func.count(User.id)).scalar()


def delete_user(session: Session, user_id: int) -> bool:
    """
    Delete a user and their reviews.

    Returns:
        True if user was deleted, False if not found
    """
    user = get_user_by_id(session, user_id)
    if user is None:
        return False
    session.delete(user)
    session.commit()
    logger.info("Deleted user %s", user_id)
    return True


# ==================== TAG OPERATIONS ====================

def get_or_create_tag(session: Session, name: str) -> Tag:
    """
    Fetch a tag by exact name, creating it if needed.

    The new tag is flushed but not committed, so it joins the caller's
    transaction.
    """
    tag = session.query(Tag).filter(Tag.name == name).first()
    if tag is None:
        tag = Tag(name=name)
        session.add(tag)
        session.flush()
    return tag


def _unique_tag_names(tags: Iterable[str]) -> List[str]:
    names = []
    for raw in tags:
        name = (raw or "").strip()
        if name and name not in names:
            names.append(name)
    return names


# ==================== MOVIE OPERATIONS ====================

def _movies_with_stats_query(session: Session):
    """
    Movies outer-joined to per-movie review aggregates.

    Aggregating reviews in a subquery keeps tag rows from multiplying counts.
    """
    stats = (
        session.query(
            Review.movie_id.label('movie_id'),
            func.count(Review.id).label('review_count'),
            func.avg(Review.rating).label('average_rating'),
        )
        .group_by(Review.movie_id)
        .subquery()
    )
    return (
        session.query(Movie, stats.c.review_count, stats.c.average_rating)
        .outerjoin(stats, stats.c.movie_id == Movie.id)
        .options(selectinload(Movie.tags))
    )


def _to_stats(row) -> MovieWithStats:
    movie, count, average = row
    return MovieWithStats(
        movie=movie,
        review_count=int(count or 0),
        average_rating=float(average) if average else 0.0,
    )


def list_movies_with_stats(
    session: Session,
    search_query: Optional[str] = None,
) -> List[MovieWithStats]:
    """
    List movies with review statistics, newest first.

    Args:
        session: Database session
        search_query: Case-insensitive substring matched against the title
            and every tag name (ignored when empty)

    Returns:
        List of MovieWithStats
    """
    query = _movies_with_stats_query(session)

    search_query = (search_query or "").strip()
    if search_query:
        pattern = f"%{_escape_like(search_query)}%"
        query = query.filter(or_(
            Movie.title.ilike(pattern, escape="\\"),
            Movie.tags.any(Tag.name.ilike(pattern, escape="\\")),
        ))

    rows = query.order_by(Movie.created_at.desc(), Movie.id.desc()).all()
    return [_to_stats(row) for row in rows]


def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    """Get a movie by ID, or None."""
    return session.query(Movie).filter(Movie.id == movie_id).first()


def get_movie_by_id(session: Session, movie_id: int) -> MovieWithStats:
    """
    Get a movie with its tags and review statistics.

    Raises:
        NotFoundError: If no movie has this ID
    """
    row = _movies_with_stats_query(session).filter(Movie.id == movie_id).first()
    if row is None:
        raise NotFoundError("Movie not found")
    return _to_stats(row)


def get_movie_count(session: Session) -> int:
    """Total number of movies."""
    return session.query(func.count(Movie.id)).scalar()


def create_movie(
    session: Session,
    title: str,
    year: int,
    director: str = "",
    plot: str = "",
    poster_url: str = "",
    imdb_rating: float = 0.0,
    tags: Iterable[str] = (),
) -> Movie:
    """
    Create a movie and link its tags in one transaction.

    Blank tag names are skipped and repeated names are linked once. Missing
    tags are created. If anything fails, neither the movie nor any tag link
    is stored.

    Returns:
        Created Movie object
    """
    movie = Movie(
        title=title,
        director=director,
        year=year,
        plot=plot,
        poster_url=poster_url,
        imdb_rating=imdb_rating,
    )
    try:
        session.add(movie)
        for name in _unique_tag_names(tags):
            movie.tags.append(get_or_create_tag(session, name))
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.info("Constraint violation while saving movie: %s", e.orig)
        raise ConstraintViolationError("Could not save movie: constraint violated") from e
    except Exception:
        session.rollback()
        raise

    session.refresh(movie)
    logger.info("Created movie %s '%s' with %d tag(s)", movie.id, movie.title, len(movie.tags))
    return movie


def delete_movie(session: Session, movie_id: int) -> bool:
    """
    Delete a movie, its reviews and its tag links.

    Returns:
        True if movie was deleted, False if not found
    """
    movie = get_movie(session, movie_id)
    if movie is None:
        return False
    session.delete(movie)
    session.commit()
    logger.info("Deleted movie %s", movie_id)
    return True


# ==================== REVIEW OPERATIONS ====================

def validate_rating(rating) -> int:
    """
    Check that a rating is a whole number of stars from 1 to 5.

    Raises:
        InvalidInputError: If it is not
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidInputError("Rating must be a whole number")
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise InvalidInputError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


def create_review(
    session: Session,
    movie_id: int,
    user_id: int,
    rating: int,
    title: str = "",
    content: str = "",
) -> Review:
    """
    Create a review.

    Raises:
        InvalidInputError: If rating is outside 1-5 (checked before any SQL)
        ConstraintViolationError: If movie_id or user_id does not exist
    """
    validate_rating(rating)

    review = Review(
        movie_id=movie_id,
        user_id=user_id,
        rating=rating,
        title=title,
        content=content,
    )
    session.add(review)
    _commit(session, "review")
    session.refresh(review)
    return review


def get_reviews_by_movie_id(session: Session, movie_id: int) -> List[Review]:
    """Reviews of one movie with their authors, newest first."""
    return (
        session.query(Review)
        .options(joinedload(Review.user))
        .filter(Review.movie_id == movie_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def get_recent_reviews(session: Session, limit: int = 10) -> List[Review]:
    """Latest reviews across all movies, with movie and author loaded."""
    return (
        session.query(Review)
        .options(joinedload(Review.user), joinedload(Review.movie))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
        .all()
    )


def get_review_count(session: Session) -> int:
    """Total number of reviews."""
    return session.query(func.count(Review.id)).scalar()
