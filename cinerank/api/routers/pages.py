"""
Server-rendered pages and HTMX partials for browsing movies and posting reviews.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from cinerank.api.dependencies import get_current_user, get_db, require_auth
from cinerank.api.forms import (
    parse_int,
    parse_optional_float,
    parse_rating,
    require_text,
    split_tags,
)
from cinerank.api.templating import render
from cinerank.core.errors import NotFoundError
from cinerank.database import crud
from cinerank.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

RECENT_REVIEWS_ON_HOME = 5


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    query: str = Query(""),
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user),
):
    """Movie listing with optional search and the latest reviews."""
    movies = crud.list_movies_with_stats(db, query)
    recent_reviews = crud.get_recent_reviews(db, limit=RECENT_REVIEWS_ON_HOME)
    return render(
        request,
        "index.html",
        current_user=user,
        movies=movies,
        recent_reviews=recent_reviews,
        query=query,
    )


@router.get("/search", response_class=HTMLResponse)
def search(request: Request, query: str = Query(""), db: Session = Depends(get_db)):
    """Movie list partial for live search."""
    movies = crud.list_movies_with_stats(db, query)
    return render(request, "partials/movie_list.html", movies=movies)


@router.get("/movie/{movie_id}", response_class=HTMLResponse)
def movie_page(
    request: Request,
    movie_id: int,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user),
):
    """Movie details with its reviews."""
    item = crud.get_movie_by_id(db, movie_id)
    reviews = crud.get_reviews_by_movie_id(db, movie_id)
    return render(request, "movie.html", current_user=user, item=item, reviews=reviews)


@router.get("/add-movie", response_class=HTMLResponse)
def add_movie_form(request: Request, user: User = Depends(require_auth)):
    return render(request, "add_movie.html", current_user=user)


@router.post("/add-movie")
@router.post("/movies")
def create_movie(
    request: Request,
    title: str = Form(""),
    director: str = Form(""),
    year: str = Form(""),
    plot: str = Form(""),
    poster_url: str = Form(""),
    imdb_rating: str = Form(""),
    tags: str = Form(""),
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
):
    """
    Create a movie from the add-movie form.

    HTMX callers get 201 with an HX-Redirect header, plain form posts a 303.
    """
    movie = crud.create_movie(
        db,
        title=require_text(title, "title"),
        year=parse_int(year, "year"),
        director=director.strip(),
        plot=plot.strip(),
        poster_url=poster_url.strip(),
        imdb_rating=parse_optional_float(imdb_rating),
        tags=split_tags(tags),
    )
    logger.info("User %s added movie %s", user.id, movie.id)

    location = f"/movie/{movie.id}"
    if request.headers.get("HX-Request") == "true":
        return Response(status_code=201, headers={"HX-Redirect": location})
    return RedirectResponse(location, status_code=303)


@router.get("/review-form", response_class=HTMLResponse)
def review_form(
    request: Request,
    movie_id: str = Query(""),
    user: User = Depends(require_auth),
):
    """Review form partial for one movie."""
    return render(
        request,
        "partials/review_form.html",
        current_user=user,
        movie_id=parse_int(movie_id, "movie ID"),
    )


@router.post("/reviews", response_class=HTMLResponse)
def create_review(
    request: Request,
    movie_id: str = Form(""),
    rating: str = Form(""),
    title: str = Form(""),
    content: str = Form(""),
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
):
    """Create a review and return it as a partial."""
    movie_id = parse_int(movie_id, "movie ID")
    stars = parse_rating(rating)
    if crud.get_movie(db, movie_id) is None:
        raise NotFoundError("Movie not found")

    review = crud.create_review(
        db,
        movie_id=movie_id,
        user_id=user.id,
        rating=stars,
        title=title.strip(),
        content=content.strip(),
    )
    return render(request, "partials/review_item.html", status_code=201, review=review)
