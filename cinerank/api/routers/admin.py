"""
Administration of users and movies. All routes require the admin role.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from cinerank.api.dependencies import get_db, get_session_store, require_admin
from cinerank.api.templating import render
from cinerank.core.errors import InvalidInputError, NotFoundError
from cinerank.core.sessions import SessionStore
from cinerank.database import crud
from cinerank.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_class=HTMLResponse)
def admin_panel(
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """List all users and movies."""
    return render(
        request,
        "admin.html",
        current_user=admin,
        users=crud.list_users(db),
        movies=crud.list_movies_with_stats(db),
    )


@router.post("/delete-user/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    admin: User = Depends(require_admin),
):
    """Delete a user with their reviews and sessions."""
    if user_id == admin.id:
        raise InvalidInputError("Cannot delete yourself")
    if not crud.delete_user(db, user_id):
        raise NotFoundError("User not found")
    store.invalidate_user(user_id)
    logger.info("Admin %s deleted user %s", admin.id, user_id)
    return RedirectResponse("/admin", status_code=303)


@router.post("/delete-movie/{movie_id}")
def delete_movie(
    movie_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Delete a movie with its reviews."""
    if not crud.delete_movie(db, movie_id):
        raise NotFoundError("Movie not found")
    logger.info("Admin %s deleted movie %s", admin.id, movie_id)
    return RedirectResponse("/admin", status_code=303)
