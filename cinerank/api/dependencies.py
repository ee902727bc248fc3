"""
FastAPI dependency injection for database session, session store and the
authenticated user.
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from cinerank.core.errors import ForbiddenError, SessionNotFoundError, UnauthenticatedError
from cinerank.core.sessions import SessionStore
from cinerank.database.connection import get_db_manager
from cinerank.database import crud
from cinerank.database.models import User

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager()
    with db_manager.session_scope() as session:
        yield session


def get_session_store(request: Request) -> SessionStore:
    """The application's session store."""
    return request.app.state.session_store


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> Optional[User]:
    """
    Resolve the session cookie to a user.

    Returns None for a missing cookie, an unknown or expired session, or a
    session whose user has since been deleted.
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None
    try:
        user_id = store.resolve(token)
    except SessionNotFoundError:
        return None
    user = crud.get_user_by_id(db, user_id)
    if user is None:
        logger.debug("Session for missing user %s", user_id)
    return user


def require_auth(user: Optional[User] = Depends(get_current_user)) -> User:
    """Current user, or UnauthenticatedError."""
    if user is None:
        raise UnauthenticatedError("Authentication required")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """Current user if they are an admin, or ForbiddenError."""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
