"""
Login, logout and registration.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from cinerank.api.dependencies import SESSION_COOKIE, get_db, get_session_store
from cinerank.api.forms import require_text
from cinerank.api.templating import render
from cinerank.core.errors import ConstraintViolationError, InvalidInputError
from cinerank.core.security import hash_password, verify_password
from cinerank.core.sessions import SessionStore
from cinerank.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def issue_session_cookie(response: Response, store: SessionStore, user_id: int) -> str:
    """Start a session and attach its cookie to the response."""
    token = store.create(user_id)
    max_age = int(store.ttl.total_seconds())
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=max_age,
        expires=max_age,
        httponly=True,
        samesite="lax",
    )
    return token


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request):
    return render(request, "login.html")


@router.post("/login")
def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Check credentials and start a session."""
    user = crud.get_user_by_email(db, email.strip())
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        return render(
            request,
            "login.html",
            status_code=401,
            error="Invalid credentials",
            email=email,
        )

    response = RedirectResponse("/", status_code=303)
    issue_session_cookie(response, store, user.id)
    logger.info("User %s logged in", user.id)
    return response


@router.get("/logout")
def logout(request: Request, store: SessionStore = Depends(get_session_store)):
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        store.invalidate(token)
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/register", response_class=HTMLResponse)
def register_form(request: Request):
    return render(request, "register.html")


@router.post("/register")
def register(
    request: Request,
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Create an account with the 'user' role and log it in."""
    try:
        username = require_text(username, "username")
        email = require_text(email, "email")
        # Hashed as typed; login compares the raw form value
        require_text(password, "password")
        user = crud.create_user(
            db,
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
    except InvalidInputError as e:
        return render(request, "register.html", status_code=400,
                      error=str(e), username=username, email=email)
    except ConstraintViolationError:
        return render(request, "register.html", status_code=409,
                      error="Email already registered", username=username, email=email)

    response = RedirectResponse("/", status_code=303)
    issue_session_cookie(response, store, user.id)
    return response
