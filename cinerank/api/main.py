"""
FastAPI application entry point for CineRank.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from cinerank.api.config import (
    get_database_url,
    get_host,
    get_log_dir,
    get_log_file,
    get_log_level,
    get_port,
    get_session_sweep_minutes,
    get_session_ttl_hours,
    get_sql_echo,
)
from cinerank.api.routers import pages, auth, admin, movies, reviews, system
from cinerank.core.errors import CineRankError, UnauthenticatedError
from cinerank.core.sessions import InMemorySessionStore, SessionStore
from cinerank.database.connection import get_db_manager
from cinerank.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_api_logging(level=get_log_level(), log_file=get_log_file(), log_dir=get_log_dir())
    db_manager = get_db_manager(database_url=get_database_url(), echo=get_sql_echo())
    db_manager.create_tables()
    logger.info("Database initialized")
    yield
    # Shutdown
    db_manager.close()


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/") or request.url.path == "/api"


def _error_response(request: Request, status_code: int, detail):
    if _is_api_request(request):
        return JSONResponse({"detail": detail}, status_code=status_code)
    return PlainTextResponse(str(detail), status_code=status_code)


async def handle_app_error(request: Request, exc: CineRankError):
    if isinstance(exc, UnauthenticatedError) and not _is_api_request(request):
        return RedirectResponse("/login", status_code=303)
    return _error_response(request, exc.status_code, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    if _is_api_request(request):
        return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=400)
    return PlainTextResponse("Invalid request", status_code=400)


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _error_response(request, 500, "Internal server error")


def create_app(session_store: Optional[SessionStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        session_store: Session store to use (default: a new in-memory store
            configured from SESSION_TTL_HOURS and SESSION_SWEEP_MINUTES)
    """
    app = FastAPI(
        title="CineRank",
        description="Movie catalogue with user reviews",
        version="1.0.0",
        lifespan=lifespan,
    )

    if session_store is None:
        session_store = InMemorySessionStore(
            ttl=timedelta(hours=get_session_ttl_hours()),
            sweep_interval=timedelta(minutes=get_session_sweep_minutes()),
        )
    app.state.session_store = session_store

    app.add_exception_handler(CineRankError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(movies.router)
    app.include_router(reviews.router)
    app.include_router(system.router)

    return app


app = create_app()


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    # Refuse to start without a database
    get_database_url()
    uvicorn.run("cinerank.api.main:app", host=get_host(), port=get_port())


if __name__ == "__main__":
    run()
