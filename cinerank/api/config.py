"""
Application configuration loaded from environment or defaults.

Values may also come from a `.env` file in the working directory.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Raises:
        RuntimeError: If DATABASE_URL is not set
    """
    url = os.getenv("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")
    # Heroku-style URLs are not accepted by SQLAlchemy
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def get_sql_echo() -> bool:
    """Whether to log every SQL statement."""
    return os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get optional log file name."""
    return os.getenv("LOG_FILE") or None


def get_log_dir() -> str:
    """Get directory for rotating log files."""
    return os.getenv("LOG_DIR", "logs")


def get_host() -> str:
    """Get host for binding."""
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    """Get HTTP port."""
    return int(os.getenv("PORT", "8080"))


def get_session_ttl_hours() -> int:
    """Get session lifetime in hours."""
    return int(os.getenv("SESSION_TTL_HOURS", "24"))


def get_session_sweep_minutes() -> int:
    """Get minimum minutes between sweeps of expired sessions."""
    return int(os.getenv("SESSION_SWEEP_MINUTES", "60"))


def get_bcrypt_rounds() -> int:
    """Get bcrypt work factor."""
    return int(os.getenv("BCRYPT_ROUNDS", "12"))
