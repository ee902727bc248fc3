"""
Jinja2 template rendering for HTML pages and HTMX partials.
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, name: str, status_code: int = 200, **context) -> HTMLResponse:
    """Render a template with the given context."""
    context.setdefault("current_user", None)
    return templates.TemplateResponse(request, name, context, status_code=status_code)
