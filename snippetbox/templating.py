"""
Snippetbox — Template Rendering
=================================

What:  The Jinja2 environment and the render() helper every page goes through.
Why:   Each page needs the same base data (current year, flash message), and
       the flash message must be consumed exactly once. Doing it here keeps
       that rule out of the individual handlers.
How:   Starlette's Jinja2Templates loads templates from snippetbox/ui/html
       (or TEMPLATE_DIR); render() merges the common data with the page data.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import Response

from snippetbox.config import settings

UI_ROOT = Path(__file__).resolve().parent / "ui"

# Session key the create handler writes and the next render pops
FLASH_KEY = "flash"


def human_date(value: Optional[datetime]) -> str:
    """
    Format a timestamp for display, e.g. "17 Mar 2024 at 10:15" (UTC).

    Returns an empty string for None so templates can pass optional values.
    """
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%d %b %Y at %H:%M")


templates = Jinja2Templates(directory=settings.template_dir or str(UI_ROOT / "html"))
templates.env.filters["human_date"] = human_date


def render(request: Request, name: str, status_code: int = 200, **data: Any) -> Response:
    """
    Render a page template.

    Args:
        request:     Current request (the session is read from it)
        name:        Template file name, e.g. "home.html"
        status_code: HTTP status of the response (422 for invalid forms)
        **data:      Page-specific template variables

    Side effect:
        Pops the flash message from the session, so it is shown once.
    """
    context = {
        "current_year": datetime.now(timezone.utc).year,
        "flash": request.session.pop(FLASH_KEY, None),
        **data,
    }
    return templates.TemplateResponse(request, name, context, status_code=status_code)
