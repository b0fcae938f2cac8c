"""
Frontend page - raw HTML read from disk on every request.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from userapi.core.errors import FrontendUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()


def load_frontend(path: str | Path) -> str:
    """Read the HTML page. Raises FrontendUnavailableError if it is missing or unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.critical("Error reading %s: %s", path, e)
        raise FrontendUnavailableError(f"Error reading {path}: {e}") from e


@router.get("/frontend", response_class=HTMLResponse)
def frontend(request: Request):
    return HTMLResponse(load_frontend(request.app.state.settings.frontend_path))
