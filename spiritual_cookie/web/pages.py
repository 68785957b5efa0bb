"""
HTML pages - Form page and About page.

Pages are rendered with Jinja2; the form itself is driven in the browser
by static/form.js, which reads its messages from the rendered page.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from spiritual_cookie.api.dependencies import get_current_session
from spiritual_cookie.domain.ports import UserSession
from spiritual_cookie.web.form import FORM_MESSAGES, PRAYER_ENDPOINT, SIGN_IN_FAILED

WEB_DIR = Path(__file__).parent
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    error: str | None = None,
    session: UserSession | None = Depends(get_current_session),
) -> HTMLResponse:
    """Render the prayer request form."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "session": session,
            "messages": FORM_MESSAGES,
            "endpoint": PRAYER_ENDPOINT,
            "error_message": SIGN_IN_FAILED if error else None,
        },
    )


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "about.html", {})
