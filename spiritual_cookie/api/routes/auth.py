"""
Authentication routes.

Implements the sign-in/sign-out endpoints for the configured identity
providers, keeping the signed-in user in the signed session cookie:
- GET  /api/auth/providers           - List configured providers
- GET  /api/auth/signin[/{provider}] - Start the provider's OAuth flow
- GET  /api/auth/callback/{provider} - Finish the flow and create a session
- POST /api/auth/signout             - Clear the session
- GET  /api/auth/session             - Current session, or null
"""

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse

from spiritual_cookie.api.dependencies import (
    SESSION_USER_KEY,
    get_current_session,
    get_provider,
    get_providers,
)
from spiritual_cookie.api.models import ProviderInfo, SessionResponse, SessionUser
from spiritual_cookie.config.settings import Settings, get_settings
from spiritual_cookie.domain.exceptions import AuthenticationFailed
from spiritual_cookie.domain.ports import IdentityProvider, UserSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

# Session key holding the in-flight OAuth state, nonce and destination
OAUTH_FLOW_KEY = "oauth_flow"


def _safe_callback_url(value: str | None) -> str:
    """Only same-site absolute paths are accepted as post-login destinations."""
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return "/"
    return value


def _redirect_uri(settings: Settings, provider_id: str) -> str:
    return f"{settings.public_base_url.rstrip('/')}/api/auth/callback/{provider_id}"


def _start_flow(
    request: Request,
    provider: IdentityProvider,
    callback_url: str | None,
    settings: Settings,
) -> RedirectResponse:
    state = secrets.token_urlsafe(32)
    nonce = secrets.token_urlsafe(32)
    request.session[OAUTH_FLOW_KEY] = {
        "provider": provider.id,
        "state": state,
        "nonce": nonce,
        "callback_url": _safe_callback_url(callback_url),
    }
    url = provider.authorization_url(_redirect_uri(settings, provider.id), state, nonce)
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    response.headers["Cache-Control"] = "no-store"
    return response


def _signin_error(error: str) -> RedirectResponse:
    return RedirectResponse(f"/?error={error}", status_code=status.HTTP_302_FOUND)


@router.get(
    "/providers",
    response_model=list[ProviderInfo],
    summary="List identity providers",
)
async def list_providers(
    providers: dict[str, IdentityProvider] = Depends(get_providers),
) -> list[ProviderInfo]:
    """List the configured identity providers in presentation order."""
    return [
        ProviderInfo(id=p.id, name=p.name, signin_url=f"/api/auth/signin/{p.id}")
        for p in providers.values()
    ]


@router.get("/signin", summary="Sign in with the default provider")
async def signin_default(
    request: Request,
    callback_url: str | None = Query(None, alias="callbackUrl"),
    providers: dict[str, IdentityProvider] = Depends(get_providers),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Start the flow of the first configured provider."""
    if not providers:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No identity provider configured",
        )
    provider = next(iter(providers.values()))
    return _start_flow(request, provider, callback_url, settings)


@router.get("/signin/{provider}", summary="Sign in with a specific provider")
async def signin(
    request: Request,
    callback_url: str | None = Query(None, alias="callbackUrl"),
    identity_provider: IdentityProvider = Depends(get_provider),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Redirect the browser to the provider's authorization page."""
    return _start_flow(request, identity_provider, callback_url, settings)


@router.get("/callback/{provider}", summary="OAuth callback")
def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    identity_provider: IdentityProvider = Depends(get_provider),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """
    Complete the provider flow.

    Verifies the anti-forgery state saved by the sign-in step, exchanges the
    code for a verified user and stores it in the session. Every failure
    redirects to the home page with an `error` code and leaves the user
    signed out.
    """
    flow = request.session.pop(OAUTH_FLOW_KEY, None)

    if error:
        logger.info("Provider %s returned error: %s", identity_provider.id, error)
        return _signin_error("AccessDenied")

    if (
        not isinstance(flow, dict)
        or flow.get("provider") != identity_provider.id
        or not state
        or not code
        or not secrets.compare_digest(str(flow.get("state", "")).encode(), state.encode())
    ):
        logger.warning("OAuth callback rejected: state mismatch")
        return _signin_error("OAuthCallback")

    try:
        user = identity_provider.authenticate(
            code, _redirect_uri(settings, identity_provider.id), flow["nonce"]
        )
    except AuthenticationFailed as e:
        logger.warning("Sign-in with %s failed: %s", identity_provider.id, e)
        return _signin_error("OAuthCallback")

    request.session.clear()
    request.session[SESSION_USER_KEY] = {"id": user.id, "email": user.email, "name": user.name}
    logger.info("User %s signed in with %s", user.email, identity_provider.id)

    response = RedirectResponse(flow["callback_url"], status_code=status.HTTP_302_FOUND)
    response.headers["Cache-Control"] = "no-store"
    return response


@router.post("/signout", summary="Sign out")
async def signout(
    request: Request,
    session: UserSession | None = Depends(get_current_session),
) -> RedirectResponse:
    """Clear the session and return to the home page."""
    request.session.clear()
    if session is not None:
        logger.info("User %s signed out", session.email)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/session",
    response_model=SessionResponse | None,
    summary="Current session",
)
async def get_session(
    session: UserSession | None = Depends(get_current_session),
) -> SessionResponse | None:
    """Return the signed-in user, or null when signed out."""
    if session is None:
        return None
    return SessionResponse(user=SessionUser(id=session.id, email=session.email, name=session.name))
