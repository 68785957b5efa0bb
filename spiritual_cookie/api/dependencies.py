"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services, identity providers and the current session into routes.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from psycopg_pool import ConnectionPool

from spiritual_cookie.adapters.repository.postgres import PostgresPrayerRequestRepository
from spiritual_cookie.domain.ports import IdentityProvider, PrayerRequestRepository, UserSession
from spiritual_cookie.domain.prayer import PrayerRequestService

logger = logging.getLogger(__name__)

# Key under which the signed-in user is kept in the signed session cookie
SESSION_USER_KEY = "user"


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PrayerRequestRepository:
    """Create repository with connection pool from app state."""
    return PostgresPrayerRequestRepository(get_pool(request))


def get_prayer_service(
    repository: PrayerRequestRepository = Depends(get_repository),
) -> PrayerRequestService:
    """Create prayer request service with injected repository."""
    return PrayerRequestService(repository=repository)


def get_current_session(request: Request) -> UserSession | None:
    """
    Read the signed-in user from the session cookie.

    Returns None when signed out or when the stored value is not a
    well-formed user record.
    """
    data = request.session.get(SESSION_USER_KEY)
    if not isinstance(data, dict):
        return None
    user_id = data.get("id")
    email = data.get("email")
    if not isinstance(user_id, str) or not isinstance(email, str) or not email:
        logger.warning("Discarding malformed session user")
        return None
    return UserSession(id=user_id, email=email, name=data.get("name"))


def require_session(
    session: UserSession | None = Depends(get_current_session),
) -> UserSession:
    """Require a signed-in user, otherwise respond 401 before touching storage."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return session


def get_providers(request: Request) -> dict[str, IdentityProvider]:
    """Get the identity provider registry from app state."""
    return request.app.state.providers


def get_provider(
    provider: str,
    providers: dict[str, IdentityProvider] = Depends(get_providers),
) -> IdentityProvider:
    """Resolve the `{provider}` path parameter to a configured provider."""
    try:
        return providers[provider]
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unknown provider",
        ) from None
