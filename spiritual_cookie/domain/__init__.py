"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for accepting prayer
requests. It defines its own port interfaces for infrastructure
abstraction, so storage and identity adapters stay swappable.
"""

from .exceptions import (
    AuthenticationFailed,
    MissingFields,
    NotAuthenticated,
    PrayerRequestError,
    StorageError,
)
from .ports import IdentityProvider, PrayerRequest, PrayerRequestRepository, UserSession
from .prayer import PrayerRequestService

__all__ = [
    "AuthenticationFailed",
    "IdentityProvider",
    "MissingFields",
    "NotAuthenticated",
    "PrayerRequest",
    "PrayerRequestError",
    "PrayerRequestRepository",
    "PrayerRequestService",
    "StorageError",
    "UserSession",
]
