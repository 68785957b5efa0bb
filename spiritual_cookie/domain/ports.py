"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class UserSession:
    """
    Authenticated user as established by an identity provider.

    `id` is the provider's stable subject identifier (`sub`). `email` is the
    canonical identity key: it is what gets stored alongside each record.
    """

    id: str
    email: str
    name: str | None = None


@dataclass(frozen=True)
class PrayerRequest:
    """A single accepted submission, in its persisted shape."""

    name: str
    email: str
    prayer: str
    date: datetime
    user: str


class PrayerRequestRepository(Protocol):
    """Port interface for prayer request persistence."""

    def add(self, record: PrayerRequest) -> None:
        """
        Insert one prayer request into the store.

        Records are write-only from this system's point of view: they are
        never updated, deleted, or read back.

        Args:
            record: Validated prayer request

        Raises:
            StorageError: If the store could not accept the record
        """
        ...


class IdentityProvider(Protocol):
    """Port interface for an external OAuth / OpenID Connect provider."""

    id: str
    name: str

    def authorization_url(self, redirect_uri: str, state: str, nonce: str) -> str:
        """
        Build the URL that starts the provider's sign-in flow.

        Args:
            redirect_uri: Callback URL registered with the provider
            state: Anti-forgery value echoed back on the callback
            nonce: Value the provider embeds in the ID token

        Returns:
            Absolute authorization URL to redirect the browser to
        """
        ...

    def authenticate(self, code: str, redirect_uri: str, nonce: str) -> UserSession:
        """
        Exchange an authorization code for a verified user session.

        Args:
            code: Authorization code from the callback query string
            redirect_uri: Same callback URL used to start the flow
            nonce: Nonce generated when the flow started

        Returns:
            UserSession for the signed-in user

        Raises:
            AuthenticationFailed: If the exchange or token verification fails
        """
        ...
