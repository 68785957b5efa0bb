"""Identity adapters - OAuth / OpenID Connect providers."""

from spiritual_cookie.config.settings import Settings
from spiritual_cookie.domain.ports import IdentityProvider

from .google import GoogleIdentityProvider


def build_providers(settings: Settings) -> dict[str, IdentityProvider]:
    """
    Build the provider registry from configuration.

    A provider is only registered when its client id is configured.
    Registration order is the order providers are offered to users.
    """
    providers: dict[str, IdentityProvider] = {}
    if settings.google_client_id:
        providers[GoogleIdentityProvider.id] = GoogleIdentityProvider(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
        )
    return providers


__all__ = ["GoogleIdentityProvider", "build_providers"]
