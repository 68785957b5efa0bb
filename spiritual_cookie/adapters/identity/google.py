"""
Google identity adapter - Implements IdentityProvider protocol.

Runs the server side of Google's OpenID Connect authorization code flow:
builds the authorization URL, exchanges the returned code at the token
endpoint with httpx, and verifies the ID token against Google's published
signing keys with PyJWT.
"""

import logging
import secrets
from urllib.parse import urlencode

import httpx
import jwt
from jwt import PyJWKClient

from spiritual_cookie.domain.exceptions import AuthenticationFailed
from spiritual_cookie.domain.ports import UserSession

logger = logging.getLogger(__name__)

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
JWKS_URI = "https://www.googleapis.com/oauth2/v3/certs"
ISSUERS = ["accounts.google.com", "https://accounts.google.com"]


class GoogleIdentityProvider:
    """
    Implements IdentityProvider protocol for Google accounts.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The HTTP and JWKS clients are injectable so tests can stub the network.
    """

    id = "google"
    name = "Google"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http_client: httpx.Client | None = None,
        jwks_client: PyJWKClient | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._http = http_client or httpx.Client(timeout=10.0)
        self._jwks = jwks_client or PyJWKClient(JWKS_URI)

    def authorization_url(self, redirect_uri: str, state: str, nonce: str) -> str:
        params = {
            "client_id": self._client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
            "nonce": nonce,
            "prompt": "select_account",
        }
        return f"{AUTHORIZATION_ENDPOINT}?{urlencode(params)}"

    def authenticate(self, code: str, redirect_uri: str, nonce: str) -> UserSession:
        """
        Exchange the authorization code and verify the returned ID token.

        Raises:
            AuthenticationFailed: On network errors, non-2xx token responses,
                missing or invalid ID tokens, nonce mismatch, or an
                unverified email address
        """
        try:
            response = self._http.post(
                TOKEN_ENDPOINT,
                data={
                    "code": code,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "redirect_uri": redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Google token exchange failed: %s", e)
            raise AuthenticationFailed("Token exchange failed") from e

        id_token = payload.get("id_token") if isinstance(payload, dict) else None
        if not isinstance(id_token, str) or not id_token:
            raise AuthenticationFailed("Token response missing id_token")

        claims = self._verify_id_token(id_token)

        if not secrets.compare_digest(str(claims.get("nonce", "")).encode(), nonce.encode()):
            raise AuthenticationFailed("ID token nonce mismatch")
        if claims.get("email_verified") is not True:
            raise AuthenticationFailed("Google email is not verified")

        email = claims.get("email")
        subject = claims.get("sub")
        if not isinstance(email, str) or not email.strip():
            raise AuthenticationFailed("ID token missing email")
        if not isinstance(subject, str) or not subject:
            raise AuthenticationFailed("ID token missing subject")

        return UserSession(id=subject, email=email.strip().lower(), name=claims.get("name"))

    def _verify_id_token(self, id_token: str) -> dict:
        try:
            signing_key = self._jwks.get_signing_key_from_jwt(id_token).key
            return jwt.decode(
                id_token,
                signing_key,
                algorithms=["RS256"],
                audience=self._client_id,
                issuer=ISSUERS,
                leeway=60,
            )
        except jwt.PyJWTError as e:
            logger.warning("Google ID token rejected: %s", e)
            raise AuthenticationFailed("Invalid ID token") from e
