"""
Prayer form state model.

The form page keeps three text fields and one status message. This module
is the single source of the user-facing messages (the page template embeds
them for the browser script) and a Python driver of the same submit flow,
used against the JSON endpoint through an httpx client.
"""

import logging
from dataclasses import asdict, dataclass

import httpx

from spiritual_cookie.domain.ports import UserSession

logger = logging.getLogger(__name__)

SIGN_IN_PROMPT = "Please sign in to submit a prayer request."
SUBMITTING = "Submitting your prayer request..."
SUBMITTED = "Thank you! Your prayer request has been submitted."
FAILED = "Something went wrong. Please try again."
NETWORK_ERROR = "Error submitting prayer request. Please try later."
SIGN_IN_FAILED = "Sign in failed. Please try again."

FORM_MESSAGES = {
    "signIn": SIGN_IN_PROMPT,
    "submitting": SUBMITTING,
    "submitted": SUBMITTED,
    "failed": FAILED,
    "networkError": NETWORK_ERROR,
}

PRAYER_ENDPOINT = "/api/prayer"


@dataclass
class FormState:
    """Ephemeral form state: the three fields plus the status message."""

    name: str = ""
    email: str = ""
    prayer: str = ""
    message: str = ""

    def payload(self) -> dict[str, str]:
        """JSON body sent to the submission endpoint."""
        data = asdict(self)
        del data["message"]
        return data

    def clear_fields(self) -> None:
        self.name = ""
        self.email = ""
        self.prayer = ""


class PrayerForm:
    """
    Drives the submit flow of the prayer form.

    Reference model of static/form.js, which is what the page ships: no
    network call while signed out, an in-progress message while the request
    is outstanding, and the fields cleared only after a successful
    submission. Used to exercise the endpoint from Python.
    """

    FIELDS = ("name", "email", "prayer")

    def __init__(self, client: httpx.Client, endpoint: str = PRAYER_ENDPOINT) -> None:
        self._client = client
        self._endpoint = endpoint
        self.state = FormState()

    def update(self, field: str, value: str) -> None:
        """Bind an input's value to the form state."""
        if field not in self.FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        setattr(self.state, field, value)

    def submit(self, session: UserSession | None) -> str:
        """
        Submit the current fields.

        Args:
            session: Current user session, or None when signed out

        Returns:
            The status message now shown by the form
        """
        if session is None:
            self.state.message = SIGN_IN_PROMPT
            return self.state.message

        self.state.message = SUBMITTING
        try:
            response = self._client.post(self._endpoint, json=self.state.payload())
        except httpx.HTTPError as e:
            logger.warning("Prayer request submission failed: %s", e)
            self.state.message = NETWORK_ERROR
            return self.state.message

        if response.is_success:
            self.state.message = SUBMITTED
            self.state.clear_fields()
        else:
            self.state.message = FAILED
        return self.state.message
