"""
Prayer request domain service.

Validates a submission against the two rules the system enforces and hands
the resulting record to the repository:

- a valid session must exist at creation time
- name, email and prayer must all be non-empty strings

The stored `user` always comes from the session, never from form input.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from .exceptions import MissingFields, NotAuthenticated
from .ports import PrayerRequest, PrayerRequestRepository, UserSession

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "prayer")


@dataclass
class PrayerRequestService:
    """Domain service for accepting prayer requests."""

    repository: PrayerRequestRepository

    def submit(
        self,
        session: UserSession | None,
        name: str | None,
        email: str | None,
        prayer: str | None,
    ) -> PrayerRequest:
        """
        Validate and store one prayer request.

        Args:
            session: Current user session, or None when signed out
            name: Submitter's name from the form
            email: Contact email from the form
            prayer: Free-text prayer request

        Returns:
            The stored PrayerRequest

        Raises:
            NotAuthenticated: If there is no session
            MissingFields: If any required field is missing or empty
            StorageError: If the repository fails to insert
        """
        if session is None:
            raise NotAuthenticated()

        values = {"name": name, "email": email, "prayer": prayer}
        missing = [field for field in REQUIRED_FIELDS if not values[field]]
        if missing:
            raise MissingFields(missing)

        record = PrayerRequest(
            name=name,
            email=email,
            prayer=prayer,
            date=datetime.now(timezone.utc),
            user=session.email,
        )
        self.repository.add(record)

        logger.info("Prayer request stored for user %s", session.email)
        return record
