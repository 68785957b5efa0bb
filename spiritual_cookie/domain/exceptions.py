"""
Domain exceptions - Semantic error types for prayer request submission.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class PrayerRequestError(Exception):
    """Base class for prayer request domain errors."""

    pass


class NotAuthenticated(PrayerRequestError):
    """No valid session accompanies the submission."""

    pass


class MissingFields(PrayerRequestError):
    """One or more required fields are missing or empty."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(", ".join(fields))
        self.fields = fields


class StorageError(PrayerRequestError):
    """The document store rejected or could not accept the record."""

    pass


class AuthenticationFailed(PrayerRequestError):
    """The identity provider flow could not produce a session."""

    pass
