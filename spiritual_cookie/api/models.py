"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field


class PrayerRequestBody(BaseModel):
    """
    Request model for a prayer request submission.

    Fields are optional at the schema level so that missing and empty values
    are both reported by the domain as "All fields are required".
    """

    name: str | None = Field(None, description="Submitter's name")
    email: str | None = Field(None, description="Contact email address")
    prayer: str | None = Field(None, description="Prayer request text")


class MessageResponse(BaseModel):
    """Response model carrying a single human-readable message."""

    message: str


class SessionUser(BaseModel):
    """Signed-in user as exposed to the page."""

    id: str
    email: str
    name: str | None = None


class SessionResponse(BaseModel):
    """Response model for the session accessor."""

    user: SessionUser


class ProviderInfo(BaseModel):
    """A configured identity provider."""

    id: str
    name: str
    signin_url: str
