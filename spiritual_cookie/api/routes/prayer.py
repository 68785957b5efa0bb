"""
Prayer request routes.

Defines the single submission endpoint:
- POST /api/prayer - Store one prayer request for the signed-in user
"""

from fastapi import APIRouter, Depends, HTTPException, status

from spiritual_cookie.api.dependencies import get_prayer_service, require_session
from spiritual_cookie.api.errors import MISSING_FIELDS_MESSAGE
from spiritual_cookie.api.models import MessageResponse, PrayerRequestBody
from spiritual_cookie.domain.exceptions import MissingFields, StorageError
from spiritual_cookie.domain.ports import UserSession
from spiritual_cookie.domain.prayer import PrayerRequestService

router = APIRouter(tags=["prayer"])


@router.post(
    "/prayer",
    response_model=MessageResponse,
    responses={
        400: {"model": MessageResponse, "description": "Missing field"},
        401: {"model": MessageResponse, "description": "Not signed in"},
        405: {"model": MessageResponse, "description": "Method not allowed"},
        500: {"model": MessageResponse, "description": "Storage failure"},
    },
    summary="Submit a prayer request",
    description="Store a prayer request on behalf of the signed-in user. "
    "Name, email and prayer are all required.",
)
def submit_prayer(
    request_data: PrayerRequestBody,
    session: UserSession = Depends(require_session),
    service: PrayerRequestService = Depends(get_prayer_service),
) -> MessageResponse:
    """
    Submit a prayer request.

    - **name**: Submitter's name
    - **email**: Contact email address
    - **prayer**: Prayer request text

    The stored record is attributed to the session's email, not the form's.
    """
    try:
        service.submit(
            session,
            name=request_data.name,
            email=request_data.email,
            prayer=request_data.prayer,
        )
    except MissingFields:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MISSING_FIELDS_MESSAGE,
        ) from None
    except StorageError:
        # Network, auth and write failures all map to the same response
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from None

    return MessageResponse(message="Prayer request submitted successfully")
