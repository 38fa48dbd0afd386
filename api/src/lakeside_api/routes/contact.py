"""Contact form endpoint."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends

from lakeside.models import EMAIL_PATTERN, BookingError, ContactMessage, ErrorCode
from lakeside.services import NotificationService
from lakeside_api.dependencies import get_notification_service
from lakeside_api.models.contact import ContactResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])


@router.post(
    "/contact",
    summary="Send a contact message",
    description="""
Submit the website contact form.

**Required fields:** name, email, message. Phone is optional.

The message is forwarded to the retreat inbox in the background when SES
is configured.
""",
    response_model=ContactResponse,
    responses={
        400: {"description": "Missing fields or invalid email"},
    },
)
async def submit_contact(
    message: ContactMessage,
    background_tasks: BackgroundTasks,
    notifications: NotificationService = Depends(get_notification_service),
) -> ContactResponse:
    """Accept a contact form submission."""
    missing = [
        name
        for name in ("name", "email", "message")
        if not (getattr(message, name) or "").strip()
    ]
    if missing:
        raise BookingError(ErrorCode.INVALID_CONTACT, details={"missing": missing})

    if not EMAIL_PATTERN.match(message.email.strip()):
        raise BookingError(ErrorCode.INVALID_CONTACT, details={"invalid": ["email"]})

    logger.info("Contact form submission from %s <%s>", message.name, message.email)
    background_tasks.add_task(notifications.send_contact_notification, message)
    return ContactResponse()
