"""Email notifications via Amazon SES.

Notifications are fire-and-forget: the API schedules them as background
tasks after the response is decided, and a delivery failure is logged but
never affects the booking or contact request that triggered it.
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lakeside.models import Booking, ContactMessage

logger = logging.getLogger(__name__)


class NotificationService:
    """Sends plain text emails to guests and the retreat inbox."""

    def __init__(
        self,
        sender: str | None = None,
        recipient: str | None = None,
        client: object | None = None,
    ) -> None:
        """Initialize notification service.

        Args:
            sender: Verified SES sender address; without it nothing is sent
            recipient: Retreat inbox for contact messages and booking copies
            client: Optional boto3 SES client (created lazily when omitted)
        """
        self.sender = sender
        self.recipient = recipient
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("ses")
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self.sender)

    def _send(self, to: list[str], subject: str, body: str) -> bool:
        if not self.is_configured:
            logger.info("Email not configured, skipping: %s", subject)
            return False

        try:
            response = self.client.send_email(
                Source=self.sender,
                Destination={"ToAddresses": to},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": body, "Charset": "UTF-8"}},
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Email delivery failed (%s): %s", subject, e)
            return False

        logger.info("Email sent: %s (message id %s)", subject, response.get("MessageId"))
        return True

    def send_booking_confirmation(self, booking: Booking) -> bool:
        """Email the guest a booking confirmation, copying the retreat inbox.

        Returns:
            True if SES accepted the message
        """
        to = [booking.guest.email]
        if self.recipient:
            to.append(self.recipient)

        nights = (booking.check_out - booking.check_in).days
        body = (
            f"Kia ora {booking.guest.first_name},\n\n"
            f"Your booking {booking.reference} is {booking.status.value}.\n"
            f"Accommodation: {booking.accommodation_id}\n"
            f"Check-in: {booking.check_in.isoformat()}\n"
            f"Check-out: {booking.check_out.isoformat()} ({nights} nights)\n"
            f"Guests: {booking.guests.adults} adults, "
            f"{booking.guests.children} children\n"
        )
        if booking.special_requests:
            body += f"Special requests: {booking.special_requests}\n"

        return self._send(to, f"Booking confirmed: {booking.reference}", body)

    def send_contact_notification(self, message: ContactMessage) -> bool:
        """Forward a contact form message to the retreat inbox.

        Returns:
            True if SES accepted the message
        """
        if not self.recipient:
            logger.info("No notification recipient configured, skipping contact email")
            return False

        body = (
            f"From: {message.name} <{message.email}>\n"
            f"Phone: {message.phone or '-'}\n\n"
            f"{message.message}\n"
        )
        return self._send([self.recipient], f"Website enquiry from {message.name}", body)
