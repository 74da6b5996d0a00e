"""
Email Service using the Resend API
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional
import httpx
from app.config import settings
from app.models.property import get_property_content
from app.services.email_templates import (
    render_guest_confirmation,
    render_owner_notification,
    render_pre_arrival,
)

logger = logging.getLogger(__name__)


@dataclass
class BookingEmailData:
    """Fields rendered into the confirmation emails"""

    booking_id: str
    first_name: str
    last_name: str
    email: str
    property: str
    check_in: str
    check_out: str
    nights: int = 1
    guests: int = 1
    total: float = 0
    phone: Optional[str] = None
    room: Optional[str] = None
    tent: Optional[str] = None
    experience: Optional[str] = None
    paypal_order_id: Optional[str] = None
    message: Optional[str] = None

    def accommodation_name(self) -> str:
        return self.room or self.tent or self.experience or "Accommodation"


@dataclass
class PreArrivalEmailData:
    booking_id: str
    first_name: str
    email: str
    check_in: str
    check_out: str
    room: str
    arrival_time_confirmed: bool
    confirmed_time: str = ""
    property: str = ""


class EmailService:
    """Service to send transactional email through Resend"""

    def __init__(self, config=None, client: Optional[httpx.Client] = None):
        self.config = config or settings
        self.api_key = self.config.resend_api_key
        self.client = client or httpx.Client(base_url=self.config.resend_api_url, timeout=10.0)

    def arrival_form_url(self, booking_id: str) -> str:
        return f"{self.config.arrival_form_url}?id={booking_id}"

    def send_email(self, to: str, subject: str, html: str, bcc: Optional[str] = None) -> dict:
        """
        Send one HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html: Rendered HTML body
            bcc: Optional blind copy address

        Returns:
            dict with success flag and either the API result or the error
        """
        if not self.api_key:
            logger.error("RESEND_API_KEY not set, email not sent", extra={"recipient": to})
            return {"success": False, "error": "Email service not configured"}

        payload = {
            "from": self.config.email_from,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if bcc:
            payload["bcc"] = [bcc]

        try:
            response = self.client.post(
                "/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
            result = response.json()
            logger.info(f"Email sent: {subject}", extra={"recipient": to})
            return {"success": True, "result": result}
        except Exception as e:
            logger.error(f"Error sending email: {str(e)}", extra={"recipient": to})
            return {"success": False, "error": str(e)}

    def _render_and_send(self, render, to: str, bcc: Optional[str] = None) -> dict:
        try:
            subject, html = render()
        except Exception as e:
            logger.error(f"Error rendering email: {str(e)}", extra={"recipient": to})
            return {"success": False, "error": str(e)}
        return self.send_email(to, subject, html, bcc=bcc)

    def send_guest_confirmation(self, data: BookingEmailData) -> dict:
        """Send the booking confirmation to the guest, BCC the owner"""
        return self._render_and_send(
            lambda: render_guest_confirmation(
                data,
                get_property_content(data.property),
                self.arrival_form_url(data.booking_id),
            ),
            data.email,
            bcc=self.config.owner_email,
        )

    def send_owner_notification(self, data: BookingEmailData) -> dict:
        """Send the new booking summary to the operator address"""
        return self._render_and_send(
            lambda: render_owner_notification(data, self.config.admin_bookings_url),
            self.config.owner_email,
        )

    def send_booking_emails(self, data: BookingEmailData) -> dict:
        """
        Send guest and owner emails concurrently.

        Each send is independent; a failure of one does not affect the other.
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            guest = executor.submit(self.send_guest_confirmation, data)
            owner = executor.submit(self.send_owner_notification, data)
            return {"guest": guest.result(), "owner": owner.result()}

    def send_pre_arrival_email(self, data: PreArrivalEmailData) -> dict:
        """Send the pre-arrival reminder, BCC the owner"""
        return self._render_and_send(
            lambda: render_pre_arrival(
                data,
                get_property_content(data.property),
                self.arrival_form_url(data.booking_id),
            ),
            data.email,
            bcc=self.config.owner_email,
        )


# Global instance
_email_service = None


def get_email_service() -> EmailService:
    """Get or create email service instance"""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
