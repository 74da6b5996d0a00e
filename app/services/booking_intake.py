"""
Booking intake
Turns a completed payment notification into a Master_Guests row and confirmation emails
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from app.config import settings
from app.models.booking import PENDING, BookingNotification, BookingRecord
from app.services.email_service import BookingEmailData
from app.services.email_templates import format_amount
from app.services.exceptions import PaymentNotCompletedError

logger = logging.getLogger(__name__)

COMPLETED_STATUS = "COMPLETED"


@dataclass
class IntakeResult:
    """
    Outcome of one intake.

    The booking is accepted once the payment check passes; `stored` and
    `emails` report the best-effort side effects separately.
    """

    booking_id: str
    record: BookingRecord
    stored: bool = False
    emails: Optional[dict] = None
    errors: list = field(default_factory=list)

    @property
    def emails_sent(self) -> bool:
        return bool(self.emails) and all(r.get("success") for r in self.emails.values())


def generate_booking_id(prefix: Optional[str] = None) -> str:
    """Timestamp-derived booking id, e.g. 'RDS-1749500000000'"""
    return f"{prefix or settings.booking_id_prefix}-{int(time.time() * 1000)}"


def split_name(name: Optional[str]) -> tuple:
    """Split a legacy combined name on the first whitespace boundary"""
    parts = (name or "").strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def build_booking_record(
    notification: BookingNotification, booking_id: str, config=None
) -> BookingRecord:
    """Normalize a notification into the row written to Master_Guests"""
    config = config or settings
    legacy_first, legacy_last = split_name(notification.name)
    guests = notification.guests or notification.adults or 1
    order_id = notification.paypal_order_id or ""

    return BookingRecord(
        booking_id=booking_id,
        first_name=notification.first_name or legacy_first,
        last_name=notification.last_name or legacy_last,
        email=notification.email or "",
        phone=notification.phone or "",
        property=notification.property or config.default_property,
        room=accommodation_name(notification),
        check_in=notification.check_in or "",
        check_out=notification.check_out or "",
        nights=str(notification.nights or 1),
        guests=str(guests),
        adults=str(notification.adults or guests),
        children=str(notification.children or 0),
        total_eur=f"€{format_amount(notification.total or 0).replace(',', '')}",
        city_tax="" if notification.city_tax is None else str(notification.city_tax),
        special_requests=notification.message or "",
        arrival_confirmed=PENDING,
        midstay_checkin=PENDING,
        notes=f"PayPal: {order_id}" if order_id else "",
        created_at=datetime.now(timezone.utc).isoformat(),
    )


def accommodation_name(notification: BookingNotification) -> str:
    return (
        notification.room
        or notification.tent
        or notification.experience
        or notification.room_preference
        or ""
    )


class BookingIntakeService:
    """Accept completed-payment notifications"""

    def __init__(self, sheets, email, config=None):
        self.sheets = sheets
        self.email = email
        self.config = config or settings

    def process(self, payload: dict) -> IntakeResult:
        """
        Process one payment notification.

        Args:
            payload: Raw JSON body posted by the checkout

        Returns:
            IntakeResult for the accepted booking

        Raises:
            PaymentNotCompletedError: if the payment status is not COMPLETED
            pydantic.ValidationError: if a text field holds a list or object
        """
        # Checked on the raw body so an unpaid notification is never parsed
        status = payload.get("paypalStatus")
        if status != COMPLETED_STATUS:
            logger.warning("Booking rejected, payment not completed", extra={"reason": status})
            raise PaymentNotCompletedError(status)

        notification = BookingNotification.model_validate(payload)

        booking_id = generate_booking_id(self.config.booking_id_prefix)
        record = build_booking_record(notification, booking_id, self.config)
        result = IntakeResult(booking_id=booking_id, record=record)

        # Store failures must not block the guest confirmation
        result.stored = self.sheets.append_row(
            f"{self.config.master_guests_sheet}!A:A", record.to_row()
        )
        if result.stored:
            logger.info("Website booking written to Master_Guests", extra={"booking_id": booking_id})
        else:
            logger.error("Failed to write booking to OPS sheet", extra={"booking_id": booking_id})
            result.errors.append("store")

        if notification.email:
            try:
                result.emails = self.email.send_booking_emails(
                    self._email_data(notification, record)
                )
            except Exception as e:
                logger.error(f"Failed to send booking emails: {str(e)}", extra={"booking_id": booking_id})
                result.errors.append("email")
            else:
                for recipient, outcome in result.emails.items():
                    if not outcome.get("success"):
                        logger.error(
                            f"{recipient.capitalize()} email failed: {outcome.get('error')}",
                            extra={"booking_id": booking_id},
                        )
                        result.errors.append(f"email:{recipient}")

        return result

    def _email_data(self, notification: BookingNotification, record: BookingRecord) -> BookingEmailData:
        return BookingEmailData(
            booking_id=record.booking_id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            phone=notification.phone,
            property=record.property,
            room=notification.room,
            tent=notification.tent,
            experience=notification.experience or notification.room_preference,
            check_in=record.check_in,
            check_out=record.check_out,
            nights=notification.nights or 1,
            guests=int(record.guests),
            total=notification.total or 0,
            paypal_order_id=notification.paypal_order_id,
            message=notification.message,
        )
