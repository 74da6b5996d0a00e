"""
Booking pipeline exceptions
"""


class BookingError(Exception):
    """Base error for the booking pipeline"""


class PaymentNotCompletedError(BookingError):
    """Raised when a payment notification does not report a completed payment"""

    def __init__(self, payment_status):
        self.payment_status = payment_status
        super().__init__(f"Payment not completed (status: {payment_status!r})")


class CredentialsError(BookingError):
    """Raised when no Google service account credentials can be resolved"""
