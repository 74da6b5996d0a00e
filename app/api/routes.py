import hmac
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from app.config import settings
from app.services.booking_intake import BookingIntakeService
from app.services.email_service import EmailService, get_email_service
from app.services.exceptions import PaymentNotCompletedError
from app.services.google_sheets import GoogleSheetsService, get_sheets_service
from app.services.pre_arrival import PreArrivalJob

logger = logging.getLogger(__name__)

router = APIRouter()


def is_authorized(authorization: Optional[str], secret: str) -> bool:
    """Check an 'Authorization: Bearer <secret>' header against the configured secret"""
    if not secret or not authorization:
        return False
    return hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode())


@router.post("/api/bookings")
async def create_booking(
    request: Request,
    sheets: GoogleSheetsService = Depends(get_sheets_service),
    email: EmailService = Depends(get_email_service),
):
    """
    Accept a completed PayPal checkout.

    - Reject unless the payment status is COMPLETED
    - Write the booking to Master_Guests (best effort)
    - Send guest and owner emails (best effort)
    """
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise ValueError("Booking payload must be a JSON object")

        intake = BookingIntakeService(sheets, email, settings)
        result = await run_in_threadpool(intake.process, payload)
    except PaymentNotCompletedError as e:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Payment not completed",
                "paypalStatus": e.payment_status,
            },
        )
    except Exception as e:
        logger.exception(f"Error creating booking: {str(e)}")
        return JSONResponse(status_code=500, content={"success": False, "error": "Server error"})

    if result.errors:
        logger.warning(
            f"Booking accepted with side-effect failures: {', '.join(result.errors)}",
            extra={"booking_id": result.booking_id},
        )

    return {"success": True, "bookingId": result.booking_id, "message": "Booking confirmed"}


@router.get("/api/bookings")
def list_bookings():
    """Bookings live in the operations dashboard"""
    return {"message": f"View bookings at {settings.ops_dashboard_url}"}


@router.get("/api/cron/pre-arrival")
def pre_arrival_cron(
    authorization: Optional[str] = Header(None),
    sheets: GoogleSheetsService = Depends(get_sheets_service),
    email: EmailService = Depends(get_email_service),
):
    """Daily trigger for pre-arrival reminders, guarded by the cron secret"""
    if not is_authorized(authorization, settings.cron_secret):
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        report = PreArrivalJob(sheets, email, settings).run()
    except Exception as e:
        logger.exception(f"Pre-arrival cron error: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(e)},
        )

    return {"success": True, "targetDate": report.target_date, "results": report.results()}


@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "ok", "app": settings.app_name}
