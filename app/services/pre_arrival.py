"""
Pre-arrival reminders
Daily scan of Master_Guests for website bookings checking in N days out
"""
import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo
from app.config import settings
from app.models.booking import (
    CANCELLED_STATUS,
    MASTER_GUESTS_COLUMNS,
    BookingRecord,
    Column,
    append_reminder_marker,
)
from app.services.email_service import PreArrivalEmailData
from app.services.google_sheets import column_letter

logger = logging.getLogger(__name__)

NOTES_COLUMN = column_letter(Column.NOTES)
LAST_COLUMN = column_letter(len(MASTER_GUESTS_COLUMNS) - 1)

CHECK_IN_FORMATS = (
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_check_in(value: str) -> Optional[date]:
    """Parse a check-in cell; returns None when unparseable"""
    value = (value or "").strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in CHECK_IN_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


@dataclass
class PreArrivalReport:
    target_date: str
    sent: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    def results(self) -> dict:
        data = asdict(self)
        data.pop("target_date")
        return data


class PreArrivalJob:
    """Send each upcoming website booking one pre-arrival reminder"""

    def __init__(self, sheets, email, config=None):
        self.sheets = sheets
        self.email = email
        self.config = config or settings

    def today(self) -> date:
        return datetime.now(ZoneInfo(self.config.timezone)).date()

    def run(self, today: Optional[date] = None) -> PreArrivalReport:
        """
        Scan all booking rows and send due reminders.

        Args:
            today: Invocation date, defaults to today in the configured timezone

        Returns:
            PreArrivalReport with sent, skipped and errored bookings
        """
        today = today or self.today()
        target = today + timedelta(days=self.config.pre_arrival_days_ahead)
        report = PreArrivalReport(target_date=target.isoformat())
        sheet = self.config.master_guests_sheet

        # Header row skipped, so data row i lives on sheet row i + 2
        rows = self.sheets.read_rows(f"{sheet}!A2:{LAST_COLUMN}")
        logger.info(f"Checking {len(rows)} bookings for arrivals on {report.target_date}")

        for i, row in enumerate(rows):
            try:
                self._process_row(BookingRecord.from_row(row), i + 2, target, report)
            except Exception as e:
                booking_id = row[Column.BOOKING_ID] if row else f"row {i + 2}"
                logger.error(f"Error processing row: {str(e)}", extra={"booking_id": booking_id})
                report.errors.append(f"{booking_id}: {str(e)}")

        logger.info(
            f"Pre-arrival run finished: {len(report.sent)} sent, "
            f"{len(report.skipped)} skipped, {len(report.errors)} errors"
        )
        return report

    def _process_row(self, record: BookingRecord, row_number: int, target: date, report: PreArrivalReport):
        if record.source.strip().lower() != "website":
            return
        if record.status.strip().lower() == CANCELLED_STATUS:
            return
        if not record.email.strip():
            return

        check_in = parse_check_in(record.check_in)
        if check_in is None or check_in != target:
            return

        if record.reminder_sent():
            report.skipped.append(f"{record.booking_id} (already sent)")
            return

        outcome = self.email.send_pre_arrival_email(PreArrivalEmailData(
            booking_id=record.booking_id,
            first_name=record.first_name or "Guest",
            email=record.email,
            check_in=record.check_in,
            check_out=record.check_out,
            room=record.room or "Your room",
            arrival_time_confirmed=record.arrival_time_is_confirmed(),
            confirmed_time=record.arrival_time_confirmed.strip(),
            property=record.property,
        ))
        if not outcome.get("success"):
            report.errors.append(f"{record.booking_id}: Email failed")
            return

        notes = append_reminder_marker(record.notes, datetime.now(ZoneInfo(self.config.timezone)))
        if not self.sheets.update_cell(self.config.master_guests_sheet, row_number, NOTES_COLUMN, notes):
            logger.error("Reminder sent but notes not updated", extra={"booking_id": record.booking_id})
            report.errors.append(f"{record.booking_id}: Email sent, notes update failed")
            return

        report.sent.append(f"{record.booking_id} → {record.email}")
