"""
Unit tests for booking and property models
"""
from datetime import datetime
import pytest
from app.models import (
    MASTER_GUESTS_COLUMNS,
    BookingRecord,
    Column,
    PropertyCategory,
    append_reminder_marker,
    get_property_content,
    has_reminder_marker,
)


class TestBookingRecord:
    """Test Master_Guests row mapping"""

    def test_schema_has_29_columns(self):
        assert len(MASTER_GUESTS_COLUMNS) == 29
        assert Column.NOTES == 26
        assert Column.UPDATED_AT == 28

    def test_row_positions(self):
        row = BookingRecord(booking_id="RDS-1", email="a@x.com", notes="PayPal: PO1").to_row()

        assert row[Column.BOOKING_ID] == "RDS-1"
        assert row[Column.SOURCE] == "Website"
        assert row[Column.STATUS] == "confirmed"
        assert row[Column.EMAIL] == "a@x.com"
        assert row[Column.NOTES] == "PayPal: PO1"

    def test_from_short_row(self):
        record = BookingRecord.from_row(["RDS-9", "Airbnb", "confirmed"])

        assert record.booking_id == "RDS-9"
        assert record.source == "Airbnb"
        assert record.email == ""
        assert record.notes == ""

    def test_arrival_time_confirmed(self):
        assert BookingRecord(booking_id="a", arrival_confirmed="CONFIRMED").arrival_time_is_confirmed()
        assert BookingRecord(booking_id="b", arrival_time_confirmed="15:00").arrival_time_is_confirmed()
        assert not BookingRecord(booking_id="c", arrival_confirmed="pending").arrival_time_is_confirmed()


class TestReminderMarker:
    """Test reminder marker helpers"""

    def test_append_to_empty_notes(self):
        notes = append_reminder_marker("", datetime(2025, 6, 5, 9, 0))

        assert notes == "pre-arrival-sent: 2025-06-05T09:00:00"
        assert has_reminder_marker(notes)

    def test_append_keeps_existing_notes(self):
        notes = append_reminder_marker("PayPal: PO1", datetime(2025, 6, 5, 9, 0))

        assert notes == "PayPal: PO1 | pre-arrival-sent: 2025-06-05T09:00:00"

    def test_marker_match_is_case_insensitive(self):
        assert has_reminder_marker("manual: PRE-ARRIVAL-SENT by Zahra")
        assert not has_reminder_marker("PayPal: PO1")
        assert not has_reminder_marker("")


class TestPropertyCategory:
    """Test property classification"""

    @pytest.mark.parametrize(
        "name, category",
        [
            ("Riad di Siena", PropertyCategory.RIAD),
            ("Douaria", PropertyCategory.RIAD),
            ("", PropertyCategory.RIAD),
            ("The Kasbah", PropertyCategory.KASBAH),
            ("Sahara Desert Camp", PropertyCategory.DESERT_CAMP),
            ("Luxury camp", PropertyCategory.DESERT_CAMP),
        ],
    )
    def test_classify(self, name, category):
        assert PropertyCategory.classify(name) == category

    def test_content_lookup(self):
        content = get_property_content("kasbah draa")

        assert content.name == "The Kasbah"
        assert content.check_in_time == "3:00 PM"
