"""
Pytest configuration and fixtures
"""
import pytest
from app.config import Settings
from app.models.booking import MASTER_GUESTS_COLUMNS, BookingRecord


def column_index(letters: str) -> int:
    """A1 column letters to zero-based index"""
    index = 0
    for char in letters:
        index = index * 26 + (ord(char) - 64)
    return index - 1


class InMemorySheets:
    """Stand-in for GoogleSheetsService backed by a list of data rows"""

    def __init__(self, rows=None, fail_append=False, fail_update=False):
        self.rows = [list(row) for row in (rows or [])]
        self.fail_append = fail_append
        self.fail_update = fail_update
        self.appended = []
        self.updates = []

    def read_rows(self, range_name):
        return [list(row) for row in self.rows]

    def append_row(self, range_name, row):
        if self.fail_append:
            return False
        self.appended.append((range_name, list(row)))
        self.rows.append(list(row))
        return True

    def update_cell(self, sheet_name, row_number, column, value):
        if self.fail_update:
            return False
        self.updates.append((sheet_name, row_number, column, value))
        row = self.rows[row_number - 2]
        index = column_index(column)
        row.extend([""] * (index + 1 - len(row)))
        row[index] = value
        return True


class RecordingEmail:
    """Stand-in for EmailService that records every send"""

    def __init__(self, fail=False):
        self.fail = fail
        self.booking_emails = []
        self.pre_arrival = []

    def _outcome(self):
        if self.fail:
            return {"success": False, "error": "send failed"}
        return {"success": True, "result": {"id": "email_123"}}

    def send_booking_emails(self, data):
        self.booking_emails.append(data)
        return {"guest": self._outcome(), "owner": self._outcome()}

    def send_pre_arrival_email(self, data):
        self.pre_arrival.append(data)
        return self._outcome()


@pytest.fixture
def test_settings():
    """Settings with fixed values, independent of the environment"""
    return Settings(
        ops_spreadsheet_id="sheet-123",
        google_service_account_base64="",
        google_client_email="",
        google_private_key="",
        google_private_key_base64="",
        resend_api_key="re_test",
        owner_email="owner@riad.test",
        cron_secret="s3cret",
        timezone="Africa/Casablanca",
        pre_arrival_days_ahead=5,
    )


@pytest.fixture
def sheets():
    return InMemorySheets()


@pytest.fixture
def email():
    return RecordingEmail()


def build_row(**fields) -> list:
    """Build a Master_Guests row for a website booking"""
    values = {
        "booking_id": "RDS-1",
        "source": "Website",
        "status": "confirmed",
        "first_name": "Amal",
        "last_name": "Idrissi",
        "email": "a@x.com",
        "property": "Riad di Siena",
        "room": "Jasmine Room",
        "check_in": "2025-06-10",
        "check_out": "2025-06-13",
        "arrival_confirmed": "pending",
    }
    values.update(fields)
    row = BookingRecord(**values).to_row()
    assert len(row) == len(MASTER_GUESTS_COLUMNS)
    return row


@pytest.fixture
def make_row():
    return build_row


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
