"""
Unit tests for services
"""
import base64
import json
from unittest.mock import MagicMock
import httpx
import pytest
from app.services.credentials import TOKEN_URI, resolve_service_account_info
from app.services.email_service import BookingEmailData, EmailService, PreArrivalEmailData
from app.services.email_templates import format_amount, format_date
from app.services.exceptions import CredentialsError
from app.services.google_sheets import GoogleSheetsService, column_letter


def booking_email_data(**overrides):
    values = dict(
        booking_id="RDS-1749500000000",
        first_name="Amal",
        last_name="Idrissi",
        email="a@x.com",
        property="Riad di Siena",
        room="Jasmine Room",
        check_in="2025-06-10",
        check_out="2025-06-13",
        nights=3,
        guests=2,
        total=450,
        paypal_order_id="PO123",
    )
    values.update(overrides)
    return BookingEmailData(**values)


def pre_arrival_data(**overrides):
    values = dict(
        booking_id="RDS-1",
        first_name="Amal",
        email="a@x.com",
        check_in="2025-06-10",
        check_out="2025-06-13",
        room="Jasmine Room",
        arrival_time_confirmed=False,
        property="Riad di Siena",
    )
    values.update(overrides)
    return PreArrivalEmailData(**values)


class FakeResend:
    """httpx transport recording requests to the Resend API"""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append((request, payload))
        if set(payload["to"]) & self.fail_for:
            return httpx.Response(422, json={"message": "Invalid recipient"})
        return httpx.Response(200, json={"id": f"email_{len(self.requests)}"})


def email_service(test_settings, transport):
    client = httpx.Client(
        base_url=test_settings.resend_api_url,
        transport=httpx.MockTransport(transport),
    )
    return EmailService(test_settings, client=client)


class TestCredentials:
    """Test service account resolution"""

    def test_full_base64_blob_takes_precedence(self, test_settings):
        blob = {"client_email": "svc@proj.iam.gserviceaccount.com", "private_key": "KEY-A"}
        test_settings.google_service_account_base64 = base64.b64encode(
            json.dumps(blob).encode()
        ).decode()
        test_settings.google_client_email = "other@proj.iam.gserviceaccount.com"
        test_settings.google_private_key = "KEY-B"

        info = resolve_service_account_info(test_settings)

        assert info["client_email"] == "svc@proj.iam.gserviceaccount.com"
        assert info["private_key"] == "KEY-A"
        assert info["token_uri"] == TOKEN_URI

    def test_raw_key_unescapes_newlines(self, test_settings):
        test_settings.google_client_email = "svc@proj.iam.gserviceaccount.com"
        test_settings.google_private_key = "-----BEGIN-----\\nabc\\n-----END-----"

        info = resolve_service_account_info(test_settings)

        assert info["private_key"] == "-----BEGIN-----\nabc\n-----END-----"

    def test_base64_key_used_when_raw_key_missing(self, test_settings):
        test_settings.google_client_email = "svc@proj.iam.gserviceaccount.com"
        test_settings.google_private_key_base64 = base64.b64encode(b"KEY-C").decode()

        info = resolve_service_account_info(test_settings)

        assert info["private_key"] == "KEY-C"

    def test_missing_credentials_raise(self, test_settings):
        with pytest.raises(CredentialsError):
            resolve_service_account_info(test_settings)

    def test_invalid_blob_raises(self, test_settings):
        test_settings.google_service_account_base64 = base64.b64encode(b"not json").decode()

        with pytest.raises(CredentialsError):
            resolve_service_account_info(test_settings)


class TestSheetHelpers:
    """Test A1 helpers"""

    def test_column_letter(self):
        assert column_letter(0) == "A"
        assert column_letter(25) == "Z"
        assert column_letter(26) == "AA"
        assert column_letter(28) == "AC"

class TestGoogleSheetsService:
    """Test Google Sheets service against a mocked API resource"""

    def test_read_rows(self, test_settings):
        api = MagicMock()
        api.spreadsheets().values().get().execute.return_value = {"values": [["RDS-1", "Website"]]}
        service = GoogleSheetsService(test_settings, service=api)

        rows = service.read_rows("Master_Guests!A2:AC")

        assert rows == [["RDS-1", "Website"]]
        api.spreadsheets().values().get.assert_called_with(
            spreadsheetId="sheet-123", range="Master_Guests!A2:AC"
        )

    def test_read_rows_fails_soft(self, test_settings):
        api = MagicMock()
        api.spreadsheets().values().get().execute.side_effect = RuntimeError("403 Forbidden")
        service = GoogleSheetsService(test_settings, service=api)

        assert service.read_rows("Master_Guests!A2:AC") == []

    def test_read_rows_without_spreadsheet_id(self, test_settings):
        test_settings.ops_spreadsheet_id = ""
        api = MagicMock()
        service = GoogleSheetsService(test_settings, service=api)

        assert service.read_rows("Master_Guests!A2:AC") == []
        api.spreadsheets.assert_not_called()

    def test_client_without_credentials_is_disabled(self, test_settings):
        service = GoogleSheetsService(test_settings)

        assert service.service is None
        assert service.read_rows("Master_Guests!A2:AC") == []
        assert service.append_row("Master_Guests!A:A", ["RDS-1"]) is False
        assert service.update_cell("Master_Guests", 2, "AA", "x") is False

    def test_append_row(self, test_settings):
        api = MagicMock()
        service = GoogleSheetsService(test_settings, service=api)

        assert service.append_row("Master_Guests!A:A", ["RDS-1", "Website"]) is True
        api.spreadsheets().values().append.assert_called_with(
            spreadsheetId="sheet-123",
            range="Master_Guests!A:A",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [["RDS-1", "Website"]]},
        )

    def test_append_row_failure_returns_false(self, test_settings):
        api = MagicMock()
        api.spreadsheets().values().append().execute.side_effect = RuntimeError("quota")
        service = GoogleSheetsService(test_settings, service=api)

        assert service.append_row("Master_Guests!A:A", ["RDS-1"]) is False

    def test_update_cell(self, test_settings):
        api = MagicMock()
        service = GoogleSheetsService(test_settings, service=api)

        assert service.update_cell("Master_Guests", 7, "AA", "pre-arrival-sent: now") is True
        api.spreadsheets().values().update.assert_called_with(
            spreadsheetId="sheet-123",
            range="Master_Guests!AA7",
            valueInputOption="RAW",
            body={"values": [["pre-arrival-sent: now"]]},
        )


class TestEmailTemplates:
    """Test template formatting helpers"""

    def test_format_date(self):
        assert format_date("2025-06-10") == "Tuesday, June 10, 2025"

    def test_format_date_passthrough(self):
        assert format_date("next week") == "next week"

    def test_format_amount(self):
        assert format_amount(450) == "450"
        assert format_amount(1250.0) == "1,250"
        assert format_amount(99.5) == "99.50"


class TestEmailService:
    """Test Resend email service"""

    def test_guest_confirmation(self, test_settings):
        resend = FakeResend()
        service = email_service(test_settings, resend)

        result = service.send_guest_confirmation(booking_email_data())

        assert result["success"] is True
        request, payload = resend.requests[0]
        assert request.headers["Authorization"] == "Bearer re_test"
        assert payload["to"] == ["a@x.com"]
        assert payload["bcc"] == ["owner@riad.test"]
        assert payload["subject"] == "Your reservation at Riad di Siena"
        assert "arrival?id=RDS-1749500000000" in payload["html"]
        assert "Derb Fhal Zefriti" in payload["html"]

    def test_guest_confirmation_uses_property_content(self, test_settings):
        resend = FakeResend()
        service = email_service(test_settings, resend)

        service.send_guest_confirmation(booking_email_data(property="Desert Camp Merzouga", room=None, tent="Luxury Tent"))

        _, payload = resend.requests[0]
        assert payload["subject"] == "Your reservation at The Desert Camp"
        assert "Erg Chebbi" in payload["html"]
        assert "4:00 PM" in payload["html"]
        assert ">Tent<" in payload["html"]

    def test_owner_notification(self, test_settings):
        resend = FakeResend()
        service = email_service(test_settings, resend)

        result = service.send_owner_notification(booking_email_data(message="<b>late</b> arrival"))

        assert result["success"] is True
        _, payload = resend.requests[0]
        assert payload["to"] == ["owner@riad.test"]
        assert "bcc" not in payload
        assert payload["subject"] == "New Booking: Amal Idrissi - €450 - Jasmine Room"
        assert "PO123" in payload["html"]
        assert "&lt;b&gt;late&lt;/b&gt;" in payload["html"]

    def test_send_failure_returns_error(self, test_settings):
        service = email_service(test_settings, FakeResend(fail_for={"a@x.com"}))

        result = service.send_guest_confirmation(booking_email_data())

        assert result["success"] is False
        assert "422" in result["error"]

    def test_missing_api_key_does_not_send(self, test_settings):
        test_settings.resend_api_key = ""
        resend = FakeResend()
        service = email_service(test_settings, resend)

        result = service.send_guest_confirmation(booking_email_data())

        assert result["success"] is False
        assert resend.requests == []

    def test_booking_emails_are_independent(self, test_settings):
        resend = FakeResend(fail_for={"a@x.com"})
        service = email_service(test_settings, resend)

        results = service.send_booking_emails(booking_email_data())

        assert results["guest"]["success"] is False
        assert results["owner"]["success"] is True
        assert len(resend.requests) == 2

    def test_pre_arrival_asks_for_arrival_time(self, test_settings):
        resend = FakeResend()
        service = email_service(test_settings, resend)

        result = service.send_pre_arrival_email(pre_arrival_data())

        assert result["success"] is True
        _, payload = resend.requests[0]
        assert payload["subject"] == "Action needed: Confirm your arrival time"
        assert "arrival?id=RDS-1" in payload["html"]

    def test_pre_arrival_with_confirmed_time(self, test_settings):
        resend = FakeResend()
        service = email_service(test_settings, resend)

        service.send_pre_arrival_email(
            pre_arrival_data(arrival_time_confirmed=True, confirmed_time="14:30")
        )

        _, payload = resend.requests[0]
        assert payload["subject"] == "Preparing for your arrival on Tuesday, June 10, 2025"
        assert "14:30" in payload["html"]
        assert "Confirm Arrival Time" not in payload["html"]
