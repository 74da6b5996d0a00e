"""
Google Sheets API Service
Row-level access to the operations spreadsheet
"""
import logging
from googleapiclient.discovery import build
from app.config import settings
from app.services.credentials import build_credentials
from app.services.exceptions import CredentialsError

logger = logging.getLogger(__name__)


def column_letter(index: int) -> str:
    """Convert a zero-based column index to A1 letters (0 -> A, 26 -> AA)"""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


class GoogleSheetsService:
    """Service to interact with the Google Sheets API"""

    def __init__(self, config=None, service=None):
        self.config = config or settings
        self.spreadsheet_id = self.config.ops_spreadsheet_id
        self.credentials = None
        self.service = service
        if self.service is None:
            self._init_service()

    def _init_service(self):
        """Initialize Google Sheets API service"""
        try:
            self.credentials = build_credentials(self.config)
            self.service = build(
                "sheets", "v4", credentials=self.credentials, cache_discovery=False
            )
        except CredentialsError as e:
            logger.error("Sheets client disabled", extra={"reason": str(e)})
        except Exception as e:
            logger.error("Failed to initialize Google Sheets service", extra={"reason": str(e)})

    @property
    def available(self) -> bool:
        return self.service is not None and bool(self.spreadsheet_id)

    def _values(self):
        return self.service.spreadsheets().values()

    def read_rows(self, range_name: str) -> list:
        """
        Read all rows in a range.

        Args:
            range_name: A1 range, e.g. 'Master_Guests!A2:AC'

        Returns:
            List of rows (lists of cell strings). Empty when the range is empty
            or the spreadsheet is unreachable.
        """
        if not self.spreadsheet_id:
            logger.error(
                "Spreadsheet ID not configured. Set OPS_SPREADSHEET_ID or GOOGLE_SHEETS_ID",
                extra={"range": range_name},
            )
            return []
        if self.service is None:
            logger.error("Sheets client unavailable, returning no rows", extra={"range": range_name})
            return []

        try:
            response = self._values().get(
                spreadsheetId=self.spreadsheet_id,
                range=range_name,
            ).execute()
            rows = response.get("values", [])
            logger.info(f"Fetched {len(rows)} rows", extra={"range": range_name})
            return rows
        except Exception as e:
            logger.error(f"Error fetching rows: {str(e)}", extra={"range": range_name})
            return []

    def append_row(self, range_name: str, row: list) -> bool:
        """
        Append one row after the last populated row of a range.

        Returns:
            True on success, False on any failure
        """
        if not self.available:
            logger.error("Sheets client unavailable, row not appended", extra={"range": range_name})
            return False

        try:
            self._values().append(
                spreadsheetId=self.spreadsheet_id,
                range=range_name,
                valueInputOption="USER_ENTERED",
                insertDataOption="INSERT_ROWS",
                body={"values": [row]},
            ).execute()
            return True
        except Exception as e:
            logger.error(f"Error appending row: {str(e)}", extra={"range": range_name})
            return False

    def update_cell(self, sheet_name: str, row_number: int, column: str, value: str) -> bool:
        """
        Overwrite a single cell.

        Args:
            sheet_name: Tab name, e.g. 'Master_Guests'
            row_number: 1-based sheet row number
            column: Column letters, e.g. 'AA'
            value: New cell value

        Returns:
            True on success, False on any failure
        """
        cell = f"{sheet_name}!{column}{row_number}"
        if not self.available:
            logger.error("Sheets client unavailable, cell not updated", extra={"range": cell})
            return False

        try:
            self._values().update(
                spreadsheetId=self.spreadsheet_id,
                range=cell,
                valueInputOption="RAW",
                body={"values": [[value]]},
            ).execute()
            return True
        except Exception as e:
            logger.error(f"Error updating cell: {str(e)}", extra={"range": cell})
            return False


# Global instance
_sheets_service = None


def get_sheets_service() -> GoogleSheetsService:
    """Get or create Sheets service instance"""
    global _sheets_service
    if _sheets_service is None:
        _sheets_service = GoogleSheetsService()
    return _sheets_service
