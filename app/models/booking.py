"""
Booking records as stored in the Master_Guests tab of the operations spreadsheet
"""
from datetime import datetime
from enum import IntEnum
import math
from typing import Annotated, Optional, Union
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# Fixed, externally provisioned schema (29 columns)
MASTER_GUESTS_COLUMNS = (
    "booking_id",
    "source",
    "status",
    "first_name",
    "last_name",
    "email",
    "phone",
    "country",
    "language",
    "property",
    "room",
    "check_in",
    "check_out",
    "nights",
    "guests",
    "adults",
    "children",
    "total_eur",
    "city_tax",
    "special_requests",
    "arrival_time_stated",
    "arrival_request_sent",
    "arrival_confirmed",
    "arrival_time_confirmed",
    "read_messages",
    "midstay_checkin",
    "notes",
    "created_at",
    "updated_at",
)

Column = IntEnum("Column", [name.upper() for name in MASTER_GUESTS_COLUMNS], start=0)

WEBSITE_SOURCE = "Website"
CONFIRMED_STATUS = "confirmed"
CANCELLED_STATUS = "cancelled"
PENDING = "pending"

REMINDER_MARKER = "pre-arrival-sent"


def has_reminder_marker(notes: str) -> bool:
    """True if the pre-arrival reminder was already recorded in the notes"""
    return REMINDER_MARKER in (notes or "").lower()


def append_reminder_marker(notes: str, when: datetime) -> str:
    """Return notes with a timestamped reminder marker appended"""
    marker = f"{REMINDER_MARKER}: {when.isoformat()}"
    return f"{notes} | {marker}" if notes else marker


class BookingRecord(BaseModel):
    """One guest stay, one row in Master_Guests"""

    booking_id: str
    source: str = WEBSITE_SOURCE
    status: str = CONFIRMED_STATUS
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    country: str = ""
    language: str = ""
    property: str = ""
    room: str = ""
    check_in: str = ""
    check_out: str = ""
    nights: str = ""
    guests: str = ""
    adults: str = ""
    children: str = ""
    total_eur: str = ""
    city_tax: str = ""
    special_requests: str = ""
    arrival_time_stated: str = ""
    arrival_request_sent: str = ""
    arrival_confirmed: str = ""
    arrival_time_confirmed: str = ""
    read_messages: str = ""
    midstay_checkin: str = ""
    notes: str = ""
    created_at: str = ""
    updated_at: str = ""

    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def arrival_time_is_confirmed(self) -> bool:
        return (
            self.arrival_confirmed.strip().lower() == "confirmed"
            or bool(self.arrival_time_confirmed.strip())
        )

    def reminder_sent(self) -> bool:
        return has_reminder_marker(self.notes)

    def to_row(self) -> list:
        """Serialize to the 29-cell Master_Guests row"""
        return [getattr(self, name) for name in MASTER_GUESTS_COLUMNS]

    @classmethod
    def from_row(cls, row: list) -> "BookingRecord":
        """Build a record from a sheet row; missing trailing cells are empty"""
        cells = list(row) + [""] * (len(MASTER_GUESTS_COLUMNS) - len(row))
        return cls(**{
            name: str(cells[index] if cells[index] is not None else "")
            for index, name in enumerate(MASTER_GUESTS_COLUMNS)
        })


Number = Union[int, float, str]


def _lenient_float(value) -> Optional[float]:
    """Parse a checkout number, giving None for anything unreadable"""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _lenient_int(value) -> Optional[int]:
    number = _lenient_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


# Unreadable counts and amounts fall back to the intake defaults
LenientInt = Annotated[Optional[int], BeforeValidator(_lenient_int)]
LenientFloat = Annotated[Optional[float], BeforeValidator(_lenient_float)]


class BookingNotification(BaseModel):
    """
    Payment-completion notification posted by the website checkout.

    Accepts current field names and the legacy `name` / `roomPreference` fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    # Guest
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None

    # Stay
    check_in: Optional[str] = Field(None, alias="checkIn")
    check_out: Optional[str] = Field(None, alias="checkOut")
    nights: LenientInt = None
    guests: LenientInt = None
    adults: LenientInt = None
    children: LenientInt = None
    total: LenientFloat = None
    city_tax: Optional[Number] = Field(None, alias="cityTax")

    # Accommodation
    property: Optional[str] = None
    room: Optional[str] = None
    room_id: Optional[Number] = Field(None, alias="roomId")
    tent: Optional[str] = None
    tent_id: Optional[Number] = Field(None, alias="tentId")
    tent_level: Optional[Number] = Field(None, alias="tentLevel")
    experience: Optional[str] = None
    experience_id: Optional[Number] = Field(None, alias="experienceId")

    # PayPal
    paypal_order_id: Optional[str] = Field(None, alias="paypalOrderId")
    paypal_status: Optional[str] = Field(None, alias="paypalStatus")

    # Legacy form fields
    name: Optional[str] = None
    room_preference: Optional[str] = Field(None, alias="roomPreference")
