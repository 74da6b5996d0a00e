from app.models.booking import (
    MASTER_GUESTS_COLUMNS,
    BookingNotification,
    BookingRecord,
    Column,
    append_reminder_marker,
    has_reminder_marker,
)
from app.models.property import PropertyCategory, PropertyContent, get_property_content

__all__ = [
    "MASTER_GUESTS_COLUMNS",
    "BookingNotification",
    "BookingRecord",
    "Column",
    "append_reminder_marker",
    "has_reminder_marker",
    "PropertyCategory",
    "PropertyContent",
    "get_property_content",
]
