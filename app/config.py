import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application configuration from environment variables"""

    # App
    app_name: str = "Riad di Siena Bookings"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Operations spreadsheet (several env names are in use across deployments)
    ops_spreadsheet_id: str = (
        os.getenv("OPS_SPREADSHEET_ID")
        or os.getenv("GOOGLE_SHEETS_ID")
        or os.getenv("GOOGLE_SPREADSHEET_ID", "")
    )
    master_guests_sheet: str = "Master_Guests"

    # Google service account, in one of three shapes
    google_service_account_base64: str = os.getenv("GOOGLE_SERVICE_ACCOUNT_BASE64", "")
    google_client_email: str = (
        os.getenv("GOOGLE_CLIENT_EMAIL")
        or os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", "")
    )
    google_private_key: str = os.getenv("GOOGLE_PRIVATE_KEY", "")
    google_private_key_base64: str = os.getenv("GOOGLE_PRIVATE_KEY_BASE64", "")

    # Resend
    resend_api_key: str = os.getenv("RESEND_API_KEY", "")
    resend_api_url: str = "https://api.resend.com"
    email_from: str = "Riad di Siena <operations@riaddisiena.com>"
    owner_email: str = os.getenv("OWNER_EMAIL", "happy@riaddisiena.com")
    arrival_form_url: str = "https://ops.riaddisiena.com/arrival"
    admin_bookings_url: str = "https://riaddisiena.com/admin/bookings"
    ops_dashboard_url: str = "ops.riaddisiena.com"

    # Bookings
    default_property: str = "Riad di Siena"
    booking_id_prefix: str = "RDS"

    # Pre-arrival reminders
    cron_secret: str = os.getenv("CRON_SECRET", "")
    pre_arrival_days_ahead: int = 5
    timezone: str = os.getenv("TIMEZONE", "Africa/Casablanca")
    scheduler_enabled: bool = os.getenv("SCHEDULER_ENABLED", "False").lower() == "true"
    scheduler_hour: int = int(os.getenv("SCHEDULER_HOUR", "9"))

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
