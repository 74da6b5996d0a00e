"""
Google service account resolution
Collapses the supported credential env shapes into one service account info dict
"""
import base64
import binascii
import json
import logging
from google.oauth2.service_account import Credentials
from app.services.exceptions import CredentialsError

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def _b64decode(value: str) -> str:
    try:
        return base64.b64decode(value).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise CredentialsError(f"Invalid base64 credential value: {str(e)}")


def resolve_service_account_info(config) -> dict:
    """
    Resolve service account info from configuration.

    Precedence:
        1. Full service account JSON, base64 encoded
        2. Client email + raw private key (escaped newlines allowed)
        3. Client email + base64 encoded private key

    Args:
        config: Settings-like object

    Returns:
        dict usable with Credentials.from_service_account_info

    Raises:
        CredentialsError: if no credential shape resolves
    """
    if config.google_service_account_base64:
        try:
            account = json.loads(_b64decode(config.google_service_account_base64))
        except json.JSONDecodeError as e:
            raise CredentialsError(f"GOOGLE_SERVICE_ACCOUNT_BASE64 is not valid JSON: {str(e)}")

        if not account.get("client_email") or not account.get("private_key"):
            raise CredentialsError("Service account JSON is missing client_email or private_key")

        return {
            "type": "service_account",
            "client_email": account["client_email"],
            "private_key": account["private_key"],
            "token_uri": account.get("token_uri") or TOKEN_URI,
        }

    client_email = config.google_client_email
    private_key = config.google_private_key
    if not private_key and config.google_private_key_base64:
        private_key = _b64decode(config.google_private_key_base64)

    if not client_email or not private_key:
        raise CredentialsError(
            "No Google credentials configured. Set GOOGLE_SERVICE_ACCOUNT_BASE64, "
            "or GOOGLE_CLIENT_EMAIL with GOOGLE_PRIVATE_KEY or GOOGLE_PRIVATE_KEY_BASE64"
        )

    return {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": TOKEN_URI,
    }


def build_credentials(config) -> Credentials:
    """Build scoped Sheets credentials from configuration"""
    info = resolve_service_account_info(config)
    try:
        return Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
    except ValueError as e:
        raise CredentialsError(f"Failed to load service account key: {str(e)}")
