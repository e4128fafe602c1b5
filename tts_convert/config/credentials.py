"""Google Cloud credentials resolution."""

import json

from google.oauth2 import service_account

from tts_convert.config.settings import GoogleCloudSettings


def load_credentials(settings: GoogleCloudSettings) -> service_account.Credentials | None:
    """
    Build service account credentials from settings.

    An inline JSON key (GOOGLE_SERVICE_ACCOUNT) wins over a key file. Returns None
    when neither is configured so clients fall back to Application Default
    Credentials.
    """
    if settings.credentials_json:
        info = json.loads(settings.credentials_json)
        return service_account.Credentials.from_service_account_info(info)
    if settings.credentials_file:
        return service_account.Credentials.from_service_account_file(settings.credentials_file)
    return None


def resolve_project_id(
    settings: GoogleCloudSettings,
    credentials: service_account.Credentials | None,
) -> str | None:
    """Explicit project id, else the one embedded in the service account key."""
    if settings.project_id:
        return settings.project_id
    if credentials is not None:
        return credentials.project_id
    return None
