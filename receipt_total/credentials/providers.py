import google.auth
from google.auth.credentials import Credentials
from google.oauth2 import service_account

from receipt_total.credentials.base import CLOUD_PLATFORM_SCOPES, BaseCredentialProvider


class ServiceAccountCredentialProvider(BaseCredentialProvider):
    """Loads credentials from an explicit service-account key file (local/dev)."""

    is_production = False

    def __init__(self, key_file: str) -> None:
        self._key_file = key_file
        self._credentials: Credentials | None = None

    def get_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = service_account.Credentials.from_service_account_file(
                self._key_file,
                scopes=CLOUD_PLATFORM_SCOPES,
            )
        return self._credentials


class AmbientCredentialProvider(BaseCredentialProvider):
    """Uses the platform's application default credentials (production)."""

    is_production = True

    def __init__(self) -> None:
        self._credentials: Credentials | None = None

    def get_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials, _project = google.auth.default(scopes=CLOUD_PLATFORM_SCOPES)
        return self._credentials
