from receipt_total.config.settings import Settings
from receipt_total.credentials.base import BaseCredentialProvider
from receipt_total.credentials.providers import (
    AmbientCredentialProvider,
    ServiceAccountCredentialProvider,
)


class CredentialProviderFactory:
    """Creates the credential provider named by ``credentials_mode``."""

    @classmethod
    def create(cls, settings: Settings) -> BaseCredentialProvider:
        mode = settings.credentials_mode.lower()
        if mode == "service_account":
            return ServiceAccountCredentialProvider(settings.credentials_key_file)
        if mode == "ambient":
            return AmbientCredentialProvider()
        raise ValueError(
            f"Unknown credentials mode '{mode}'. Choose from: ['ambient', 'service_account']"
        )
