from unittest.mock import MagicMock, patch

import pytest

from receipt_total.config.settings import Settings
from receipt_total.credentials.base import CLOUD_PLATFORM_SCOPES
from receipt_total.credentials.factory import CredentialProviderFactory
from receipt_total.credentials.providers import (
    AmbientCredentialProvider,
    ServiceAccountCredentialProvider,
)


class TestCredentialProviderFactory:
    def test_creates_service_account_provider(self) -> None:
        settings = Settings(credentials_mode="service_account", credentials_key_file="key.json")
        provider = CredentialProviderFactory.create(settings)
        assert isinstance(provider, ServiceAccountCredentialProvider)
        assert provider.is_production is False

    def test_creates_ambient_provider(self) -> None:
        settings = Settings(credentials_mode="ambient")
        provider = CredentialProviderFactory.create(settings)
        assert isinstance(provider, AmbientCredentialProvider)
        assert provider.is_production is True

    def test_raises_for_unknown_mode(self) -> None:
        settings = Settings()
        settings.credentials_mode = "anonymous"  # type: ignore[assignment]
        with pytest.raises(ValueError, match="Unknown credentials mode"):
            CredentialProviderFactory.create(settings)


class TestServiceAccountCredentialProvider:
    def test_loads_key_file_once(self) -> None:
        credentials = MagicMock()
        with patch(
            "receipt_total.credentials.providers.service_account.Credentials.from_service_account_file",
            return_value=credentials,
        ) as loader:
            provider = ServiceAccountCredentialProvider("key.json")
            assert provider.get_credentials() is credentials
            assert provider.get_credentials() is credentials

        loader.assert_called_once_with("key.json", scopes=CLOUD_PLATFORM_SCOPES)


class TestAmbientCredentialProvider:
    def test_uses_application_default_credentials_once(self) -> None:
        credentials = MagicMock()
        with patch(
            "receipt_total.credentials.providers.google.auth.default",
            return_value=(credentials, "gestion-20"),
        ) as default:
            provider = AmbientCredentialProvider()
            assert provider.get_credentials() is credentials
            assert provider.get_credentials() is credentials

        default.assert_called_once_with(scopes=CLOUD_PLATFORM_SCOPES)
