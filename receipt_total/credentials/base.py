from abc import ABC, abstractmethod

from google.auth.credentials import Credentials

CLOUD_PLATFORM_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class BaseCredentialProvider(ABC):
    """Contract for sources of Google Cloud credentials."""

    is_production: bool = False

    @abstractmethod
    def get_credentials(self) -> Credentials:
        """Return credentials usable by the Firestore, Storage and Vertex clients.

        Raises:
            google.auth.exceptions.DefaultCredentialsError: if none can be loaded.
        """
