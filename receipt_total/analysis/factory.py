from receipt_total.analysis.example_client_adapter import ExampleClientAdapter
from receipt_total.analysis.invoker import AIInvoker
from receipt_total.analysis.openai_client_adapter import OpenAIClientAdapter
from receipt_total.analysis.vertex_client_adapter import VertexClientAdapter
from receipt_total.config.settings import Settings
from receipt_total.credentials.base import BaseCredentialProvider


class VisionClientFactory:
    """Creates the AI invoker for the configured analysis provider."""

    SUPPORTED_PROVIDERS = ("example", "openai", "vertex")

    @classmethod
    def create(
        cls,
        settings: Settings,
        credentials: BaseCredentialProvider | None = None,
    ) -> AIInvoker:
        """Create a configured invoker from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return AIInvoker(
                client=ExampleClientAdapter(),
                model="example",
                timeout_seconds=settings.ai_timeout_seconds,
            )
        if provider == "vertex":
            client = VertexClientAdapter(
                project=settings.gcp_project_id,
                location=settings.gcp_location,
                credentials=credentials.get_credentials() if credentials else None,
            )
            return AIInvoker(
                client=client,
                model=settings.vertex_model_name,
                temperature=settings.ai_temperature,
                timeout_seconds=settings.ai_timeout_seconds,
            )
        if provider == "openai":
            if not settings.openai_api_key:
                raise ValueError("openai_api_key is required for analysis_provider=openai")
            client = OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.ai_timeout_seconds,
                base_url=settings.openai_base_url,
            )
            return AIInvoker(
                client=client,
                model=settings.openai_model_name,
                temperature=settings.ai_temperature,
                timeout_seconds=settings.ai_timeout_seconds,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
