from typing import ClassVar

from resume_review.config.settings import Settings
from resume_review.review.analyzer import StructuredAnalyzer
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.example_client_adapter import ExampleClientAdapter
from resume_review.review.openai_client_adapter import OpenAIClientAdapter


class AnalyzerFactory:
    """Creates the configured structured analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseStructuredAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analyzer_provider.lower()
        if provider == "example":
            return StructuredAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        client = OpenAIClientAdapter(
            api_key=settings.analyzer_api_key,
            timeout_seconds=settings.analyzer_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return StructuredAnalyzer(
            client=client,
            model=settings.analyzer_model_name,
            temperature=settings.analyzer_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.analyzer_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "analyzer_base_url is required for analyzer_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown analyzer provider '{provider}'. Choose from: {supported}"
        )
