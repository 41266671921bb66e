from typing import ClassVar

from resume_doctor.config.settings import Settings
from resume_doctor.generation.client_base import BaseStreamingClient
from resume_doctor.generation.example_client_adapter import ExampleStreamingClient
from resume_doctor.generation.models import GenerationParams
from resume_doctor.generation.openai_client_adapter import OpenAIStreamingClient


class StreamingClientFactory:
    """Creates the configured streaming client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseStreamingClient:
        """Create a streaming client from application settings."""
        provider = settings.generation_provider.lower()
        if provider == "example":
            return ExampleStreamingClient()
        return OpenAIStreamingClient(
            timeout_seconds=settings.generation_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def params(cls, settings: Settings) -> GenerationParams:
        return GenerationParams(
            model=settings.generation_model_name,
            temperature=settings.generation_temperature,
            max_output_tokens=settings.generation_max_output_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.generation_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "generation_openai_compatible_base_url is required for "
                    "generation_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown generation provider '{provider}'. Choose from: {supported}"
        )
