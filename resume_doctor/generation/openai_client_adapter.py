from collections.abc import Iterable, Iterator
from typing import Any

import httpx
import openai

from resume_doctor.generation.client_base import BaseStreamingClient
from resume_doctor.generation.exceptions import (
    CredentialError,
    GenerationError,
    GenerationNetworkError,
    QuotaError,
    RateLimitError,
)
from resume_doctor.generation.models import (
    FinishReason,
    GenerationParams,
    StreamChunk,
    TokenUsage,
)

_QUOTA_MARKERS = ("insufficient_quota", "exceeded your current quota", "billing")


class OpenAIStreamingClient(BaseStreamingClient):
    """Streaming client built on the OpenAI-compatible chat completions API.

    Works against OpenAI itself and any provider exposing the same API,
    including Gemini's OpenAI-compatible endpoint.
    """

    def __init__(
        self,
        *,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url

    def stream(
        self,
        *,
        system_text: str,
        user_text: str,
        credential: str,
        params: GenerationParams,
    ) -> Iterator[StreamChunk]:
        try:
            with openai.OpenAI(
                api_key=credential,
                timeout=self._timeout_seconds,
                base_url=self._base_url,
                max_retries=0,
            ) as client:
                response = client.chat.completions.create(
                    model=params.model,
                    temperature=params.temperature,
                    max_tokens=params.max_output_tokens,
                    stream=True,
                    stream_options={"include_usage": True},
                    messages=[
                        {"role": "system", "content": system_text},
                        {"role": "user", "content": user_text},
                    ],
                )
                try:
                    yield from self._translate(response)
                finally:
                    response.close()
        except GenerationError:
            raise
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise CredentialError(f"AI provider rejected the API key: {exc}") from exc
        except openai.RateLimitError as exc:
            if _is_quota_exhausted(exc):
                raise QuotaError(f"AI provider quota exhausted: {exc}") from exc
            raise RateLimitError(f"AI provider rate limit hit: {exc}") from exc
        except openai.BadRequestError as exc:
            if "api key" in str(exc).lower():
                raise CredentialError(f"AI provider rejected the API key: {exc}") from exc
            raise GenerationError(f"AI provider API error: {exc}") from exc
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationError(f"AI provider API error: {exc}") from exc

    @staticmethod
    def _translate(response: Iterable[Any]) -> Iterator[StreamChunk]:
        finish_reason: str | None = None
        usage = TokenUsage()
        for event in response:
            if getattr(event, "usage", None) is not None:
                usage = TokenUsage(
                    prompt_tokens=event.usage.prompt_tokens or 0,
                    completion_tokens=event.usage.completion_tokens or 0,
                    total_tokens=event.usage.total_tokens or 0,
                )
            for choice in event.choices or []:
                text = getattr(choice.delta, "content", None) if choice.delta else None
                if text:
                    yield StreamChunk(text=text)
                if choice.finish_reason:
                    finish_reason = choice.finish_reason
        yield StreamChunk(
            text="",
            is_complete=True,
            finish_reason=FinishReason.from_provider(finish_reason),
            usage=usage,
        )


def _is_quota_exhausted(exc: openai.RateLimitError) -> bool:
    if getattr(exc, "code", None) == "insufficient_quota":
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _QUOTA_MARKERS)
