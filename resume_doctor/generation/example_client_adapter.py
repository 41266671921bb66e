"""Example streaming client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseStreamingClient and register the provider in StreamingClientFactory.
"""

from collections.abc import Iterator
from typing import ClassVar

from resume_doctor.generation.client_base import BaseStreamingClient
from resume_doctor.generation.models import (
    FinishReason,
    GenerationParams,
    StreamChunk,
    TokenUsage,
)


class ExampleStreamingClient(BaseStreamingClient):
    """Replays a fixed list of chunks. No network calls.

    Useful for local development, tests, and as a template for real
    provider adapters.
    """

    DEFAULT_CHUNKS: ClassVar[list[str]] = [
        "## Overall impression\n",
        "The resume is clear and well organized.",
        "\n\n## Top fixes\n",
        "- Quantify the impact of each role.",
    ]

    def __init__(
        self,
        chunks: list[str] | None = None,
        finish_reason: FinishReason = FinishReason.STOP,
    ) -> None:
        self._chunks = list(self.DEFAULT_CHUNKS if chunks is None else chunks)
        self._finish_reason = finish_reason

    def stream(
        self,
        *,
        system_text: str,
        user_text: str,
        credential: str,
        params: GenerationParams,
    ) -> Iterator[StreamChunk]:
        _ = credential, params
        for text in self._chunks:
            yield StreamChunk(text=text)
        prompt_tokens = len(system_text.split()) + len(user_text.split())
        completion_tokens = sum(len(text.split()) for text in self._chunks)
        yield StreamChunk(
            text="",
            is_complete=True,
            finish_reason=self._finish_reason,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )
