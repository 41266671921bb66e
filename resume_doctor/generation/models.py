from dataclasses import dataclass
from enum import Enum


class FinishReason(str, Enum):
    """Why the backend ended a generation stream."""

    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    OTHER = "OTHER"

    @classmethod
    def from_provider(cls, raw: str | None) -> "FinishReason":
        """Map a provider-specific finish reason onto the shared vocabulary."""
        if not raw:
            return cls.OTHER
        return _PROVIDER_FINISH_REASONS.get(raw.strip().lower(), cls.OTHER)


_PROVIDER_FINISH_REASONS: dict[str, FinishReason] = {
    "stop": FinishReason.STOP,
    "end_turn": FinishReason.STOP,
    "length": FinishReason.MAX_TOKENS,
    "max_tokens": FinishReason.MAX_TOKENS,
    "content_filter": FinishReason.SAFETY,
    "safety": FinishReason.SAFETY,
    "blocklist": FinishReason.SAFETY,
    "prohibited_content": FinishReason.SAFETY,
    "spii": FinishReason.SAFETY,
    "recitation": FinishReason.RECITATION,
}


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class StreamChunk:
    """One increment of a generation stream.

    The last chunk of a stream has ``is_complete=True`` and carries the
    finish reason and token usage; its text is usually empty.
    """

    text: str
    is_complete: bool = False
    finish_reason: FinishReason | None = None
    usage: TokenUsage | None = None


@dataclass(frozen=True)
class GenerationParams:
    model: str
    temperature: float = 0.7
    max_output_tokens: int = 8192
