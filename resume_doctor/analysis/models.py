from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

from resume_doctor.generation.models import FinishReason, TokenUsage


class AnalysisState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    AWAITING_BOT_TOKEN = "awaiting_bot_token"
    STREAMING = "streaming"
    COMPLETED = "completed"
    COOLDOWN_ACTIVE = "cooldown_active"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable snapshot of the analysis text received so far."""

    content: str
    timestamp: datetime
    is_streaming: bool

    @classmethod
    def start(cls) -> "AnalysisResult":
        return cls(content="", timestamp=datetime.now(timezone.utc), is_streaming=True)

    def append(self, text: str) -> "AnalysisResult":
        return replace(self, content=self.content + text)

    def finalize(self, notice: str = "") -> "AnalysisResult":
        return replace(self, content=self.content + notice, is_streaming=False)


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    PARSE = "parse"
    REJECTED = "rejected"
    CONFIGURATION = "configuration"
    BOT_VERIFICATION = "bot_verification"
    CREDENTIAL = "credential"
    QUOTA = "quota"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    CONTENT_POLICY = "content_policy"
    GENERATION = "generation"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class AnalysisFailure:
    """The single user-presentable error produced by a failed submission."""

    category: ErrorCategory
    message: str


@dataclass(frozen=True)
class AnalysisOutcome:
    """What one call to submit() produced: a final result or a failure."""

    result: AnalysisResult | None = None
    failure: AnalysisFailure | None = None
    finish_reason: FinishReason | None = None
    usage: TokenUsage | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None and self.result is not None

    @property
    def truncated(self) -> bool:
        return self.finish_reason is FinishReason.MAX_TOKENS
