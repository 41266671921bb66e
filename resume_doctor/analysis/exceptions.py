from resume_doctor.generation.models import FinishReason


class AnalysisError(Exception):
    """Base exception for all orchestrator-level errors."""


class AnalysisValidationError(AnalysisError):
    """Raised when a submission is missing a document, config field, or API key."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


class SubmissionRejectedError(AnalysisError):
    """Raised when a submission is refused without changing any state."""


class SubmissionInProgressError(SubmissionRejectedError):
    """Raised when an analysis is already running in this session."""


class CooldownActiveError(SubmissionRejectedError):
    """Raised when the post-success cooldown has not elapsed yet."""

    def __init__(self, remaining_seconds: int) -> None:
        super().__init__(
            f"Please wait {remaining_seconds} seconds before submitting another analysis."
        )
        self.remaining_seconds = remaining_seconds


class ContentPolicyError(AnalysisError):
    """Raised when the backend blocks the completion for safety or recitation."""

    def __init__(self, finish_reason: FinishReason) -> None:
        super().__init__(f"Generation blocked by content policy ({finish_reason.value})")
        self.finish_reason = finish_reason


class IncompleteGenerationError(AnalysisError):
    """Raised when a stream ends without a usable finish reason."""


class AnalysisCancelledError(AnalysisError):
    """Raised when the user cancels a running analysis."""
