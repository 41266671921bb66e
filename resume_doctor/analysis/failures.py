"""Maps exceptions raised during a submission to user-facing failures."""

from resume_doctor.analysis.exceptions import (
    AnalysisCancelledError,
    AnalysisValidationError,
    ContentPolicyError,
    IncompleteGenerationError,
    SubmissionRejectedError,
)
from resume_doctor.analysis.models import AnalysisFailure, ErrorCategory
from resume_doctor.documents.exceptions import ParseError
from resume_doctor.generation.exceptions import (
    CredentialError,
    GenerationError,
    GenerationNetworkError,
    QuotaError,
    RateLimitError,
)
from resume_doctor.prompting.exceptions import PromptError
from resume_doctor.verification.exceptions import BotVerificationError

# Most specific classes first; the first isinstance match wins.
_CATEGORIES: tuple[tuple[type[Exception], ErrorCategory], ...] = (
    (AnalysisValidationError, ErrorCategory.VALIDATION),
    (SubmissionRejectedError, ErrorCategory.REJECTED),
    (ParseError, ErrorCategory.PARSE),
    (PromptError, ErrorCategory.CONFIGURATION),
    (BotVerificationError, ErrorCategory.BOT_VERIFICATION),
    (CredentialError, ErrorCategory.CREDENTIAL),
    (QuotaError, ErrorCategory.QUOTA),
    (RateLimitError, ErrorCategory.RATE_LIMIT),
    (GenerationNetworkError, ErrorCategory.NETWORK),
    (ContentPolicyError, ErrorCategory.CONTENT_POLICY),
    (AnalysisCancelledError, ErrorCategory.CANCELLED),
    (IncompleteGenerationError, ErrorCategory.GENERATION),
    (GenerationError, ErrorCategory.GENERATION),
)

_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.CONFIGURATION: (
        "The analysis template for this configuration is unavailable. "
        "Try a different depth or domain."
    ),
    ErrorCategory.BOT_VERIFICATION: "Bot verification failed. Please try submitting again.",
    ErrorCategory.CREDENTIAL: (
        "Your API key was rejected. Check that it is correct and has access to the model."
    ),
    ErrorCategory.QUOTA: (
        "Your API quota is exhausted. Check your plan and billing details, "
        "or try again later."
    ),
    ErrorCategory.RATE_LIMIT: "Too many requests right now. Wait a minute and submit again.",
    ErrorCategory.NETWORK: (
        "Could not reach the AI service. Check your connection and try again."
    ),
    ErrorCategory.CONTENT_POLICY: (
        "The response was blocked by the AI provider's content policy. "
        "Try removing sensitive details from your resume or notes."
    ),
    ErrorCategory.GENERATION: "The analysis could not be completed. Please try again.",
    ErrorCategory.CANCELLED: "Analysis cancelled.",
    ErrorCategory.UNEXPECTED: "Analysis failed unexpectedly. Please try again.",
}


def categorize(exc: BaseException) -> ErrorCategory:
    for exc_type, category in _CATEGORIES:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.UNEXPECTED


def describe_failure(exc: BaseException) -> AnalysisFailure:
    """Build the failure shown to the user for *exc*.

    Validation, parse and rejection errors already carry a user-facing
    message. Everything else gets a fixed message for its category.
    """
    category = categorize(exc)
    message = _MESSAGES.get(category) or str(exc)
    return AnalysisFailure(category=category, message=message)
