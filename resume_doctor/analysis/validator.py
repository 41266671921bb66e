"""Pre-flight checks run before any network call is made."""

from dataclasses import dataclass

from resume_doctor.analysis.exceptions import AnalysisValidationError
from resume_doctor.documents.models import NormalizedDocument
from resume_doctor.prompting.models import AnalysisConfig, Depth, Domain, ExperienceLevel

_TARGET_MIN_LENGTH = 2
_TARGET_MAX_LENGTH = 100
_OPTIONAL_MAX_LENGTHS = {
    "geographic_focus": 100,
    "special_focus": 200,
    "memo": 1000,
}


@dataclass(frozen=True)
class ValidatedSubmission:
    document: NormalizedDocument
    config: AnalysisConfig
    api_key: str


def validate_submission(
    document: NormalizedDocument | None,
    config: AnalysisConfig | None,
    api_key: str,
) -> ValidatedSubmission:
    """Check document, config and API key, in that order.

    The first missing or invalid piece stops validation.

    Raises:
        AnalysisValidationError: naming the field that failed.
    """
    if document is None or not document.text.strip():
        raise AnalysisValidationError(
            "Please upload or paste your resume first.", field="document"
        )
    if config is None:
        raise AnalysisValidationError(
            "Please complete the analysis configuration.", field="config"
        )
    _validate_config(config)
    if not api_key or not api_key.strip():
        raise AnalysisValidationError("Please enter your API key.", field="api_key")
    return ValidatedSubmission(document=document, config=config, api_key=api_key.strip())


def _validate_config(config: AnalysisConfig) -> None:
    if not isinstance(config.depth, Depth):
        raise AnalysisValidationError("Please select an analysis depth.", field="depth")
    if not isinstance(config.domain, Domain):
        raise AnalysisValidationError("Please select a resume domain.", field="domain")
    _require_text(config.target_role, "target_role", "target role")
    _require_text(config.target_company, "target_company", "target company")
    if not isinstance(config.experience_level, ExperienceLevel):
        raise AnalysisValidationError(
            "Please select your experience level.", field="experience_level"
        )
    for field, max_length in _OPTIONAL_MAX_LENGTHS.items():
        value = getattr(config, field)
        if value is not None and len(value.strip()) > max_length:
            label = field.replace("_", " ")
            raise AnalysisValidationError(
                f"The {label} must be {max_length} characters or fewer.", field=field
            )


def _require_text(value: str | None, field: str, label: str) -> None:
    text = (value or "").strip()
    if not text:
        raise AnalysisValidationError(f"Please enter the {label}.", field=field)
    if not _TARGET_MIN_LENGTH <= len(text) <= _TARGET_MAX_LENGTH:
        raise AnalysisValidationError(
            f"The {label} must be between {_TARGET_MIN_LENGTH} and "
            f"{_TARGET_MAX_LENGTH} characters.",
            field=field,
        )
