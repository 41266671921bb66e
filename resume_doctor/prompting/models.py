from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from resume_doctor.analysis.exceptions import AnalysisValidationError


class Depth(str, Enum):
    COMPACT = "compact"
    FULL = "full"


class Domain(str, Enum):
    UNIVERSAL = "universal"
    TECHNICAL = "technical"
    NON_TECHNICAL = "nonTechnical"


class ExperienceLevel(str, Enum):
    ENTRY = "Entry"
    MID = "Mid"
    SENIOR = "Senior"


@dataclass(frozen=True)
class AnalysisConfig:
    """Job context the user fills in before submitting a résumé."""

    depth: Depth
    domain: Domain
    target_role: str
    target_company: str
    experience_level: ExperienceLevel
    geographic_focus: str | None = None
    special_focus: str | None = None
    memo: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "AnalysisConfig":
        """Build a config from form-style values.

        Raises:
            AnalysisValidationError: if an enumerated field holds a value
                outside its vocabulary.
        """
        return cls(
            depth=_choice(Depth, data, "depth", "analysis depth"),
            domain=_choice(Domain, data, "domain", "resume domain"),
            target_role=str(data.get("target_role") or ""),
            target_company=str(data.get("target_company") or ""),
            experience_level=_choice(
                ExperienceLevel, data, "experience_level", "experience level"
            ),
            geographic_focus=_optional_text(data.get("geographic_focus")),
            special_focus=_optional_text(data.get("special_focus")),
            memo=_optional_text(data.get("memo")),
        )


_E = TypeVar("_E", bound=Enum)


def _choice(enum_cls: type[_E], data: Mapping[str, object], field: str, label: str) -> _E:
    value = data.get(field)
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise AnalysisValidationError(
            f"Unknown {label} '{value}'. Choose one of: {allowed}.", field=field
        ) from exc


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class PromptTemplate:
    """Raw system and user template text for one (depth, domain) pair."""

    name: str
    system_template: str
    user_template: str


@dataclass(frozen=True)
class PromptPair:
    """Fully rendered prompts, free of template syntax."""

    system_text: str
    user_text: str
