"""Renders the prompt templates for one submission.

Templates use two kinds of markers:

* ``{{name}}`` placeholders, replaced by the bound value.
* ``{{#if name}} ... {{/if}}`` regions around text that only makes sense
  when an optional field is filled in. A region is kept (without its
  markers) when the value is non-blank and dropped entirely otherwise.

Rendering runs the region pass first and the placeholder pass second. Any
marker left unresolved after both passes is deleted, so the output never
contains template syntax. Nested regions are not supported.
"""

import re
from pathlib import Path

from resume_doctor.logging.logger import Log
from resume_doctor.prompting.models import AnalysisConfig, PromptPair
from resume_doctor.prompting.prompt_loader import load_prompt_template

OPTIONAL_FIELDS = ("geographic_focus", "special_focus", "memo")

_CONDITIONAL_RE = re.compile(r"\{\{#if\s+(\w+)\s*\}\}(.*?)\{\{/if\}\}", re.DOTALL)
_MARKER_RE = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")
_IDENTIFIER_RE = re.compile(r"^\w+$")
_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_OPEN_BRACES_RE = re.compile(r"\{(?=\{)")
_CLOSE_BRACES_RE = re.compile(r"\}(?=\})")


class TemplateHydrator:
    """Selects the template for a config and renders system and user prompts."""

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self._prompt_dir = prompt_dir

    def hydrate(self, config: AnalysisConfig, document_text: str) -> PromptPair:
        """Render the prompts for *config* around the normalized résumé text.

        Raises:
            TemplateNotFoundError: if no template matches (depth, domain).
        """
        template = load_prompt_template(config.depth, config.domain, self._prompt_dir)
        values = self._bind_values(config, document_text)
        Log.debug(
            f"Hydrating template '{template.name}' with optional fields: "
            f"{[name for name in OPTIONAL_FIELDS if values.get(name)]}"
        )
        return PromptPair(
            system_text=render(template.system_template, values),
            user_text=render(template.user_template, values),
        )

    @staticmethod
    def _bind_values(config: AnalysisConfig, document_text: str) -> dict[str, str]:
        raw = {
            "resume_text": document_text,
            "target_role": config.target_role,
            "target_company": config.target_company,
            "experience_level": config.experience_level.value,
            "depth": config.depth.value,
            "domain": config.domain.value,
            "geographic_focus": config.geographic_focus,
            "special_focus": config.special_focus,
            "memo": config.memo,
        }
        return {
            name: _neutralize_markers(value.strip())
            for name, value in raw.items()
            if value is not None and value.strip()
        }


def render(template: str, values: dict[str, str]) -> str:
    """Render one template string against already-bound values.

    Values that are missing or blank are treated as not provided.
    """

    def resolve_region(match: re.Match[str]) -> str:
        return match.group(2) if values.get(match.group(1)) else ""

    def resolve_marker(match: re.Match[str]) -> str:
        name = match.group(1)
        if not _IDENTIFIER_RE.match(name):
            return ""
        return values.get(name, "")

    text = _CONDITIONAL_RE.sub(resolve_region, template)
    text = _MARKER_RE.sub(resolve_marker, text)
    text = _TRAILING_SPACE_RE.sub("\n", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def _neutralize_markers(value: str) -> str:
    # User text must not be able to form "{{" or "}}" in the rendered prompt.
    value = _OPEN_BRACES_RE.sub("{ ", value)
    return _CLOSE_BRACES_RE.sub("} ", value)
