from pathlib import Path

from resume_doctor.prompting.exceptions import TemplateNotFoundError
from resume_doctor.prompting.models import Depth, Domain, PromptTemplate

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

TEMPLATE_LABELS: dict[tuple[Depth, Domain], str] = {
    (Depth.COMPACT, Domain.UNIVERSAL): "Universal (Compact)",
    (Depth.COMPACT, Domain.TECHNICAL): "Technical (Compact)",
    (Depth.COMPACT, Domain.NON_TECHNICAL): "Non-Technical (Compact)",
    (Depth.FULL, Domain.UNIVERSAL): "Universal (Full Analysis)",
    (Depth.FULL, Domain.TECHNICAL): "Technical (Full Analysis)",
    (Depth.FULL, Domain.NON_TECHNICAL): "Non-Technical (Full Analysis)",
}


def load_prompt_template(
    depth: Depth,
    domain: Domain,
    prompt_dir: Path | None = None,
) -> PromptTemplate:
    """Load the system and user templates for a (depth, domain) pair.

    Args:
        depth: Analysis depth.
        domain: Subject-matter framing.
        prompt_dir: Root directory holding ``<depth>/<domain>_system.txt`` and
                    ``<depth>/<domain>_user.txt``. Defaults to the bundled prompts.

    Returns:
        The raw templates with markers and placeholders.

    Raises:
        TemplateNotFoundError: if the pair is unknown or a file cannot be read.
    """
    label = TEMPLATE_LABELS.get((depth, domain))
    if label is None:
        raise TemplateNotFoundError(f"No prompt template for ({depth}, {domain})")

    base = (prompt_dir or _DEFAULT_PROMPT_DIR) / Depth(depth).value
    stem = Domain(domain).value
    try:
        system_template = (base / f"{stem}_system.txt").read_text(encoding="utf-8")
        user_template = (base / f"{stem}_user.txt").read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateNotFoundError(f"Failed to load prompt template '{label}': {exc}") from exc
    return PromptTemplate(name=label, system_template=system_template, user_template=user_template)
