"""Tests for prompt template loading."""

from pathlib import Path

import pytest

from resume_doctor.prompting.exceptions import TemplateNotFoundError
from resume_doctor.prompting.models import Depth, Domain
from resume_doctor.prompting.prompt_loader import TEMPLATE_LABELS, load_prompt_template


class TestLoadPromptTemplate:
    @pytest.mark.parametrize(("depth", "domain"), list(TEMPLATE_LABELS))
    def test_loads_every_bundled_template(self, depth: Depth, domain: Domain) -> None:
        template = load_prompt_template(depth, domain)
        assert template.name == TEMPLATE_LABELS[(depth, domain)]
        assert template.system_template.strip()
        assert "{{resume_text}}" in template.user_template
        assert "{{target_role}}" in template.user_template
        assert "{{target_company}}" in template.user_template

    def test_accepts_raw_string_values(self) -> None:
        template = load_prompt_template("full", "nonTechnical")  # type: ignore[arg-type]
        assert template.name == "Non-Technical (Full Analysis)"

    def test_loads_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "compact").mkdir()
        (tmp_path / "compact" / "universal_system.txt").write_text("Be brief.")
        (tmp_path / "compact" / "universal_user.txt").write_text("Review {{resume_text}}")
        template = load_prompt_template(Depth.COMPACT, Domain.UNIVERSAL, tmp_path)
        assert template.system_template == "Be brief."
        assert template.user_template == "Review {{resume_text}}"

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateNotFoundError, match="Failed to load prompt template"):
            load_prompt_template(Depth.FULL, Domain.TECHNICAL, tmp_path)

    def test_unknown_pair_raises_error(self) -> None:
        with pytest.raises(TemplateNotFoundError, match="No prompt template"):
            load_prompt_template("deep", "universal")  # type: ignore[arg-type]
