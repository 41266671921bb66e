from pathlib import Path

import pytest

from resume_doctor.prompting.exceptions import TemplateNotFoundError
from resume_doctor.prompting.hydrator import TemplateHydrator, render
from resume_doctor.prompting.models import AnalysisConfig, Depth, Domain, ExperienceLevel
from resume_doctor.prompting.prompt_loader import TEMPLATE_LABELS


def _config(**overrides: object) -> AnalysisConfig:
    values: dict[str, object] = {
        "depth": Depth.COMPACT,
        "domain": Domain.TECHNICAL,
        "target_role": "Backend Engineer",
        "target_company": "Acme",
        "experience_level": ExperienceLevel.MID,
    }
    values.update(overrides)
    return AnalysisConfig(**values)  # type: ignore[arg-type]


class TestRender:
    def test_substitutes_placeholders(self) -> None:
        assert render("Role: {{target_role}}", {"target_role": "SRE"}) == "Role: SRE"

    def test_keeps_region_when_value_present(self) -> None:
        template = "A\n{{#if memo}}\nMemo: {{memo}}\n{{/if}}\nB"
        assert render(template, {"memo": "hi"}) == "A\n\nMemo: hi\n\nB"

    def test_drops_region_when_value_missing(self) -> None:
        template = "A\n\n{{#if memo}}\nMemo: {{memo}}\n{{/if}}\n\nB"
        assert render(template, {}) == "A\n\nB"

    def test_unbound_placeholder_is_removed(self) -> None:
        assert render("Hello {{nobody}}!", {}) == "Hello !"

    def test_malformed_marker_is_removed(self) -> None:
        assert render("A {{#if memo}} B {{ not valid }} C", {"memo": "x"}) == "A  B  C"

    def test_regions_are_independent(self) -> None:
        template = "{{#if a}}[a]{{/if}}{{#if b}}[b]{{/if}}"
        assert render(template, {"b": "1"}) == "[b]"


class TestTemplateHydrator:
    def test_fills_required_fields(self) -> None:
        prompts = TemplateHydrator().hydrate(_config(), "Jane Doe, Python developer")
        assert "Backend Engineer" in prompts.user_text
        assert "Acme" in prompts.user_text
        assert "Mid-level" in prompts.user_text
        assert "Jane Doe, Python developer" in prompts.user_text

    def test_empty_geographic_focus_drops_its_region(self) -> None:
        prompts = TemplateHydrator().hydrate(_config(geographic_focus=""), "Jane Doe")
        assert "Geographic focus" not in prompts.user_text

    def test_whitespace_only_value_counts_as_missing(self) -> None:
        prompts = TemplateHydrator().hydrate(_config(memo="   \n "), "Jane Doe")
        assert "Notes from the candidate" not in prompts.user_text

    def test_filled_optional_fields_are_included(self) -> None:
        config = _config(
            geographic_focus="Germany",
            special_focus="Leadership",
            memo="Career switch from QA",
        )
        prompts = TemplateHydrator().hydrate(config, "Jane Doe")
        assert "Geographic focus: Germany" in prompts.user_text
        assert "Pay particular attention to: Leadership" in prompts.user_text
        assert "Career switch from QA" in prompts.user_text

    @pytest.mark.parametrize(("depth", "domain"), list(TEMPLATE_LABELS))
    def test_no_template_syntax_survives(self, depth: Depth, domain: Domain) -> None:
        config = _config(depth=depth, domain=domain, memo="see {{resume_text}} and }}")
        prompts = TemplateHydrator().hydrate(config, "Jane Doe {{#if memo}}")
        for text in (prompts.system_text, prompts.user_text):
            assert "{{" not in text
            assert "}}" not in text

    def test_output_has_no_runs_of_blank_lines(self) -> None:
        prompts = TemplateHydrator().hydrate(_config(depth=Depth.FULL), "Jane Doe")
        assert "\n\n\n" not in prompts.user_text

    def test_same_input_gives_same_output(self) -> None:
        hydrator = TemplateHydrator()
        assert hydrator.hydrate(_config(), "Jane") == hydrator.hydrate(_config(), "Jane")

    def test_uses_custom_prompt_dir(self, tmp_path: Path) -> None:
        (tmp_path / "compact").mkdir()
        (tmp_path / "compact" / "technical_system.txt").write_text("System for {{domain}}")
        (tmp_path / "compact" / "technical_user.txt").write_text(
            "{{target_role}} @ {{target_company}}{{#if memo}} ({{memo}}){{/if}}"
        )
        prompts = TemplateHydrator(tmp_path).hydrate(_config(), "text")
        assert prompts.system_text == "System for technical"
        assert prompts.user_text == "Backend Engineer @ Acme"

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateNotFoundError):
            TemplateHydrator(tmp_path).hydrate(_config(), "text")
