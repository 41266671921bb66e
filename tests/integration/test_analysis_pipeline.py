"""End-to-end tests: raw document -> normalization -> orchestrated analysis.

Uses the example streaming client, so no network calls are made.
"""

import threading

import pytest

from resume_doctor.analysis.cooldown import CooldownTimer
from resume_doctor.analysis.models import AnalysisState, ErrorCategory
from resume_doctor.analysis.orchestrator import build_orchestrator
from resume_doctor.config.settings import Settings
from resume_doctor.documents.background import NormalizationRunner
from resume_doctor.documents.exceptions import LegacyFormatError
from resume_doctor.documents.factory import DocumentNormalizerFactory
from resume_doctor.documents.models import RawDocument
from resume_doctor.generation.example_client_adapter import ExampleStreamingClient
from resume_doctor.generation.models import FinishReason
from resume_doctor.prompting.models import AnalysisConfig
from resume_doctor.session.state import SessionState

_FORM = {
    "depth": "full",
    "domain": "technical",
    "target_role": "Backend Engineer",
    "target_company": "Acme",
    "experience_level": "Senior",
    "geographic_focus": "",
}


@pytest.fixture()
def settings() -> Settings:
    return Settings(generation_provider="example", cooldown_seconds=5)


def _load_document(settings: Settings, session: SessionState, document: RawDocument) -> None:
    runner = NormalizationRunner(DocumentNormalizerFactory.create(settings), session)
    try:
        runner.submit(document).result(timeout=10)
    finally:
        runner.shutdown()


class TestAnalysisPipeline:
    def test_pdf_upload_to_completed_analysis(
        self, settings: Settings, resume_pdf_bytes: bytes
    ) -> None:
        session = SessionState(api_key="key-1")
        _load_document(settings, session, RawDocument(content=resume_pdf_bytes, filename="cv.pdf"))
        cooldown = CooldownTimer(run_in_background=False)
        orchestrator = build_orchestrator(settings, session, cooldown=cooldown)

        outcome = orchestrator.submit(AnalysisConfig.from_mapping(_FORM))

        assert outcome.succeeded
        assert outcome.result is not None
        assert outcome.result.content == "".join(ExampleStreamingClient.DEFAULT_CHUNKS)
        assert outcome.usage is not None
        assert outcome.usage.prompt_tokens > 100
        assert orchestrator.state is AnalysisState.COOLDOWN_ACTIVE
        assert cooldown.remaining_seconds == 5

    def test_cooldown_expires_in_background(
        self, settings: Settings, resume_text_250: str
    ) -> None:
        session = SessionState(api_key="key-1")
        _load_document(settings, session, RawDocument.from_text(resume_text_250))
        orchestrator = build_orchestrator(
            settings, session, cooldown=CooldownTimer(interval_seconds=0.01)
        )
        idle = threading.Event()
        orchestrator.subscribe_state(
            lambda state: idle.set() if state is AnalysisState.IDLE else None
        )

        assert orchestrator.submit(AnalysisConfig.from_mapping(_FORM)).succeeded
        assert idle.wait(timeout=5)
        assert orchestrator.state is AnalysisState.IDLE
        assert orchestrator.submit().succeeded

    def test_content_policy_block_leaves_no_result(
        self, settings: Settings, resume_text_250: str
    ) -> None:
        session = SessionState(api_key="key-1")
        _load_document(settings, session, RawDocument.from_text(resume_text_250))
        orchestrator = build_orchestrator(
            settings,
            session,
            client=ExampleStreamingClient(["Partial"], finish_reason=FinishReason.SAFETY),
            fetch_token=lambda action: f"token-for-{action}",
            cooldown=CooldownTimer(run_in_background=False),
        )

        outcome = orchestrator.submit(AnalysisConfig.from_mapping(_FORM))

        assert outcome.failure is not None
        assert outcome.failure.category is ErrorCategory.CONTENT_POLICY
        assert session.result is None
        assert orchestrator.state is AnalysisState.IDLE

    def test_failed_upload_blocks_submission(self, settings: Settings) -> None:
        session = SessionState(api_key="key-1")
        with pytest.raises(LegacyFormatError):
            _load_document(settings, session, RawDocument(content=b"x" * 200, filename="cv.doc"))
        orchestrator = build_orchestrator(
            settings, session, cooldown=CooldownTimer(run_in_background=False)
        )

        outcome = orchestrator.submit(AnalysisConfig.from_mapping(_FORM))

        assert outcome.failure is not None
        assert outcome.failure.category is ErrorCategory.VALIDATION

    def test_host_supplied_token_fetcher_is_used(
        self, settings: Settings, resume_text_250: str
    ) -> None:
        session = SessionState(api_key="key-1")
        _load_document(settings, session, RawDocument.from_text(resume_text_250))
        requested: list[str] = []

        def fetch_token(action: str) -> str:
            requested.append(action)
            return "widget-token"

        orchestrator = build_orchestrator(
            settings,
            session,
            cooldown=CooldownTimer(run_in_background=False),
            fetch_token=fetch_token,
        )

        assert orchestrator.submit(AnalysisConfig.from_mapping(_FORM)).succeeded
        assert requested == ["submit_analysis"]

    def test_failing_token_fetcher_is_bot_verification_failure(
        self, settings: Settings, resume_text_250: str
    ) -> None:
        session = SessionState(api_key="key-1")
        _load_document(settings, session, RawDocument.from_text(resume_text_250))

        def fetch_token(_action: str) -> str:
            raise TimeoutError("widget did not load")

        orchestrator = build_orchestrator(
            settings,
            session,
            cooldown=CooldownTimer(run_in_background=False),
            fetch_token=fetch_token,
        )
        outcome = orchestrator.submit(AnalysisConfig.from_mapping(_FORM))

        assert outcome.failure is not None
        assert outcome.failure.category is ErrorCategory.BOT_VERIFICATION
