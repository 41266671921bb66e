import threading
from collections.abc import Callable

from resume_doctor.analysis.cooldown import CooldownTimer
from resume_doctor.analysis.exceptions import (
    AnalysisCancelledError,
    ContentPolicyError,
    CooldownActiveError,
    IncompleteGenerationError,
    SubmissionInProgressError,
    SubmissionRejectedError,
)
from resume_doctor.analysis.failures import describe_failure
from resume_doctor.analysis.models import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisResult,
    AnalysisState,
    ErrorCategory,
)
from resume_doctor.analysis.validator import validate_submission
from resume_doctor.config.settings import Settings
from resume_doctor.generation.client_base import BaseStreamingClient
from resume_doctor.generation.factory import StreamingClientFactory
from resume_doctor.generation.models import FinishReason, GenerationParams, StreamChunk, TokenUsage
from resume_doctor.logging.logger import Log
from resume_doctor.prompting.hydrator import TemplateHydrator
from resume_doctor.prompting.models import AnalysisConfig, PromptPair
from resume_doctor.session.state import SessionState
from resume_doctor.verification.base import BaseBotVerifier
from resume_doctor.verification.exceptions import BotVerificationError
from resume_doctor.verification.factory import BotVerifierFactory

ResultListener = Callable[[AnalysisResult | None], None]
StateListener = Callable[[AnalysisState], None]

TRUNCATION_NOTICE = (
    "\n\n---\n"
    "*Note: the analysis reached the maximum response length and may be incomplete.*"
)


class AnalysisOrchestrator:
    """Drives one session's submissions through the analysis lifecycle.

    Idle -> Validating -> AwaitingBotToken -> Streaming -> Completed
    -> CooldownActive -> Idle, or Failed -> Idle from any step before
    Completed. A failure never leaves a partial result behind and never
    starts a cooldown. Submissions refused because a stream is running or
    the cooldown is active change no state at all.
    """

    def __init__(
        self,
        session: SessionState,
        hydrator: TemplateHydrator,
        client: BaseStreamingClient,
        verifier: BaseBotVerifier,
        cooldown: CooldownTimer,
        params: GenerationParams,
        action_name: str = "submit_analysis",
        cooldown_seconds: int = 60,
    ) -> None:
        self._session = session
        self._hydrator = hydrator
        self._client = client
        self._verifier = verifier
        self._cooldown = cooldown
        self._params = params
        self._action_name = action_name
        self._cooldown_seconds = cooldown_seconds
        self._state = AnalysisState.IDLE
        self._state_lock = threading.Lock()
        self._submission_lock = threading.Lock()
        self._cancel_event = threading.Event()
        self._result_listeners: list[ResultListener] = []
        self._state_listeners: list[StateListener] = []
        self._cooldown.set_callbacks(on_expire=self._on_cooldown_expired)

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def cooldown_remaining(self) -> int:
        return self._cooldown.remaining_seconds

    def subscribe(self, listener: ResultListener) -> None:
        """Receive every result snapshot, and None when a result is discarded."""
        self._result_listeners.append(listener)

    def subscribe_state(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def submit(self, config: AnalysisConfig | None = None) -> AnalysisOutcome:
        """Run one submission to completion on the calling thread.

        If *config* is given it replaces the session's active config first.
        """
        if not self._submission_lock.acquire(blocking=False):
            return self._reject(SubmissionInProgressError("An analysis is already running."))
        try:
            if self._cooldown.active:
                return self._reject(CooldownActiveError(self._cooldown.remaining_seconds))
            if config is not None:
                self._session.replace_config(config)
            return self._run()
        finally:
            self._cancel_event.clear()
            self._submission_lock.release()

    def cancel(self) -> bool:
        """Ask the running submission to stop after the chunk in flight."""
        if not self._submission_lock.locked():
            return False
        Log.info("Analysis cancellation requested")
        self._cancel_event.set()
        return True

    def _run(self) -> AnalysisOutcome:
        self._session.replace_failure(None)
        try:
            self._transition(AnalysisState.VALIDATING)
            submission = validate_submission(
                self._session.document, self._session.config, self._session.api_key
            )
            prompts = self._hydrator.hydrate(submission.config, submission.document.text)

            self._transition(AnalysisState.AWAITING_BOT_TOKEN)
            self._obtain_bot_token()

            self._transition(AnalysisState.STREAMING)
            result, terminal = self._stream(prompts, submission.api_key)
        except Exception as exc:
            return self._fail(exc)

        self._transition(AnalysisState.COMPLETED)
        Log.info(f"Analysis completed: {len(result.content)} chars")
        self._start_cooldown()
        return AnalysisOutcome(
            result=result, finish_reason=terminal.finish_reason, usage=terminal.usage
        )

    def _obtain_bot_token(self) -> str:
        token = self._verifier.get_token(self._action_name)
        if not token:
            raise BotVerificationError("Bot verification returned an empty token")
        Log.debug(f"Obtained bot verification token for action '{self._action_name}'")
        return token

    def _stream(
        self, prompts: PromptPair, api_key: str
    ) -> tuple[AnalysisResult, StreamChunk]:
        result = AnalysisResult.start()
        self._publish(result)
        chunks = self._client.stream(
            system_text=prompts.system_text,
            user_text=prompts.user_text,
            credential=api_key,
            params=self._params,
        )
        try:
            for chunk in chunks:
                if self._cancel_event.is_set():
                    raise AnalysisCancelledError("Analysis cancelled by user")
                if chunk.text:
                    result = result.append(chunk.text)
                    self._publish(result)
                if chunk.is_complete:
                    return self._finalize(result, chunk), chunk
        finally:
            close = getattr(chunks, "close", None)
            if callable(close):
                close()
        raise IncompleteGenerationError("Generation stream ended without a finish reason")

    def _finalize(self, result: AnalysisResult, terminal: StreamChunk) -> AnalysisResult:
        finish_reason = terminal.finish_reason or FinishReason.OTHER
        self._log_usage(finish_reason, terminal.usage)
        if finish_reason in (FinishReason.SAFETY, FinishReason.RECITATION):
            raise ContentPolicyError(finish_reason)
        if finish_reason is FinishReason.MAX_TOKENS:
            Log.warning("Analysis hit the output token limit; marking it as truncated")
            final = result.finalize(notice=TRUNCATION_NOTICE)
        elif finish_reason is FinishReason.STOP:
            final = result.finalize()
        else:
            raise IncompleteGenerationError(
                f"Generation ended with unexpected finish reason: {finish_reason.value}"
            )
        self._publish(final)
        return final

    def _fail(self, exc: Exception) -> AnalysisOutcome:
        failure = describe_failure(exc)
        if failure.category is ErrorCategory.UNEXPECTED:
            Log.exception(f"Analysis failed unexpectedly: {exc}")
        else:
            Log.error(f"Analysis failed ({failure.category.value}): {exc}")
        self._transition(AnalysisState.FAILED)
        self._discard_result()
        self._session.replace_failure(failure)
        self._transition(AnalysisState.IDLE)
        return AnalysisOutcome(failure=failure)

    def _reject(self, exc: SubmissionRejectedError) -> AnalysisOutcome:
        Log.info(f"Submission rejected: {exc}")
        return AnalysisOutcome(
            failure=AnalysisFailure(category=ErrorCategory.REJECTED, message=str(exc))
        )

    def _start_cooldown(self) -> None:
        if self._cooldown_seconds <= 0:
            self._transition(AnalysisState.IDLE)
            return
        self._transition(AnalysisState.COOLDOWN_ACTIVE)
        self._cooldown.start(self._cooldown_seconds)

    def _on_cooldown_expired(self) -> None:
        with self._state_lock:
            if self._state is not AnalysisState.COOLDOWN_ACTIVE:
                return
            self._state = AnalysisState.IDLE
        self._announce(AnalysisState.COOLDOWN_ACTIVE, AnalysisState.IDLE)

    def _publish(self, result: AnalysisResult) -> None:
        self._session.replace_result(result)
        for listener in self._result_listeners:
            listener(result)

    def _discard_result(self) -> None:
        if self._session.result is None:
            return
        self._session.replace_result(None)
        for listener in self._result_listeners:
            listener(None)

    def _transition(self, state: AnalysisState) -> None:
        with self._state_lock:
            previous = self._state
            self._state = state
        self._announce(previous, state)

    def _announce(self, previous: AnalysisState, state: AnalysisState) -> None:
        Log.debug(f"Analysis state: {previous.value} -> {state.value}")
        for listener in self._state_listeners:
            listener(state)

    @staticmethod
    def _log_usage(finish_reason: FinishReason, usage: TokenUsage | None) -> None:
        if usage is None:
            Log.info(f"Generation finished ({finish_reason.value}); no usage reported")
            return
        Log.info(
            f"Generation finished ({finish_reason.value}): "
            f"prompt_tokens={usage.prompt_tokens} "
            f"completion_tokens={usage.completion_tokens} "
            f"total_tokens={usage.total_tokens}"
        )


def build_orchestrator(
    settings: Settings,
    session: SessionState,
    *,
    client: BaseStreamingClient | None = None,
    verifier: BaseBotVerifier | None = None,
    cooldown: CooldownTimer | None = None,
    fetch_token: Callable[[str], str] | None = None,
) -> AnalysisOrchestrator:
    """Build an AnalysisOrchestrator with all required adapters.

    *fetch_token* lets a host supply bot-verification tokens for each
    submission; it is ignored when an explicit *verifier* is given.
    """
    return AnalysisOrchestrator(
        session=session,
        hydrator=TemplateHydrator(),
        client=client or StreamingClientFactory.create(settings),
        verifier=verifier or BotVerifierFactory.create(settings, fetch_token),
        cooldown=cooldown or CooldownTimer(),
        params=StreamingClientFactory.params(settings),
        action_name=settings.bot_action_name,
        cooldown_seconds=settings.cooldown_seconds,
    )
