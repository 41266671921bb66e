from collections.abc import Callable

from resume_doctor.config.settings import Settings
from resume_doctor.verification.base import BaseBotVerifier
from resume_doctor.verification.callback_verifier import CallbackVerifier
from resume_doctor.verification.static_verifier import LocalTokenVerifier, StaticTokenVerifier


class BotVerifierFactory:
    """Creates the configured bot verifier.

    A host that embeds the orchestrator passes *fetch_token* to plug in its
    own verification widget; otherwise the token comes from settings or is
    issued locally.
    """

    @classmethod
    def create(
        cls,
        settings: Settings,
        fetch_token: Callable[[str], str] | None = None,
    ) -> BaseBotVerifier:
        if fetch_token is not None:
            return CallbackVerifier(fetch_token)
        if settings.bot_static_token:
            return StaticTokenVerifier(settings.bot_static_token)
        return LocalTokenVerifier()
