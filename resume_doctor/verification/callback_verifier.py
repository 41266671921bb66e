from collections.abc import Callable

from resume_doctor.verification.base import BaseBotVerifier
from resume_doctor.verification.exceptions import BotVerificationError


class CallbackVerifier(BaseBotVerifier):
    """Delegates token acquisition to a host-provided callable."""

    def __init__(self, fetch_token: Callable[[str], str]) -> None:
        self._fetch_token = fetch_token

    def get_token(self, action_name: str) -> str:
        try:
            token = self._fetch_token(action_name)
        except BotVerificationError:
            raise
        except Exception as exc:
            raise BotVerificationError(f"Bot verification failed: {exc}") from exc
        if not token:
            raise BotVerificationError("Bot verification returned an empty token")
        return token
