import uuid

from resume_doctor.logging.logger import Log
from resume_doctor.verification.base import BaseBotVerifier
from resume_doctor.verification.exceptions import BotVerificationError


class StaticTokenVerifier(BaseBotVerifier):
    """Returns a preconfigured token, e.g. one handed over by a web front end."""

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self, action_name: str) -> str:
        if not self._token.strip():
            raise BotVerificationError("Bot verification is not configured")
        Log.debug(f"Using static verification token for action '{action_name}'")
        return self._token


class LocalTokenVerifier(BaseBotVerifier):
    """Issues a fresh random token per request.

    For command-line and development sessions where no external
    verification service exists.
    """

    def get_token(self, action_name: str) -> str:
        if not action_name:
            raise BotVerificationError("Bot verification requires an action name")
        return f"{action_name}:{uuid.uuid4().hex}"
