from abc import ABC, abstractmethod


class BaseBotVerifier(ABC):
    """Contract for bot-verification collaborators."""

    @abstractmethod
    def get_token(self, action_name: str) -> str:
        """Obtain a single-use verification token scoped to *action_name*.

        Raises:
            BotVerificationError: if no token can be obtained.
        """
