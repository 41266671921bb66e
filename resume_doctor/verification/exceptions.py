class BotVerificationError(Exception):
    """Raised when a bot-verification token cannot be obtained."""
