class GenerationError(Exception):
    """Raised when the generation backend fails."""


class CredentialError(GenerationError):
    """Raised when the backend rejects the API key."""


class QuotaError(GenerationError):
    """Raised when the account has exhausted its quota or billing limit."""


class RateLimitError(GenerationError):
    """Raised when the backend throttles requests."""


class GenerationNetworkError(GenerationError):
    """Raised when the backend cannot be reached or times out."""
