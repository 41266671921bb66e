from abc import ABC, abstractmethod
from collections.abc import Iterator

from resume_doctor.generation.models import GenerationParams, StreamChunk


class BaseStreamingClient(ABC):
    """Contract for provider-specific streaming generation clients."""

    @abstractmethod
    def stream(
        self,
        *,
        system_text: str,
        user_text: str,
        credential: str,
        params: GenerationParams,
    ) -> Iterator[StreamChunk]:
        """Yield text chunks followed by exactly one terminal chunk.

        Adapters never retry; every failure is raised to the caller.

        Raises:
            CredentialError: if the API key is rejected.
            QuotaError: if the account quota is exhausted.
            RateLimitError: if requests are being throttled.
            GenerationNetworkError: on connection failures and timeouts.
            GenerationError: on any other backend failure.
        """
