from abc import ABC, abstractmethod

from resume_doctor.documents.models import ExtractedText


class BaseExtractor(ABC):
    """Contract for all format-specific text extractors."""

    @abstractmethod
    def extract(self, content: bytes) -> ExtractedText:
        """Extract plain text from raw document bytes.

        Args:
            content: Raw file content.

        Returns:
            ExtractedText with uncleaned text and format-specific warnings.

        Raises:
            ParseError: if the document cannot be read.
        """
