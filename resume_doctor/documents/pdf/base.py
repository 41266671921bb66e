from abc import abstractmethod

from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.exceptions import (
    CorruptedDocumentError,
    EncryptedDocumentError,
    ParseError,
)
from resume_doctor.documents.models import ExtractedText


def mentions_encryption(exc: BaseException) -> bool:
    """Walk the exception chain looking for password or encryption failures."""
    current: BaseException | None = exc
    while current is not None:
        description = f"{type(current).__name__} {current}".lower()
        if "password" in description or "encrypt" in description:
            return True
        current = current.__cause__ or current.__context__
    return False


class BasePdfExtractor(BaseExtractor):
    """Contract for all PDF text extraction adapters.

    Engines only read page text; page limits, warnings and error
    classification are shared here.
    """

    def __init__(self, max_pages: int = 3) -> None:
        self._max_pages = max_pages

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        """Read the text of the first *max_pages* pages.

        Returns:
            (page_texts, total_page_count)

        Raises:
            EncryptedDocumentError: if the PDF needs a password.
            CorruptedDocumentError: if the PDF structure cannot be opened.
        """

    def extract(self, content: bytes) -> ExtractedText:
        pages, total_pages = self.read_pages(content, self._max_pages)
        text = "\n\n".join(page.strip() for page in pages if page and page.strip())

        warnings: list[str] = []
        if total_pages > self._max_pages:
            warnings.append(
                f"Resume has {total_pages} pages. "
                "Consider keeping it to 2-3 pages for better results."
            )
        if len(text) < len(content) / 100:
            warnings.append(
                "PDF may contain mostly images or complex formatting. "
                "Consider using a text-based format."
            )
        return ExtractedText(text=text, warnings=warnings, page_count=len(pages))

    @staticmethod
    def open_failure(exc: Exception) -> ParseError:
        if mentions_encryption(exc):
            return EncryptedDocumentError(
                "Password-protected PDFs are not supported. "
                "Please provide an unprotected version."
            )
        return CorruptedDocumentError(
            "Invalid PDF file. Please ensure the file is not corrupted."
        )
