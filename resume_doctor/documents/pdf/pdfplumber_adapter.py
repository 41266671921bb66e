import io

import pdfplumber

from resume_doctor.documents.exceptions import ParseError
from resume_doctor.documents.pdf.base import BasePdfExtractor, mentions_encryption


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise self.open_failure(exc) from exc

        try:
            with pdf:
                total = len(pdf.pages)
                pages = [page.extract_text() or "" for page in pdf.pages[:max_pages]]
            return pages, total
        except Exception as exc:
            if mentions_encryption(exc):
                raise self.open_failure(exc) from exc
            raise ParseError(f"Failed to parse PDF: {exc}") from exc
