import pymupdf

from resume_doctor.documents.exceptions import EncryptedDocumentError, ParseError
from resume_doctor.documents.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise self.open_failure(exc) from exc

        with doc:
            if doc.needs_pass:
                raise EncryptedDocumentError(
                    "Password-protected PDFs are not supported. "
                    "Please provide an unprotected version."
                )
            try:
                total = doc.page_count
                pages = [doc[index].get_text() for index in range(min(total, max_pages))]
            except Exception as exc:
                raise ParseError(f"Failed to parse PDF: {exc}") from exc
        return pages, total
