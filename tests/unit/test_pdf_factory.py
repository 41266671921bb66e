from unittest.mock import MagicMock

import pytest

from resume_doctor.documents.pdf.factory import PdfExtractorFactory
from resume_doctor.documents.pdf.pdfplumber_adapter import PdfPlumberAdapter
from resume_doctor.documents.pdf.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(pdf_engine: str, pdf_max_pages: int = 3) -> MagicMock:
    """Create a minimal Settings-like object with only the PDF fields."""
    return MagicMock(pdf_engine=pdf_engine, pdf_max_pages=pdf_max_pages)


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_passes_page_limit(self, five_page_pdf_bytes: bytes) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pdfplumber", pdf_max_pages=1))
        assert adapter.extract(five_page_pdf_bytes).page_count == 1

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(_make_settings("unknown"))
