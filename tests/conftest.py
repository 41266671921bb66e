import io
from collections.abc import Callable

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

_VOCABULARY = (
    "Led migration of billing services to Kubernetes reducing deploy time by forty percent "
    "Designed event driven pipelines in Python and Kafka processing two million records daily "
    "Mentored four engineers and introduced code review guidelines across the platform team"
).split()


def make_words(count: int, per_line: int = 25) -> str:
    """Deterministic résumé-like text with exactly *count* words."""
    words = [_VOCABULARY[i % len(_VOCABULARY)] for i in range(count)]
    lines = [" ".join(words[i : i + per_line]) for i in range(0, count, per_line)]
    return "\n".join(lines)


def _pdf_with_pages(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 14
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def resume_text_250() -> str:
    return make_words(250)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def five_page_pdf_bytes() -> bytes:
    return _pdf_with_pages([[f"Page {n} content"] for n in range(1, 6)])


@pytest.fixture()
def resume_pdf_bytes() -> bytes:
    """A one-page résumé with 150 words, eight per line."""
    text = make_words(150, per_line=8)
    return _pdf_with_pages([text.splitlines()])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt="secret")
    c.drawString(72, 720, "Confidential resume")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """A Word résumé with a heading, two paragraphs, and a skills table."""
    document = docx.Document()
    document.add_heading("Jane Doe", level=1)
    document.add_paragraph("Senior backend engineer with ten years of experience.")
    document.add_paragraph(make_words(120))
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Languages"
    table.cell(0, 1).text = "Python, Go"
    table.cell(1, 0).text = "Cloud"
    table.cell(1, 1).text = "AWS, GCP"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def plain_docx_bytes() -> bytes:
    document = docx.Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph(make_words(150))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def words() -> Callable[..., str]:
    return make_words
