from dataclasses import dataclass, field
from enum import Enum


class DocumentFormat(str, Enum):
    """Source formats the normalizer can extract text from."""

    PDF = "pdf"
    DOCX = "docx"
    MARKDOWN = "markdown"
    TEXT = "text"


@dataclass(frozen=True)
class RawDocument:
    """An uploaded file as received, before any parsing."""

    content: bytes
    filename: str = ""
    mime_type: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_text(cls, text: str, filename: str = "pasted.txt") -> "RawDocument":
        """Wrap pasted text so it goes through the same pipeline as files."""
        return cls(content=text.encode("utf-8"), filename=filename, mime_type="text/plain")


@dataclass(frozen=True)
class ExtractedText:
    """Output of a format-specific extractor, before shared cleaning."""

    text: str
    warnings: list[str] = field(default_factory=list)
    page_count: int | None = None


@dataclass(frozen=True)
class NormalizedDocument:
    """Cleaned résumé text with size metrics and advisory warnings."""

    text: str
    word_count: int
    page_count: int
    warnings: list[str] = field(default_factory=list)
    source_format: DocumentFormat = DocumentFormat.TEXT
    filename: str = ""
