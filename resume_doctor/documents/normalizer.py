"""Turns uploaded or pasted résumés into clean text with size metrics."""

import math
from dataclasses import dataclass

from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.cleaning import clean_text, count_words
from resume_doctor.documents.exceptions import DocumentTooLargeError, EmptyDocumentError
from resume_doctor.documents.formats import detect_format
from resume_doctor.documents.models import DocumentFormat, NormalizedDocument, RawDocument
from resume_doctor.logging.logger import Log


@dataclass(frozen=True)
class NormalizationLimits:
    """Size gates and warning thresholds."""

    max_bytes: int = 1024 * 1024
    min_bytes: int = 100
    short_text_words: int = 200
    short_file_words: int = 100
    long_words: int = 1200
    max_pages: int = 3
    words_per_page: int = 500


class DocumentNormalizer:
    """Gates, dispatches and cleans a single document.

    Pure transform: the same input always yields an equal NormalizedDocument.
    """

    def __init__(
        self,
        *,
        extractors: dict[DocumentFormat, BaseExtractor],
        limits: NormalizationLimits | None = None,
    ) -> None:
        self._extractors = extractors
        self._limits = limits or NormalizationLimits()

    def normalize(self, document: RawDocument | str) -> NormalizedDocument:
        """Normalize a raw document or pasted text.

        Raises:
            ParseError: subclass describing why the document was rejected.
        """
        if isinstance(document, str):
            document = RawDocument.from_text(document)

        self._check_size(document)
        source_format = detect_format(document)
        extracted = self._extractor_for(source_format).extract(document.content)

        text = clean_text(
            extracted.text,
            repair_hyphenation=source_format is DocumentFormat.PDF,
        )
        word_count = count_words(text)
        if word_count == 0:
            raise EmptyDocumentError(
                "No readable text was found in the document. "
                "It may contain only images; try a text-based format."
            )
        page_count = math.ceil(word_count / self._limits.words_per_page)

        warnings = [
            *extracted.warnings,
            *self._content_warnings(text, word_count, page_count, source_format),
        ]
        Log.info(
            f"Normalized {source_format.value} document '{document.filename}': "
            f"{word_count} words, ~{page_count} pages, {len(warnings)} warnings"
        )
        return NormalizedDocument(
            text=text,
            word_count=word_count,
            page_count=page_count,
            warnings=warnings,
            source_format=source_format,
            filename=document.filename,
        )

    def _check_size(self, document: RawDocument) -> None:
        if document.size_bytes > self._limits.max_bytes:
            limit_mb = self._limits.max_bytes / (1024 * 1024)
            raise DocumentTooLargeError(
                f"File size must be under {limit_mb:g}MB. "
                "Please compress or trim your resume."
            )
        if document.size_bytes < self._limits.min_bytes:
            raise EmptyDocumentError(
                "File appears to be empty or too small to contain a resume."
            )

    def _extractor_for(self, source_format: DocumentFormat) -> BaseExtractor:
        extractor = self._extractors.get(source_format)
        if extractor is None:
            raise ValueError(f"No extractor registered for format '{source_format.value}'")
        return extractor

    def _content_warnings(
        self,
        text: str,
        word_count: int,
        page_count: int,
        source_format: DocumentFormat,
    ) -> list[str]:
        limits = self._limits
        warnings: list[str] = []

        short_threshold = (
            limits.short_text_words
            if source_format is DocumentFormat.TEXT
            else limits.short_file_words
        )
        if word_count < short_threshold:
            warnings.append(
                "Resume text is quite short. "
                "Consider adding more details for better analysis."
            )
        if word_count > limits.long_words:
            warnings.append(
                f"Resume is {word_count} words. "
                "Consider trimming to under 1000 words for optimal analysis."
            )
        if page_count > limits.max_pages:
            warnings.append(
                f"Resume appears to be {page_count} pages. "
                "Consider keeping it to 2-3 pages."
            )
        if "\\n" in text or "\\t" in text:
            warnings.append(
                "Text contains escape characters. Consider cleaning up the formatting."
            )
        if "\ufffd" in text:
            warnings.append(
                "Text may contain encoding issues. "
                "Consider re-copying or using a different source."
            )
        return warnings
