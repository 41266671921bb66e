from resume_doctor.config.settings import Settings
from resume_doctor.documents.docx_extractor import DocxExtractor
from resume_doctor.documents.markdown_extractor import MarkdownExtractor
from resume_doctor.documents.models import DocumentFormat
from resume_doctor.documents.normalizer import DocumentNormalizer, NormalizationLimits
from resume_doctor.documents.pdf.factory import PdfExtractorFactory
from resume_doctor.documents.text_extractor import TextExtractor


class DocumentNormalizerFactory:
    """Creates a normalizer wired with one extractor per supported format."""

    @classmethod
    def create(cls, settings: Settings) -> DocumentNormalizer:
        return DocumentNormalizer(
            extractors={
                DocumentFormat.PDF: PdfExtractorFactory.create(settings),
                DocumentFormat.DOCX: DocxExtractor(),
                DocumentFormat.MARKDOWN: MarkdownExtractor(),
                DocumentFormat.TEXT: TextExtractor(),
            },
            limits=NormalizationLimits(
                max_bytes=settings.max_document_bytes,
                min_bytes=settings.min_document_bytes,
                short_text_words=settings.short_text_word_threshold,
                short_file_words=settings.short_file_word_threshold,
                long_words=settings.long_word_threshold,
                max_pages=settings.max_page_estimate,
                words_per_page=settings.words_per_page,
            ),
        )
