"""Decide which extractor handles a raw document.

The declared mime type wins when it is specific; generic or missing mime types
fall back to the filename extension.
"""

from pathlib import PurePath

from resume_doctor.documents.exceptions import LegacyFormatError, UnsupportedFormatError
from resume_doctor.documents.models import DocumentFormat, RawDocument

SUPPORTED_FORMATS_LABEL = "PDF, DOCX, Markdown (.md), or plain text (.txt)"

_LEGACY = "legacy"

_MIME_TYPES: dict[str, str] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "application/msword": _LEGACY,
    "text/markdown": DocumentFormat.MARKDOWN,
    "text/x-markdown": DocumentFormat.MARKDOWN,
    "text/plain": DocumentFormat.TEXT,
}

_EXTENSIONS: dict[str, str] = {
    "pdf": DocumentFormat.PDF,
    "docx": DocumentFormat.DOCX,
    "doc": _LEGACY,
    "md": DocumentFormat.MARKDOWN,
    "markdown": DocumentFormat.MARKDOWN,
    "txt": DocumentFormat.TEXT,
}


def file_extension(filename: str) -> str:
    return PurePath(filename.lower()).suffix.lstrip(".")


def detect_format(document: RawDocument) -> DocumentFormat:
    """Resolve the document format from its mime type and filename.

    Raises:
        LegacyFormatError: for legacy Word (.doc) files.
        UnsupportedFormatError: when neither mime type nor extension is known.
    """
    mime_type = document.mime_type.strip().lower().split(";")[0].strip()
    extension = file_extension(document.filename)

    resolved = _MIME_TYPES.get(mime_type)
    if resolved is None:
        resolved = _EXTENSIONS.get(extension)
    if resolved is None and mime_type.startswith("text/"):
        resolved = DocumentFormat.TEXT
    if resolved is None and not mime_type and not extension:
        resolved = DocumentFormat.TEXT

    if resolved == _LEGACY:
        raise LegacyFormatError(
            "Legacy .doc files are not supported. Please save as .docx or export as PDF."
        )
    if resolved is None:
        raise UnsupportedFormatError(
            f'Unsupported file type: "{extension or mime_type}". '
            f"Please use {SUPPORTED_FORMATS_LABEL}."
        )
    return DocumentFormat(resolved)
