import io
import zipfile

import docx
from docx.opc.exceptions import PackageNotFoundError

from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.exceptions import (
    CorruptedDocumentError,
    EncryptedDocumentError,
    LegacyFormatError,
    ParseError,
)
from resume_doctor.documents.models import ExtractedText

# Encrypted OOXML files and legacy .doc files are both OLE compound documents.
_OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
_ENCRYPTED_PACKAGE_STREAM = "EncryptedPackage".encode("utf-16-le")


class DocxExtractor(BaseExtractor):
    """Extracts paragraph and table text from Word documents via python-docx."""

    def extract(self, content: bytes) -> ExtractedText:
        self._reject_ole_container(content)
        try:
            document = docx.Document(io.BytesIO(content))
        except (zipfile.BadZipFile, PackageNotFoundError, KeyError, ValueError) as exc:
            raise CorruptedDocumentError(
                "Invalid DOCX file. The file may be corrupted or not a valid Word document."
            ) from exc
        except Exception as exc:
            raise ParseError(f"Failed to parse DOCX: {exc}") from exc

        blocks = [p.text for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append(" | ".join(dict.fromkeys(cells)))
        text = "\n".join(blocks)

        warnings: list[str] = []
        if document.tables or document.inline_shapes:
            warnings.append(
                "Document contains complex formatting that may affect text extraction."
            )
        if len(text.strip()) < 200 and len(content) > 50_000:
            warnings.append(
                "Document may contain mostly images or tables. Consider a text-heavy format."
            )
        return ExtractedText(text=text, warnings=warnings)

    @staticmethod
    def _reject_ole_container(content: bytes) -> None:
        if not content.startswith(_OLE_SIGNATURE):
            return
        if _ENCRYPTED_PACKAGE_STREAM in content:
            raise EncryptedDocumentError(
                "Password-protected documents are not supported. "
                "Please provide an unprotected version."
            )
        raise LegacyFormatError(
            "Legacy .doc files are not supported. Please save as .docx or export as PDF."
        )
