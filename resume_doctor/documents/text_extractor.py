from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.models import ExtractedText


class TextExtractor(BaseExtractor):
    """Decodes plain text files as UTF-8.

    Undecodable bytes become U+FFFD so the encoding warning can flag them.
    """

    def extract(self, content: bytes) -> ExtractedText:
        return ExtractedText(text=content.decode("utf-8-sig", errors="replace"))
