from enum import Enum


class ParseErrorKind(str, Enum):
    TOO_LARGE = "too_large"
    EMPTY = "empty"
    UNSUPPORTED_FORMAT = "unsupported_format"
    CORRUPTED = "corrupted"
    ENCRYPTED = "encrypted"
    LEGACY_FORMAT = "legacy_format"
    EXTRACTION_FAILED = "extraction_failed"


class ParseError(Exception):
    """Raised when a document cannot be turned into text.

    The message is meant to be shown to the user as-is.
    """

    kind: ParseErrorKind = ParseErrorKind.EXTRACTION_FAILED


class DocumentTooLargeError(ParseError):
    kind = ParseErrorKind.TOO_LARGE


class EmptyDocumentError(ParseError):
    kind = ParseErrorKind.EMPTY


class UnsupportedFormatError(ParseError):
    kind = ParseErrorKind.UNSUPPORTED_FORMAT


class CorruptedDocumentError(ParseError):
    kind = ParseErrorKind.CORRUPTED


class EncryptedDocumentError(ParseError):
    kind = ParseErrorKind.ENCRYPTED


class LegacyFormatError(ParseError):
    kind = ParseErrorKind.LEGACY_FORMAT
