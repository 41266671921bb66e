"""Shared text-cleaning stage applied to every extractor's output."""

import re

_CHARACTER_MAP = str.maketrans(
    {
        "\u00a0": " ",  # no-break space
        "\u2007": " ",
        "\u2009": " ",
        "\u202f": " ",
        "\u200b": "",  # zero-width space
        "\ufeff": "",  # byte order mark
        "\u201c": '"',
        "\u201d": '"',
        "\u201e": '"',
        "\u2033": '"',
        "\u2018": "'",
        "\u2019": "'",
        "\u201a": "'",
        "\u2032": "'",
        "\u2012": "-",
        "\u2013": "-",
        "\u2014": "-",
        "\u2015": "-",
        "\u2212": "-",
        "\u25cf": "\u2022",
        "\u25aa": "\u2022",
        "\u25e6": "\u2022",
        "\u2023": "\u2022",
        "\u2219": "\u2022",
        "\u2043": "\u2022",
        "\u25a0": "\u2022",
        "\u25ba": "\u2022",
        "\uf0b7": "\u2022",  # Symbol-font bullet from Word exports
    }
)

_LINE_ENDINGS_RE = re.compile(r"\r\n?")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\f\v]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" *\n *")
_HYPHENATED_BREAK_RE = re.compile(r"([^\W\d_])-[ \t]*\n[ \t]*([^\W\d_])")
_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str, *, repair_hyphenation: bool = False) -> str:
    """Normalize whitespace and typography of extracted text.

    Args:
        text: Raw text from an extractor.
        repair_hyphenation: Join words split across lines with a trailing
            hyphen (``word-\\nbreak`` -> ``wordbreak``). Used for PDF text.

    Returns:
        Text with ``\\n`` line endings, single spaces, at most one blank line
        between paragraphs, and ASCII quotes and dashes.
    """
    cleaned = _LINE_ENDINGS_RE.sub("\n", text)
    if repair_hyphenation:
        # Before dash folding, so only a real hyphen between letters joins lines.
        cleaned = _HYPHENATED_BREAK_RE.sub(r"\1\2", cleaned)
    cleaned = cleaned.translate(_CHARACTER_MAP)
    cleaned = _HORIZONTAL_SPACE_RE.sub(" ", cleaned)
    cleaned = _SPACE_AROUND_NEWLINE_RE.sub("\n", cleaned)
    cleaned = _EXCESS_BLANK_LINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()


def count_words(text: str) -> int:
    """Count whitespace-delimited, non-empty tokens."""
    return len([token for token in _WHITESPACE_RE.split(text) if token])
