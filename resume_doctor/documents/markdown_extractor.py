"""Markdown résumés are reduced to plain text so markup is not counted as words."""

from collections.abc import Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.models import ExtractedText

_MAX_LINKS = 10
_MAX_CODE_BLOCKS = 3

_BREAKS = {"softbreak", "hardbreak"}
_EMPHASIS = {"em_open", "em_close", "strong_open", "strong_close"}

_parser = MarkdownIt("commonmark").enable(["table", "strikethrough"])


def _inline_text(children: Sequence[Token]) -> str:
    parts: list[str] = []
    for child in children:
        if child.type in ("text", "code_inline", "image"):
            parts.append(child.content)
        elif child.type in _BREAKS:
            parts.append("\n")
        elif child.type in _EMPHASIS and "_" in child.markup:
            # Underscore pairs stay literal so names like __init__ survive.
            parts.append(child.markup)
    return "".join(parts)


def _text_blocks(tokens: Sequence[Token]) -> list[tuple[list[int] | None, str]]:
    """Plain text of each block with the source lines it spans."""
    blocks: list[tuple[list[int] | None, str]] = []
    table_map: list[int] | None = None
    rows: list[str] = []
    row: list[str] | None = None
    for token in tokens:
        if token.type == "table_open":
            table_map, rows = token.map, []
        elif token.type == "table_close":
            blocks.append((table_map, "\n".join(rows)))
        elif token.type == "tr_open":
            row = []
        elif token.type == "tr_close" and row is not None:
            rows.append(" ".join(cell for cell in row if cell))
            row = None
        elif token.type == "inline":
            text = _inline_text(token.children or [])
            if row is not None:
                row.append(text.strip())
            else:
                blocks.append((token.map, text))
        elif token.type in ("fence", "code_block"):
            blocks.append((token.map, token.content.rstrip("\n")))
    return blocks


def _render(tokens: Sequence[Token]) -> str:
    parts: list[str] = []
    previous_end: int | None = None
    for line_map, text in _text_blocks(tokens):
        if not text.strip():
            continue
        if previous_end is not None:
            starts_later = line_map is not None and line_map[0] > previous_end
            parts.append("\n\n" if starts_later else "\n")
        parts.append(text)
        if line_map is not None:
            previous_end = line_map[1]
    return "".join(parts)


def markdown_to_text(source: str) -> str:
    return _render(_parser.parse(source))


class MarkdownExtractor(BaseExtractor):
    """Strips Markdown syntax and flags link- or code-heavy résumés."""

    def extract(self, content: bytes) -> ExtractedText:
        source = content.decode("utf-8-sig", errors="replace")
        tokens = _parser.parse(source)

        links = sum(
            1
            for token in tokens
            if token.type == "inline"
            for child in token.children or []
            if child.type == "link_open"
        )
        code_blocks = sum(1 for token in tokens if token.type == "fence")

        warnings: list[str] = []
        if links > _MAX_LINKS:
            warnings.append(
                "Resume contains many links. Ensure they are relevant and accessible."
            )
        if code_blocks > _MAX_CODE_BLOCKS:
            warnings.append(
                "Resume contains multiple code blocks. Consider condensing technical examples."
            )
        return ExtractedText(text=_render(tokens), warnings=warnings)
