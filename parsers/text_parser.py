"""parsers/text_parser.py — A plain text file becomes a single chapter."""

from pathlib import Path

from models import BookMetadata, Chapter
from parsers.base import ParseResult, split_paragraphs


def parse_text(file_path: Path) -> ParseResult:
    file_path = Path(file_path)
    title = file_path.stem.replace("_", " ").replace("-", " ").title()
    paragraphs = split_paragraphs(file_path.read_text(encoding="utf-8"))
    chapter = Chapter(title=title, paragraphs=tuple(paragraphs))
    return ParseResult(
        chapters=[chapter],
        metadata=BookMetadata(title=title, source_format="text"),
    )
