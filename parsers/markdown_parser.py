"""parsers/markdown_parser.py — Parse Markdown files into chapters."""

import re
from pathlib import Path

from models import BookMetadata, Chapter
from parsers.base import ParseResult, split_paragraphs


def _extract_frontmatter(content: str) -> tuple[dict, str]:
    """Extract YAML frontmatter (--- delimited) if present. Returns (meta, body)."""
    m = re.match(r"^---\s*\n(.*?)\n---\s*\n", content, re.DOTALL)
    if not m:
        return {}, content
    meta = {}
    for line in m.group(1).split("\n"):
        if ":" in line:
            key, _, value = line.partition(":")
            meta[key.strip().lower()] = value.strip().strip("\"'")
    return meta, content[m.end():]


def _split_by_headings(content: str) -> list[tuple[str, str]]:
    """
    Split markdown by # or ## headings.
    Returns list of (heading_text, body_text).
    Falls back to treating the whole document as one chapter.
    """
    heading_pattern = re.compile(r"^(#{1,2})\s+(.+)$", re.MULTILINE)
    matches = list(heading_pattern.finditer(content))

    if not matches:
        return [("Chapter 1", content.strip())]

    # Use the shallowest heading level present
    split_level = min(len(m.group(1)) for m in matches)
    filtered = [(m.start(), m.end(), m.group(2).strip()) for m in matches if len(m.group(1)) == split_level]

    result = []
    for i, (_, heading_end, title) in enumerate(filtered):
        end = filtered[i + 1][0] if i + 1 < len(filtered) else len(content)
        result.append((title, content[heading_end:end].strip()))

    return result


def _strip_inline_markup(text: str) -> str:
    """Drop emphasis markers and reduce [label](url) links to their label."""
    text = re.sub(r"\[([^\]]+)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"(\*\*|__)(.+?)\1", r"\2", text)
    return re.sub(r"(?<!\w)([*_])(.+?)\1(?!\w)", r"\2", text)


def parse_markdown(file_path: Path) -> ParseResult:
    """Parse a Markdown file into chapters, splitting on headings."""
    file_path = Path(file_path)
    content = file_path.read_text(encoding="utf-8")
    frontmatter, body = _extract_frontmatter(content)

    title = frontmatter.get("title", file_path.stem.replace("_", " ").replace("-", " ").title())

    chapters = []
    for heading, text in _split_by_headings(body):
        paragraphs = [_strip_inline_markup(p) for p in split_paragraphs(text)]
        chapters.append(Chapter(title=heading, paragraphs=tuple(paragraphs)))

    metadata = BookMetadata(
        title=title,
        author=frontmatter.get("author", "Unknown"),
        publisher=frontmatter.get("publisher"),
        description=frontmatter.get("description"),
        lang=frontmatter.get("lang"),
        source_format="markdown",
    )
    return ParseResult(chapters=chapters, metadata=metadata)
