"""parsers/base.py — Shared parser utilities and types."""

import html
import re
from dataclasses import dataclass

from models import BookMetadata, Chapter


@dataclass
class ParseResult:
    """Standard return type for all parsers."""
    chapters: list[Chapter]
    metadata: BookMetadata


def clean_text(text: str) -> str:
    """Unescape entities, drop soft hyphens and collapse runs of spaces."""
    text = html.unescape(text)
    text = text.replace("\u00ad", "")
    text = text.replace("\r\n", "\n")
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def split_paragraphs(text: str) -> list[str]:
    """Blank-line separated blocks, each joined onto a single line."""
    blocks = re.split(r"\n\s*\n", clean_text(text))
    paragraphs = []
    for block in blocks:
        joined = " ".join(line for line in block.split("\n") if line)
        if joined:
            paragraphs.append(joined)
    return paragraphs
