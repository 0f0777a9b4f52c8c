import pytest

from epub_builder import assemble, write_epub
from models import BookInfo, Chapter
from parsers import SUPPORTED_EXTENSIONS, parse_file
from parsers.base import clean_text, split_paragraphs

MARKDOWN = """---
title: "My Book"
author: Jane Doe
lang: fr
publisher: Acme
---
# One

First para
continues here.

Second *para* with a [link](http://example.com).

# Two

Only **one** para.
"""


def test_split_paragraphs():
    text = "first line\nsecond line\n\n\n  third   para  \n"
    assert split_paragraphs(text) == ["first line second line", "third para"]


def test_clean_text():
    assert clean_text("caf&eacute;  soft\u00adhyphen\r\nnext") == "café softhyphen\nnext"


def test_markdown(tmp_path):
    path = tmp_path / "book.md"
    path.write_text(MARKDOWN, encoding="utf-8")
    result = parse_file(path)

    assert result.metadata.title == "My Book"
    assert result.metadata.author == "Jane Doe"
    assert result.metadata.lang == "fr"
    assert result.metadata.publisher == "Acme"
    assert result.metadata.source_format == "markdown"
    assert result.chapters == [
        Chapter("One", ("First para continues here.", "Second para with a link.")),
        Chapter("Two", ("Only one para.",)),
    ]


def test_markdown_without_headings(tmp_path):
    path = tmp_path / "short_story.md"
    path.write_text("Just text.\n\nMore text.\n", encoding="utf-8")
    result = parse_file(path)
    assert result.metadata.title == "Short Story"
    assert result.metadata.author == "Unknown"
    assert result.chapters == [Chapter("Chapter 1", ("Just text.", "More text."))]


def test_markdown_splits_on_shallowest_level(tmp_path):
    path = tmp_path / "book.md"
    path.write_text("## A\n\na\n\n## B\n\nb\n", encoding="utf-8")
    assert [c.title for c in parse_file(path).chapters] == ["A", "B"]


def test_text_file(tmp_path):
    path = tmp_path / "field-notes.txt"
    path.write_text("Day one.\n\nDay two.\n", encoding="utf-8")
    result = parse_file(path)
    assert result.metadata.title == "Field Notes"
    assert result.metadata.source_format == "text"
    assert result.chapters == [Chapter("Field Notes", ("Day one.", "Day two."))]


def test_epub_round_trip(tmp_path):
    info = BookInfo(title="Round Trip", author="A. Writer", publisher="Acme", lang="en",
                    description="Back and forth")
    chapters = [
        Chapter("Arrival", ("We came.", "We saw.")),
        Chapter("Departure", ("We left.",)),
        Chapter("Coda"),
    ]
    path = write_epub(assemble(info, chapters), info.title, tmp_path)

    result = parse_file(path)
    assert result.chapters == chapters
    assert result.metadata.title == "Round Trip"
    assert result.metadata.author == "A. Writer"
    assert result.metadata.publisher == "Acme"
    assert result.metadata.description == "Back and forth"
    assert result.metadata.lang == "en"
    assert result.metadata.source_format == "epub"


def test_epub_requires_zip(tmp_path):
    path = tmp_path / "fake.epub"
    path.write_text("not a zip")
    with pytest.raises(ValueError, match="Not a packed EPUB"):
        parse_file(path)


def test_unsupported_extension(tmp_path):
    with pytest.raises(ValueError, match="Unsupported file format"):
        parse_file(tmp_path / "book.pdf")
    assert ".md" in SUPPORTED_EXTENSIONS
