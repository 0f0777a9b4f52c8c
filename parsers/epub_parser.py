"""parsers/epub_parser.py — Read chapters and metadata back out of a packed EPUB."""

import posixpath
import zipfile
from pathlib import Path

from bs4 import BeautifulSoup

from models import BookMetadata, Chapter
from parsers.base import ParseResult, clean_text

CONTAINER_PATH = "META-INF/container.xml"


def _soup(zf: zipfile.ZipFile, name: str) -> BeautifulSoup:
    try:
        content = zf.read(name)
    except KeyError:
        raise FileNotFoundError(f"Missing archive entry: {name}") from None
    return BeautifulSoup(content, features="lxml-xml")


def _find_opf(zf: zipfile.ZipFile) -> str:
    """Locate the package document through META-INF/container.xml."""
    rootfile = _soup(zf, CONTAINER_PATH).find("rootfile")
    if rootfile is None or not rootfile.get("full-path"):
        raise ValueError("container.xml does not declare a rootfile")
    return rootfile["full-path"]


def _text_of(opf: BeautifulSoup, tag: str) -> str | None:
    node = opf.find(tag)
    if node is None:
        return None
    text = node.get_text(strip=True)
    return text or None


def _spine_hrefs(opf: BeautifulSoup) -> list[str]:
    """Content documents in reading order, skipping the nav document."""
    items = {}
    for item in opf.find_all("item"):
        items[item.get("id")] = item
    hrefs = []
    for ref in opf.find_all("itemref"):
        item = items.get(ref.get("idref"))
        if item is None or "nav" in (item.get("properties") or "").split():
            continue
        if item.get("media-type") == "application/xhtml+xml":
            hrefs.append(item["href"])
    return hrefs


def _extract_chapter(zf: zipfile.ZipFile, name: str) -> Chapter | None:
    soup = _soup(zf, name)
    body = soup.find("body") or soup
    heading = body.find(["h1", "h2"])
    title = clean_text(heading.get_text(" ", strip=True)) if heading else ""
    if not title:
        title_tag = soup.find("title")
        title = clean_text(title_tag.get_text(strip=True)) if title_tag else ""
    paragraphs = []
    for tag in body.find_all("p"):
        text = clean_text(tag.get_text(" ", strip=True))
        if text:
            paragraphs.append(text)
    if not title and not paragraphs:
        return None
    return Chapter(title=title or posixpath.splitext(posixpath.basename(name))[0],
                   paragraphs=tuple(paragraphs))


def parse_epub(epub_path: Path) -> ParseResult:
    """Main entry point. Returns ParseResult with chapters and metadata."""
    epub_path = Path(epub_path)
    if not zipfile.is_zipfile(epub_path):
        raise ValueError(f"Not a packed EPUB: {epub_path}")

    with zipfile.ZipFile(epub_path) as zf:
        opf_path = _find_opf(zf)
        opf = _soup(zf, opf_path)
        base = posixpath.dirname(opf_path)

        chapters = []
        for href in _spine_hrefs(opf):
            chapter = _extract_chapter(zf, posixpath.normpath(posixpath.join(base, href)))
            if chapter is not None:
                chapters.append(chapter)

    metadata = BookMetadata(
        title=_text_of(opf, "title") or epub_path.stem,
        author=_text_of(opf, "creator") or "Unknown",
        publisher=_text_of(opf, "publisher"),
        description=_text_of(opf, "description"),
        lang=_text_of(opf, "language"),
        source_format="epub",
    )
    return ParseResult(chapters=chapters, metadata=metadata)
