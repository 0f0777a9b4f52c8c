"""epub_builder.py — Assemble rendered documents into a finished EPUB archive."""

import zipfile
from pathlib import Path
from typing import Sequence

from tqdm import tqdm

from archive import ArchiveError, ArchiveWriter
from chapter_renderer import render_chapters
from models import BookInfo, Chapter, PackageIdentity
from navigation import build_nav_document, build_ncx
from package_document import build_manifest, build_package_document, build_spine
from slugs import chapter_slugs

MIMETYPE = b"application/epub+zip"

CONTAINER_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


# Leaves room for ".epub" under the common 255-byte file name limit.
MAX_FILENAME_BYTES = 200


class BuildError(RuntimeError):
    """The archive could not be produced; no partial output exists."""


def _coerce_chapters(chapters: Sequence[Chapter | Sequence[str]]) -> list[Chapter]:
    return [ch if isinstance(ch, Chapter) else Chapter.from_items(ch) for ch in chapters]


def _check_info(info: BookInfo) -> None:
    for name in ("title", "lang"):
        if not getattr(info, name, "").strip():
            raise ValueError(f"BookInfo.{name} is required")


def assemble(
    info: BookInfo,
    chapters: Sequence[Chapter | Sequence[str]],
    identity: PackageIdentity | None = None,
    show_progress: bool = False,
) -> bytes:
    """
    Build the complete EPUB and return its bytes.

    Entry order is fixed: mimetype (stored, never compressed) must come first,
    then container.xml, content.opf, toc.ncx, toc.xhtml, the chapters in
    order, and styles.css (always present, possibly empty).
    Raises ChapterError/ValueError for bad input and BuildError if the
    archive cannot be written.
    """
    _check_info(info)
    book = _coerce_chapters(chapters)
    if not book:
        raise ValueError("At least one chapter is required")

    identity = identity or PackageIdentity.generate()
    slugs = chapter_slugs(book)
    documents = render_chapters(book, info.lang, slugs)

    package = build_package_document(info, identity, build_manifest(slugs), build_spine(slugs))
    ncx = build_ncx(info, identity, book, slugs)
    nav = build_nav_document(info, book, slugs)

    writer = ArchiveWriter.open(identity.timestamp)
    try:
        with writer.start_entry("mimetype", zipfile.ZIP_STORED) as handle:
            writer.write(handle, MIMETYPE)

        writer.add_directory("META-INF/")
        with writer.start_entry("META-INF/container.xml") as handle:
            writer.write(handle, CONTAINER_XML)

        writer.add_directory("OEBPS/")
        for name, text in (
            ("OEBPS/content.opf", package),
            ("OEBPS/toc.ncx", ncx),
            ("OEBPS/toc.xhtml", nav),
        ):
            with writer.start_entry(name) as handle:
                writer.write(handle, text.encode("utf-8"))

        for doc, slug in tqdm(
            list(zip(documents, slugs)), desc="  Writing chapters",
            unit="chapter", disable=not show_progress,
        ):
            with writer.start_entry(f"OEBPS/{slug.href}") as handle:
                writer.write(handle, doc.markup.encode("utf-8"))

        with writer.start_entry("OEBPS/styles.css") as handle:
            writer.write(handle, (info.css or "").encode("utf-8"))

        return writer.finish()
    except ArchiveError as e:
        writer.abort()
        raise BuildError(f"Failed to assemble '{info.title}': {e}") from e


def safe_filename(title: str) -> str:
    """
    Keep letters, digits, spaces, dashes and underscores; replace the rest
    with "_". Long titles are cut to MAX_FILENAME_BYTES of UTF-8.
    """
    name = "".join(
        c if c.isalnum() or c in (" ", "-", "_") else "_"
        for c in title
    )
    name = name.encode("utf-8")[:MAX_FILENAME_BYTES].decode("utf-8", "ignore")
    return name.strip() or "book"


def write_epub(data: bytes, title: str, output_dir: Path = Path(".")) -> Path:
    """Persist archive bytes as <output_dir>/<safe title>.epub. OS errors propagate."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{safe_filename(title)}.epub"
    output_path.write_bytes(data)
    print(f"  EPUB written: {output_path} ({len(data):,} bytes)")
    return output_path


class EpubBuilder:
    """Holds one book's input; archive() builds bytes, run() also writes them."""

    def __init__(self, info: BookInfo, chapters: Sequence[Chapter | Sequence[str]]):
        self.info = info
        self.chapters = _coerce_chapters(chapters)

    def archive(self, identity: PackageIdentity | None = None, show_progress: bool = False) -> bytes:
        return assemble(self.info, self.chapters, identity=identity, show_progress=show_progress)

    def run(self, output_dir: Path = Path("."), show_progress: bool = False) -> Path:
        return write_epub(self.archive(show_progress=show_progress), self.info.title, output_dir)
