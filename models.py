"""models.py — Shared data types for epubgen."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Sequence


class ChapterError(ValueError):
    """A chapter sequence without a title."""


@dataclass(frozen=True)
class BookInfo:
    title: str
    author: str
    lang: str = "en"
    publisher: str = "Unknown"
    description: str = ""
    toc_title: str = "Table of Contents"
    fonts: tuple[str, ...] = ()
    css: str | None = None
    version: int = 3                # EPUB major version, rendered as "3.0"


@dataclass(frozen=True)
class Chapter:
    title: str
    paragraphs: tuple[str, ...] = ()

    @classmethod
    def from_items(cls, items: Sequence[str]) -> "Chapter":
        """Build from ["Title", "para one", ...]; element 0 is the title."""
        if not items:
            raise ChapterError("Chapter has no elements; a title is required")
        return cls(title=items[0], paragraphs=tuple(items[1:]))


@dataclass(frozen=True)
class PackageIdentity:
    uid: str                        # "urn:uuid:..."
    timestamp: datetime

    @classmethod
    def generate(
        cls,
        clock: Callable[[], datetime] | None = None,
        uid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> "PackageIdentity":
        """Fresh identity for one build. Pass clock/uid_factory to pin the output."""
        now = clock() if clock else datetime.now(timezone.utc)
        return cls(uid=f"urn:uuid:{uid_factory()}", timestamp=now)

    @property
    def modified(self) -> str:
        """Timestamp as EPUB wants it for dcterms:modified (UTC, no fraction)."""
        ts = self.timestamp
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc)
        return ts.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class RenderedDocument:
    title: str
    slug: str        # underscore-separated file stem
    markup: str


@dataclass
class BookMetadata:
    """Metadata recovered from an input file; any field may be missing."""
    title: str
    author: str = "Unknown"
    publisher: str | None = None
    description: str | None = None
    lang: str | None = None
    source_format: str = ""         # "markdown", "text", "epub"
