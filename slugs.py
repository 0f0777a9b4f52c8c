"""slugs.py — File- and XML-safe tokens derived from chapter titles."""

import re
import unicodedata
from dataclasses import dataclass
from typing import Sequence

from models import Chapter

_SLUG_RE = re.compile(r"[^a-z0-9]+")
FALLBACK_SLUG = "chapter"
CONTENT_EXT = ".xhtml"


def slugify(title: str, separator: str = "-") -> str:
    """Lowercase ASCII token; runs of anything else collapse to one separator."""
    t = unicodedata.normalize("NFKD", title)
    t = t.encode("ascii", "ignore").decode("ascii").lower()
    t = _SLUG_RE.sub(separator, t).strip(separator)
    return t or FALLBACK_SLUG


def element_id(title: str) -> str:
    """Default-separator slug that is also a valid XML id."""
    sid = slugify(title)
    return f"ch-{sid}" if sid[0].isdigit() else sid


@dataclass(frozen=True)
class ChapterSlug:
    id: str      # manifest item id
    stem: str    # file name without extension

    @property
    def href(self) -> str:
        return f"{self.stem}{CONTENT_EXT}"


def _ensure_unique(raw: str, separator: str, seen: set[str]) -> str:
    if raw not in seen:
        seen.add(raw)
        return raw
    n = 2
    while f"{raw}{separator}{n}" in seen:
        n += 1
    unique = f"{raw}{separator}{n}"
    seen.add(unique)
    return unique


def chapter_slugs(chapters: Sequence[Chapter]) -> list[ChapterSlug]:
    """
    Slugs for every chapter, in chapter order.
    Repeated titles get a positional suffix ("intro", "intro-2", ...) so no
    two chapters share an id or a file name.
    """
    # Names already used by the fixed manifest items and toc.xhtml.
    seen_ids = {"ncx", "toc", "css"}
    seen_stems = {"toc"}

    result = []
    for chapter in chapters:
        result.append(ChapterSlug(
            id=_ensure_unique(element_id(chapter.title), "-", seen_ids),
            stem=_ensure_unique(slugify(chapter.title, separator="_"), "_", seen_stems),
        ))
    return result
