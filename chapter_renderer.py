"""chapter_renderer.py — Turn one chapter into a standalone XHTML content document."""

import re
from typing import Sequence
from xml.sax.saxutils import escape

from models import Chapter, RenderedDocument
from slugs import ChapterSlug

STYLESHEET_HREF = "styles.css"

# Characters XML 1.0 forbids even when escaped.
_INVALID_XML_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

XHTML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{lang}" lang="{lang}">
  <head>
    <meta charset="UTF-8" />
    <title>{title}</title>
    <link rel="stylesheet" type="text/css" href="{css}" />
  </head>
  <body>
{body}
  </body>
</html>
"""


def xml_text(value: str) -> str:
    return escape(_INVALID_XML_RE.sub("", value))


def xml_attr(value: str) -> str:
    return escape(_INVALID_XML_RE.sub("", value), {'"': "&quot;"})


def xhtml_document(title: str, body: str, lang: str) -> str:
    """Wrap already-escaped body markup in the shared XHTML shell."""
    return XHTML_TEMPLATE.format(
        lang=xml_attr(lang),
        title=xml_text(title),
        css=STYLESHEET_HREF,
        body=body,
    )


def render_paragraphs(paragraphs: Sequence[str]) -> str:
    return "\n".join(f"<p>{xml_text(p)}</p>" for p in paragraphs)


def render_chapter(chapter: Chapter, lang: str, slug: ChapterSlug) -> RenderedDocument:
    body = f"    <h1>{xml_text(chapter.title)}</h1>"
    if chapter.paragraphs:
        body += "\n" + render_paragraphs(chapter.paragraphs)
    return RenderedDocument(
        title=chapter.title,
        slug=slug.stem,
        markup=xhtml_document(chapter.title, body, lang),
    )


def render_chapters(
    chapters: Sequence[Chapter],
    lang: str,
    slugs: Sequence[ChapterSlug],
) -> list[RenderedDocument]:
    """Render every chapter once, preserving order."""
    return [render_chapter(ch, lang, slug) for ch, slug in zip(chapters, slugs)]
