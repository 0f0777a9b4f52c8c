"""package_document.py — Build OEBPS/content.opf: metadata, manifest and spine."""

from typing import Sequence

from chapter_renderer import xml_attr, xml_text
from models import BookInfo, PackageIdentity
from navigation import GENERATOR
from slugs import ChapterSlug

XHTML_MEDIA_TYPE = "application/xhtml+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
CSS_MEDIA_TYPE = "text/css"

FIXED_ITEMS = [
    # (id, href, media-type, properties)
    ("ncx", "toc.ncx", NCX_MEDIA_TYPE, None),
    ("toc", "toc.xhtml", XHTML_MEDIA_TYPE, "nav"),
    ("css", "styles.css", CSS_MEDIA_TYPE, None),
]


def _item(item_id: str, href: str, media_type: str, properties: str | None = None) -> str:
    props = f' properties="{properties}"' if properties else ""
    return f'<item id="{xml_attr(item_id)}" href="{xml_attr(href)}" media-type="{media_type}"{props} />'


def build_manifest(slugs: Sequence[ChapterSlug]) -> str:
    """Fixed entries (ncx, nav, css) first, then one item per chapter in order."""
    lines = [_item(*fixed) for fixed in FIXED_ITEMS]
    lines += [_item(slug.id, slug.href, XHTML_MEDIA_TYPE) for slug in slugs]
    return "\n    ".join(lines)


def build_spine(slugs: Sequence[ChapterSlug]) -> str:
    refs = ['<itemref idref="toc" />']
    refs += [f'<itemref idref="{xml_attr(slug.id)}" />' for slug in slugs]
    return '<spine toc="ncx">\n    ' + "\n    ".join(refs) + "\n  </spine>"


def build_package_document(
    info: BookInfo,
    identity: PackageIdentity,
    manifest: str,
    spine: str = "",
) -> str:
    """
    Render content.opf. Every BookInfo field is escaped on the way in; the
    manifest and spine are trusted markup from build_manifest/build_spine.
    """
    lang = xml_text(info.lang)
    title = xml_text(info.title)
    author = xml_text(info.author)
    publisher = xml_text(info.publisher)
    date = identity.modified
    year = identity.timestamp.year
    description = (
        f"\n    <dc:description>{xml_text(info.description)}</dc:description>"
        if info.description else ""
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package
  xmlns="http://www.idpf.org/2007/opf"
  version="{info.version}.0"
  unique-identifier="BookId"
  xmlns:dc="http://purl.org/dc/elements/1.1/"
  xmlns:dcterms="http://purl.org/dc/terms/"
  xml:lang="{xml_attr(info.lang)}"
  xmlns:media="http://www.idpf.org/epub/vocab/overlays/#"
  prefix="ibooks: http://vocabulary.itunes.apple.com/rdf/ibooks/vocabulary-extensions-1.0/">

  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:identifier id="BookId">{xml_text(identity.uid)}</dc:identifier>
    <meta refines="#BookId" property="identifier-type" scheme="onix:codelist5">22</meta>
    <meta property="dcterms:identifier" id="meta-identifier">BookId</meta>
    <dc:title>{title}</dc:title>
    <meta property="dcterms:title" id="meta-title">{title}</meta>
    <dc:language>{lang}</dc:language>
    <meta property="dcterms:language" id="meta-language">{lang}</meta>
    <meta property="dcterms:modified">{date}</meta>
    <dc:creator id="creator">{author}</dc:creator>
    <meta refines="#creator" property="file-as">{author}</meta>
    <meta property="dcterms:publisher">{publisher}</meta>
    <dc:publisher>{publisher}</dc:publisher>
    <meta property="dcterms:date">{date}</meta>
    <dc:date>{date}</dc:date>{description}
    <meta property="dcterms:rights">All rights reserved</meta>
    <dc:rights>Copyright &#x00A9; {year} by {publisher}</dc:rights>
    <meta name="generator" content="{GENERATOR}" />
    <meta property="ibooks:specified-fonts">false</meta>
  </metadata>
  <manifest>
    {manifest}
  </manifest>
  {spine}
</package>
"""
