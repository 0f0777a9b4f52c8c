"""navigation.py — toc.xhtml (EPUB 3 nav) and toc.ncx (EPUB 2 NCX) builders."""

from typing import Sequence

from chapter_renderer import xhtml_document, xml_attr, xml_text
from models import BookInfo, Chapter, PackageIdentity
from slugs import ChapterSlug

NAV_HREF = "toc.xhtml"
GENERATOR = "epubgen"


def nav_list_items(chapters: Sequence[Chapter], slugs: Sequence[ChapterSlug]) -> str:
    items = []
    for chapter, slug in zip(chapters, slugs):
        items.append(
            f'      <li class="table-of-content">\n'
            f'        <a href="{xml_attr(slug.href)}">{xml_text(chapter.title)}</a>\n'
            f"      </li>"
        )
    return "\n".join(items)


def ncx_nav_points(chapters: Sequence[Chapter], slugs: Sequence[ChapterSlug]) -> str:
    """
    One navPoint per chapter. Play order 0 belongs to the toc page, so
    chapter i gets playOrder i + 1 and the label "<i + 1>. <title>".
    """
    points = []
    for index, (chapter, slug) in enumerate(zip(chapters, slugs)):
        order = index + 1
        points.append(
            f'    <navPoint id="content_{index}_item_{index}" playOrder="{order}" class="chapter">\n'
            f"      <navLabel>\n"
            f"        <text>{order}. {xml_text(chapter.title)}</text>\n"
            f"      </navLabel>\n"
            f'      <content src="{xml_attr(slug.href)}"/>\n'
            f"    </navPoint>"
        )
    return "\n".join(points)


def build_nav_document(
    info: BookInfo,
    chapters: Sequence[Chapter],
    slugs: Sequence[ChapterSlug],
) -> str:
    body = (
        f'    <h1 class="h1">{xml_text(info.toc_title)}</h1>\n'
        f'    <nav id="toc" epub:type="toc">\n'
        f"      <ol>\n"
        f"{nav_list_items(chapters, slugs)}\n"
        f"      </ol>\n"
        f"    </nav>"
    )
    return xhtml_document(info.title, body, info.lang)


def build_ncx(
    info: BookInfo,
    identity: PackageIdentity,
    chapters: Sequence[Chapter],
    slugs: Sequence[ChapterSlug],
) -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1" xml:lang="{xml_attr(info.lang)}">
  <head>
    <meta name="dtb:uid" content="{xml_attr(identity.uid)}"/>
    <meta name="dtb:generator" content="{GENERATOR}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>
  <docTitle>
    <text>{xml_text(info.title)}</text>
  </docTitle>
  <docAuthor>
    <text>{xml_text(info.author)}</text>
  </docAuthor>
  <navMap>
    <navPoint id="toc" playOrder="0" class="chapter">
      <navLabel>
        <text>{xml_text(info.toc_title)}</text>
      </navLabel>
      <content src="{NAV_HREF}"/>
    </navPoint>
{ncx_nav_points(chapters, slugs)}
  </navMap>
</ncx>
"""
