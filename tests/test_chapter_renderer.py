import pytest

from chapter_renderer import STYLESHEET_HREF, render_chapter, render_chapters, render_paragraphs
from conftest import NS, parse_xml
from models import Chapter, ChapterError
from slugs import ChapterSlug, chapter_slugs


def _render(chapter, lang="en"):
    return render_chapter(chapter, lang, ChapterSlug(id="x", stem="x"))


def test_render_title_and_paragraphs_in_order():
    doc = _render(Chapter("Title", ("para one.", "para two.")))
    root = parse_xml(doc.markup)
    assert root.find("x:body/x:h1", NS).text == "Title"
    assert [p.text for p in root.findall("x:body/x:p", NS)] == ["para one.", "para two."]
    assert doc.title == "Title"
    assert doc.slug == "x"


def test_paragraphs_joined_by_single_newline():
    assert render_paragraphs(["a", "b", "c"]) == "<p>a</p>\n<p>b</p>\n<p>c</p>"


def test_title_only_chapter_has_no_paragraphs():
    doc = _render(Chapter("Lonely"))
    assert "<p>" not in doc.markup
    assert doc.markup.count("<h1>Lonely</h1>") == 1
    root = parse_xml(doc.markup)
    assert root.findall(".//x:p", NS) == []


def test_language_declared_on_root():
    root = parse_xml(_render(Chapter("Titre"), lang="fr").markup)
    assert root.get("lang") == "fr"
    assert root.get("{http://www.w3.org/XML/1998/namespace}lang") == "fr"


def test_stylesheet_link():
    root = parse_xml(_render(Chapter("T")).markup)
    link = root.find("x:head/x:link", NS)
    assert link.get("href") == STYLESHEET_HREF == "styles.css"


def test_text_is_escaped():
    doc = _render(Chapter("Q & A <live>", ('She said "5 < 6 & 7 > 2".',)))
    root = parse_xml(doc.markup)
    assert root.find("x:body/x:h1", NS).text == "Q & A <live>"
    assert root.find("x:body/x:p", NS).text == 'She said "5 < 6 & 7 > 2".'


def test_render_chapters_keeps_order():
    chapters = [Chapter("B", ("b",)), Chapter("A", ("a",))]
    docs = render_chapters(chapters, "en", chapter_slugs(chapters))
    assert [d.title for d in docs] == ["B", "A"]
    assert [d.slug for d in docs] == ["b", "a"]


def test_chapter_without_elements_is_rejected():
    with pytest.raises(ChapterError):
        Chapter.from_items([])


def test_from_items_splits_title_and_paragraphs():
    chapter = Chapter.from_items(["Title", "one", "two"])
    assert chapter.title == "Title"
    assert chapter.paragraphs == ("one", "two")
    assert Chapter.from_items(["Only"]).paragraphs == ()
