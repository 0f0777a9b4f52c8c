#!/usr/bin/env python3
"""
epubgen — Package Markdown, text or EPUB sources into an EPUB 3 book.

Quick start:
  1. python epubgen.py novel.md --dry-run
  2. python epubgen.py novel.md --author "Jane Doe" --css styles.css
  3. python epubgen.py old.epub --title "Second Edition"

Defaults for language, publisher, toc label and output directory can be set
in .env (EPUBGEN_LANG, EPUBGEN_PUBLISHER, EPUBGEN_TOC_TITLE,
EPUBGEN_OUTPUT_DIR).
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LANG = "en"
DEFAULT_PUBLISHER = "Unknown"
DEFAULT_TOC_TITLE = "Table of Contents"
DEFAULT_OUTPUT_DIR = "output"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build an EPUB from Markdown (.md), plain text (.txt) or an existing EPUB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List chapters without writing anything:
  python epubgen.py essay.md --dry-run

  # Override metadata parsed from the source:
  python epubgen.py essay.md --title "Essays" --author "A. Writer" --lang fr

  # Attach a stylesheet and choose where the book goes:
  python epubgen.py essay.md --css book.css --output-dir ~/Desktop
        """,
    )
    parser.add_argument("input_path", type=Path, help="Path to Markdown, text or EPUB file")
    parser.add_argument("--title", type=str, default=None, help="Book title (default: from source)")
    parser.add_argument("--author", type=str, default=None, help="Author (default: from source)")
    parser.add_argument("--publisher", type=str, default=None, help="Publisher (default: $EPUBGEN_PUBLISHER)")
    parser.add_argument("--description", type=str, default=None, help="Short description")
    parser.add_argument("--lang", type=str, default=None, help="Language code (default: $EPUBGEN_LANG or en)")
    parser.add_argument(
        "--toc-title", type=str, default=None, metavar="LABEL",
        help="Label of the table of contents page (default: $EPUBGEN_TOC_TITLE)",
    )
    parser.add_argument(
        "--css", type=Path, default=None, metavar="FILE",
        help="Stylesheet to embed as styles.css (default: empty stylesheet)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None, metavar="DIR",
        help="Where to write <Title>.epub (default: $EPUBGEN_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Parse input and list chapters without building the EPUB",
    )
    parser.add_argument(
        "--no-progress", action="store_true", default=False,
        help="Hide the chapter progress bar",
    )
    return parser.parse_args(argv)


def resolve_book_info(args: argparse.Namespace, metadata, css_text: str | None):
    """CLI flags win over parsed metadata, which wins over .env defaults."""
    from models import BookInfo

    return BookInfo(
        title=args.title or metadata.title,
        author=args.author or metadata.author,
        publisher=args.publisher or metadata.publisher or os.getenv("EPUBGEN_PUBLISHER") or DEFAULT_PUBLISHER,
        description=args.description or metadata.description or "",
        lang=args.lang or metadata.lang or os.getenv("EPUBGEN_LANG") or DEFAULT_LANG,
        toc_title=args.toc_title or os.getenv("EPUBGEN_TOC_TITLE") or DEFAULT_TOC_TITLE,
        css=css_text,
    )


def print_chapter_list(chapters, info=None) -> None:
    if info:
        print(f"Title:     {info.title}")
        print(f"Author:    {info.author}")
        print(f"Publisher: {info.publisher}")
        print(f"Language:  {info.lang}")
    print(f"\nFound {len(chapters)} chapters:")
    print("-" * 70)
    total_words = 0
    for i, ch in enumerate(chapters, start=1):
        word_count = sum(len(p.split()) for p in ch.paragraphs)
        total_words += word_count
        print(f"  {i:2d}. {ch.title[:50]:<50} {len(ch.paragraphs):>4} paras {word_count:>7} words")
    print("-" * 70)
    print(f"  Total: {total_words:,} words")
    print()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    load_dotenv()

    # Lazy imports keep --help fast
    from epub_builder import BuildError, assemble, write_epub
    from parsers import parse_file

    if not args.input_path.exists():
        print(f"ERROR: Input not found: {args.input_path}")
        sys.exit(1)

    print(f"Parsing: {args.input_path}")
    try:
        result = parse_file(args.input_path)
    except (ValueError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if not result.chapters:
        print(f"ERROR: No chapters found in {args.input_path}")
        sys.exit(1)

    css_text = None
    if args.css:
        try:
            css_text = args.css.read_text(encoding="utf-8")
        except OSError as e:
            print(f"ERROR: Cannot read stylesheet {args.css}: {e}")
            sys.exit(1)

    info = resolve_book_info(args, result.metadata, css_text)
    print_chapter_list(result.chapters, info)

    if args.dry_run:
        print("Dry run complete. Nothing written.")
        return

    output_dir = args.output_dir or Path(os.getenv("EPUBGEN_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR)

    print("=== Building EPUB ===\n")
    try:
        data = assemble(info, result.chapters, show_progress=not args.no_progress)
    except (ValueError, BuildError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    try:
        output_file = write_epub(data, info.title, output_dir)
    except OSError as e:
        print(f"ERROR: Could not write EPUB to {output_dir}: {e}")
        sys.exit(1)

    print(f"\nDone! EPUB saved to: {output_file}")


if __name__ == "__main__":
    main()
