import io
import uuid
import zipfile
from datetime import datetime, timezone

import pytest
from lxml import etree

from models import BookInfo, PackageIdentity

OPF_NS = "http://www.idpf.org/2007/opf"
NCX_NS = "http://www.daisy.org/z3986/2005/ncx/"
XHTML_NS = "http://www.w3.org/1999/xhtml"
DC_NS = "http://purl.org/dc/elements/1.1/"
NS = {"opf": OPF_NS, "ncx": NCX_NS, "x": XHTML_NS, "dc": DC_NS}

FIXED_UUID = uuid.UUID("12345678-1234-5678-1234-567812345678")
FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def info():
    return BookInfo(
        title="test",
        description="test",
        publisher="test",
        author="test",
        toc_title="test",
        lang="en",
        fonts=("en",),
        css=None,
        version=3,
    )


@pytest.fixture
def identity():
    return PackageIdentity.generate(clock=lambda: FIXED_TIME, uid_factory=lambda: FIXED_UUID)


def parse_xml(data: str | bytes):
    if isinstance(data, str):
        data = data.encode("utf-8")
    return etree.fromstring(data)


def open_epub(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))
