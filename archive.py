"""archive.py — Minimal in-memory zip writer used to assemble the EPUB."""

import io
import zipfile
from contextlib import contextmanager
from datetime import datetime
from typing import IO, Iterator

# Range of timestamps a zip (MS-DOS) entry can carry.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
ZIP_LATEST = (2107, 12, 31, 23, 59, 58)


class ArchiveError(RuntimeError):
    """Raised when an entry cannot be created, written or the archive finalized."""


class ArchiveWriter:
    """
    Sequential zip writer backed by a BytesIO buffer.

    Usage:
        writer = ArchiveWriter.open()
        with writer.start_entry("mimetype", zipfile.ZIP_STORED) as handle:
            writer.write(handle, b"application/epub+zip")
        data = writer.finish()
    """

    def __init__(self, modified: datetime | None = None):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w")
        self._date_time = _zip_date_time(modified)
        self._finished = False

    @classmethod
    def open(cls, modified: datetime | None = None) -> "ArchiveWriter":
        return cls(modified)

    def _info(self, name: str, compress_type: int) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(name, date_time=self._date_time)
        info.compress_type = compress_type
        info.external_attr = 0o644 << 16
        return info

    @contextmanager
    def start_entry(self, name: str, compress_type: int = zipfile.ZIP_DEFLATED) -> Iterator[IO[bytes]]:
        """Open a named entry; it is closed when the with-block exits."""
        self._check_open()
        try:
            handle = self._zip.open(self._info(name, compress_type), mode="w")
        except (OSError, ValueError, RuntimeError, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Cannot start entry {name!r}: {e}") from e
        try:
            yield handle
        finally:
            handle.close()

    def write(self, handle: IO[bytes], data: bytes) -> None:
        try:
            handle.write(data)
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Write failed: {e}") from e

    def add_directory(self, name: str) -> None:
        self._check_open()
        if not name.endswith("/"):
            name += "/"
        info = zipfile.ZipInfo(name, date_time=self._date_time)
        info.compress_type = zipfile.ZIP_STORED
        info.external_attr = (0o40755 << 16) | 0x10  # MS-DOS directory flag
        try:
            self._zip.writestr(info, b"")
        except (OSError, ValueError, RuntimeError) as e:
            raise ArchiveError(f"Cannot add directory {name!r}: {e}") from e

    def finish(self) -> bytes:
        """Write the central directory and return the archive bytes."""
        self._check_open()
        try:
            self._zip.close()
        except (OSError, ValueError) as e:
            raise ArchiveError(f"Cannot finalize archive: {e}") from e
        self._finished = True
        return self._buffer.getvalue()

    def abort(self) -> None:
        """Drop everything written so far; the writer cannot be reused."""
        self._finished = True
        try:
            self._zip.close()
        except (OSError, ValueError):
            # Keep ZipFile.__del__ from retrying the close on a dead buffer.
            self._zip.fp = None
        self._buffer = io.BytesIO()

    def _check_open(self) -> None:
        if self._finished:
            raise ArchiveError("Archive already finished")


def _zip_date_time(modified: datetime | None) -> tuple[int, int, int, int, int, int]:
    if modified is None or modified.year < 1980:
        return ZIP_EPOCH
    if modified.year > ZIP_LATEST[0]:
        return ZIP_LATEST
    return modified.timetuple()[:6]
