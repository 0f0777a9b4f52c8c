import gc
import sys
import zipfile
from datetime import datetime, timezone

import pytest

from archive import ZIP_EPOCH, ZIP_LATEST, ArchiveError, ArchiveWriter
from conftest import open_epub


def test_entries_written_in_order():
    writer = ArchiveWriter.open()
    with writer.start_entry("b.txt", zipfile.ZIP_STORED) as handle:
        writer.write(handle, b"bee")
    writer.add_directory("dir")
    with writer.start_entry("dir/a.txt") as handle:
        writer.write(handle, b"ay")
        writer.write(handle, b"ay")
    data = writer.finish()

    with open_epub(data) as zf:
        assert zf.namelist() == ["b.txt", "dir/", "dir/a.txt"]
        assert zf.getinfo("b.txt").compress_type == zipfile.ZIP_STORED
        assert zf.getinfo("dir/a.txt").compress_type == zipfile.ZIP_DEFLATED
        assert zf.getinfo("dir/").is_dir()
        assert zf.read("dir/a.txt") == b"ayay"


def test_entry_timestamps():
    modified = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    writer = ArchiveWriter.open(modified)
    with writer.start_entry("x") as handle:
        writer.write(handle, b"x")
    with open_epub(writer.finish()) as zf:
        assert zf.getinfo("x").date_time == (2021, 3, 4, 5, 6, 6)  # DOS time has 2s resolution


def test_default_timestamp_is_zip_epoch():
    writer = ArchiveWriter.open()
    with writer.start_entry("x") as handle:
        writer.write(handle, b"")
    with open_epub(writer.finish()) as zf:
        assert zf.getinfo("x").date_time == ZIP_EPOCH


def test_finish_twice_fails():
    writer = ArchiveWriter.open()
    writer.finish()
    with pytest.raises(ArchiveError):
        writer.finish()


def test_no_entries_after_finish():
    writer = ArchiveWriter.open()
    writer.finish()
    with pytest.raises(ArchiveError):
        with writer.start_entry("late"):
            pass
    with pytest.raises(ArchiveError):
        writer.add_directory("late/")


def test_write_to_closed_handle_fails():
    writer = ArchiveWriter.open()
    with writer.start_entry("x") as handle:
        pass
    with pytest.raises(ArchiveError):
        writer.write(handle, b"too late")


def test_abort_discards_writer():
    writer = ArchiveWriter.open()
    with writer.start_entry("x") as handle:
        writer.write(handle, b"partial")
    writer.abort()
    with pytest.raises(ArchiveError):
        writer.finish()


def test_timestamp_past_dos_range_is_capped():
    writer = ArchiveWriter.open(datetime(2200, 1, 1, tzinfo=timezone.utc))
    with writer.start_entry("x") as handle:
        writer.write(handle, b"x")
    with open_epub(writer.finish()) as zf:
        assert zf.getinfo("x").date_time == ZIP_LATEST


def test_timestamp_before_dos_range_is_raised_to_epoch():
    writer = ArchiveWriter.open(datetime(1970, 1, 1, tzinfo=timezone.utc))
    writer.add_directory("d")
    with open_epub(writer.finish()) as zf:
        assert zf.getinfo("d/").date_time == ZIP_EPOCH


def test_abort_closes_the_zip(monkeypatch):
    unraisable = []
    monkeypatch.setattr(sys, "unraisablehook", unraisable.append)

    writer = ArchiveWriter.open()
    with writer.start_entry("x") as handle:
        writer.write(handle, b"partial")
    writer.abort()
    del writer, handle
    gc.collect()

    assert unraisable == []
