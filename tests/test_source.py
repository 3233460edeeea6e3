import pytest

from romlayout.errors import SourceError
from romlayout.source import BufferSource
from romlayout.source.file import FileSource

DATA = bytes(i & 0xFF for i in range(0x3000))


def test_buffer_source():
    src = BufferSource(bytearray(DATA))
    assert src.size == len(DATA)
    assert src.read_range(0x100, 0x10) == DATA[0x100:0x110]
    assert src.read_range(0x2FF0, 0x10) == DATA[0x2FF0:]
    assert src.reads == 2


def test_buffer_source_past_end():
    with pytest.raises(SourceError, match="past the end"):
        BufferSource(DATA).read_range(0x2FF0, 0x11)


def test_file_source_chunks(write_file):
    path = write_file("chip.bin", DATA)
    with FileSource(path, chunk_size=0x100) as src:
        assert src.size == len(DATA)
        assert src.read_range(0x80, 0x1234) == DATA[0x80 : 0x80 + 0x1234]
        assert src.read_range(0, 0) == b""
        assert src.bytes_read == 0x1234
    assert src._file.closed


def test_file_source_past_end(write_file):
    path = write_file("chip.bin", DATA)
    with FileSource(path) as src:
        with pytest.raises(SourceError):
            src.read_range(0x2000, 0x1001)


def test_file_source_missing(tmp_path):
    with pytest.raises(SourceError, match="could not open"):
        FileSource(str(tmp_path / "nope.bin"))
