from __future__ import annotations

import io
from pathlib import Path

import pytest
from random_line.core.errors.base import AppError, ErrorCode
from random_line.core.services.source.line_source import LineSource, chomp


def test_read_line_chomps_and_tracks_offset() -> None:
    src = LineSource.from_stream(io.BytesIO(b"alpha\nbeta\r\ngamma"))
    assert src.size == 17
    assert src.read_line() == b"alpha"
    assert src.tell() == 6
    assert src.read_line() == b"beta"
    assert src.tell() == 12
    assert not src.at_eof()
    assert src.read_line() == b"gamma"
    assert src.at_eof()
    assert src.read_line() is None


def test_chomp_only_strips_trailing_delimiter() -> None:
    assert chomp(b"a\nb\n") == b"a\nb"
    assert chomp(b"a\r\n") == b"a"
    assert chomp(b"a\r") == b"a\r"
    assert chomp(b"\n") == b""
    assert chomp(b"plain") == b"plain"


def test_seek_repositions_and_rejects_out_of_range() -> None:
    src = LineSource.from_stream(io.BytesIO(b"one\ntwo\n"))
    src.seek(4)
    assert src.read_line() == b"two"
    src.seek(src.size)
    assert src.at_eof()
    with pytest.raises(AppError) as neg:
        src.seek(-1)
    assert neg.value.code is ErrorCode.IO_ERROR
    with pytest.raises(AppError) as past:
        src.seek(src.size + 1)
    assert past.value.code is ErrorCode.IO_ERROR


def test_skip_line_reports_eof() -> None:
    src = LineSource.from_stream(io.BytesIO(b"x\n"))
    assert src.skip_line() is True
    assert src.skip_line() is False


def test_from_stream_rejects_unseekable() -> None:
    class _Pipe(io.BytesIO):
        def seekable(self: _Pipe) -> bool:
            return False

    with pytest.raises(AppError) as exc:
        LineSource.from_stream(_Pipe(b"data\n"))
    assert exc.value.code is ErrorCode.INVALID_ARGUMENT


def test_from_stream_keeps_explicit_size() -> None:
    buf = io.BytesIO(b"abc\ndef\n")
    buf.seek(5)
    src = LineSource.from_stream(buf, size=4)
    assert src.size == 4
    assert src.tell() == 0
    assert src.read_line() == b"abc"
    assert src.at_eof()


def test_open_errors(tmp_path: Path) -> None:
    with pytest.raises(AppError) as missing_name:
        LineSource.open("")
    assert missing_name.value.code is ErrorCode.INVALID_ARGUMENT
    with pytest.raises(AppError) as none_name:
        LineSource.open(None)
    assert none_name.value.code is ErrorCode.INVALID_ARGUMENT
    with pytest.raises(AppError) as missing_file:
        LineSource.open(tmp_path / "nope.txt")
    assert missing_file.value.code is ErrorCode.IO_ERROR
    with pytest.raises(AppError) as directory:
        LineSource.open(tmp_path)
    assert directory.value.code is ErrorCode.IO_ERROR


def test_open_reads_file_and_closes(tmp_path: Path) -> None:
    fp = tmp_path / "f.txt"
    fp.write_bytes(b"first\nsecond\n")
    with LineSource.open(fp) as src:
        assert src.name == str(fp)
        assert src.size == 13
        assert src.read_line() == b"first"
    assert src.closed
