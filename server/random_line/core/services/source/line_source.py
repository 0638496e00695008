from __future__ import annotations

import io
import logging
import os
from types import TracebackType
from typing import BinaryIO, Final

from ...errors.base import AppError, ErrorCode

_logger: Final[logging.Logger] = logging.getLogger(__name__)


def chomp(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


class LineSource:
    """Seekable byte stream with a byte size captured once at construction.

    The current offset is tracked here; ``seek``, ``read_line`` and
    ``skip_line`` are the only methods that move it. The size is never
    refreshed, so a file truncated or appended to after opening is seen
    through the original size.
    """

    def __init__(self: LineSource, stream: BinaryIO, size: int, *, name: str = "<stream>") -> None:
        if size < 0:
            raise AppError(ErrorCode.INVALID_ARGUMENT, f"Negative size for {name}: {size}")
        self._stream: Final[BinaryIO] = stream
        self._size: Final[int] = size
        self._name: Final[str] = name
        self._pos = 0
        self._closed = False

    @classmethod
    def from_stream(
        cls: type[LineSource], stream: BinaryIO, size: int | None = None, *, name: str = "<stream>"
    ) -> LineSource:
        if not stream.readable() or not stream.seekable():
            raise AppError(
                ErrorCode.INVALID_ARGUMENT, f"Stream {name} must be readable and seekable"
            )
        try:
            if size is None:
                size = stream.seek(0, io.SEEK_END)
            stream.seek(0, io.SEEK_SET)
        except OSError as e:
            raise AppError(ErrorCode.IO_ERROR, f"Can't seek {name}: {e}") from e
        return cls(stream, size, name=name)

    @classmethod
    def open(cls: type[LineSource], path: str | os.PathLike[str] | None) -> LineSource:
        if path is None or str(path) == "":
            raise AppError(ErrorCode.INVALID_ARGUMENT, "A filename is required")
        name = str(path)
        try:
            stream = open(name, "rb")
        except OSError as e:
            raise AppError(ErrorCode.IO_ERROR, f"Can't read {name}: {e}") from e
        try:
            size = os.fstat(stream.fileno()).st_size
        except OSError as e:
            stream.close()
            raise AppError(ErrorCode.IO_ERROR, f"Can't stat {name}: {e}") from e
        _logger.debug("Opened line source", extra={"path": name, "size": size})
        return cls(stream, size, name=name)

    @property
    def name(self: LineSource) -> str:
        return self._name

    @property
    def size(self: LineSource) -> int:
        return self._size

    @property
    def closed(self: LineSource) -> bool:
        return self._closed

    def tell(self: LineSource) -> int:
        return self._pos

    def at_eof(self: LineSource) -> bool:
        return self._pos >= self._size

    def seek(self: LineSource, offset: int) -> None:
        if offset < 0 or offset > self._size:
            raise AppError(
                ErrorCode.IO_ERROR,
                f"Offset {offset} outside [0, {self._size}] for {self._name}",
            )
        try:
            self._stream.seek(offset, io.SEEK_SET)
        except (OSError, ValueError) as e:
            raise AppError(ErrorCode.IO_ERROR, f"Can't seek {self._name}: {e}") from e
        self._pos = offset

    def _readline(self: LineSource) -> bytes:
        try:
            raw = self._stream.readline()
        except (OSError, ValueError) as e:
            raise AppError(ErrorCode.IO_ERROR, f"Can't read {self._name}: {e}") from e
        self._pos += len(raw)
        return raw

    def read_line(self: LineSource) -> bytes | None:
        """Read through the next newline (or EOF) and return it chomped.

        Returns ``None`` when no bytes are left.
        """
        raw = self._readline()
        if raw == b"":
            return None
        return chomp(raw)

    def skip_line(self: LineSource) -> bool:
        return self._readline() != b""

    def close(self: LineSource) -> None:
        if not self._closed:
            self._closed = True
            self._stream.close()

    def __enter__(self: LineSource) -> LineSource:
        return self

    def __exit__(
        self: LineSource,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
