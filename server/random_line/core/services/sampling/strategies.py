from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ...contracts.sampling import Algorithm, ByteLineReader, RandomSource
from ...errors.base import AppError, ErrorCode
from ..index.line_indexer import build_index


@dataclass
class FastStrategy:
    """Seek to a random byte, drop the partial line there, return the next one.

    A line is picked when the random offset falls anywhere in the line
    before it (the last line leads to the first), so selection is weighted
    by the byte length of the preceding line. No pre-scan; one seek per draw.
    """

    def name(self: FastStrategy) -> Algorithm:
        return "fast"

    def line_count(self: FastStrategy) -> int | None:
        return None

    def draw(self: FastStrategy, source: ByteLineReader, rng: RandomSource) -> bytes:
        source.seek(rng.randrange(source.size))
        source.skip_line()
        if source.at_eof():
            source.seek(0)
        line = source.read_line()
        if line is None:
            raise AppError(ErrorCode.IO_ERROR, "No line available after wrapping to offset 0")
        return line


@dataclass
class UniformStrategy:
    """Pick a line start from a prebuilt index; every line has equal weight."""

    index: Sequence[int]

    @classmethod
    def build(cls: type[UniformStrategy], source: ByteLineReader) -> UniformStrategy:
        return cls(index=build_index(source))

    def name(self: UniformStrategy) -> Algorithm:
        return "uniform"

    def line_count(self: UniformStrategy) -> int | None:
        return len(self.index)

    def draw(self: UniformStrategy, source: ByteLineReader, rng: RandomSource) -> bytes:
        if len(self.index) == 0:
            raise AppError(ErrorCode.IO_ERROR, "Line index is empty")
        source.seek(self.index[rng.randrange(len(self.index))])
        line = source.read_line()
        if line is None:
            raise AppError(ErrorCode.IO_ERROR, "Indexed line is no longer readable")
        return line
