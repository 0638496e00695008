from __future__ import annotations

from typing import Literal, Protocol

from pydantic import BaseModel

Algorithm = Literal["fast", "uniform"]

ALGORITHMS: tuple[Algorithm, ...] = ("fast", "uniform")


class RandomSource(Protocol):
    """Uniform randomness consumed by the sampling strategies.

    ``random.Random`` satisfies this protocol; tests inject stubs.
    """

    def random(self: RandomSource) -> float: ...
    def randrange(self: RandomSource, stop: int) -> int: ...


class ByteLineReader(Protocol):
    @property
    def size(self: ByteLineReader) -> int: ...
    def seek(self: ByteLineReader, offset: int) -> None: ...
    def tell(self: ByteLineReader) -> int: ...
    def at_eof(self: ByteLineReader) -> bool: ...
    def read_line(self: ByteLineReader) -> bytes | None: ...
    def skip_line(self: ByteLineReader) -> bool: ...


class LineStrategy(Protocol):
    def name(self: LineStrategy) -> Algorithm: ...
    def line_count(self: LineStrategy) -> int | None: ...
    def draw(self: LineStrategy, source: ByteLineReader, rng: RandomSource) -> bytes: ...


class SamplerOptions(BaseModel):
    algorithm: Algorithm = "fast"
    seed: int | None = None
    encoding: str = "utf-8"
    errors: str = "replace"

    model_config = {"extra": "forbid", "validate_assignment": True}
