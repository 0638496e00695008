from __future__ import annotations

import io
from collections import Counter

import pytest
from random_line.core.errors.base import AppError, ErrorCode
from random_line.core.services.sampling.strategies import FastStrategy, UniformStrategy
from random_line.core.services.source.line_source import LineSource

_DATA = b"alpha\nbeta\ngamma\n"


class _FixedRandom:
    """Returns queued values from randrange, checking the requested bound."""

    def __init__(self: _FixedRandom, values: list[int]) -> None:
        self._values = list(values)
        self.stops: list[int] = []

    def random(self: _FixedRandom) -> float:
        return 0.0

    def randrange(self: _FixedRandom, stop: int) -> int:
        self.stops.append(stop)
        v = self._values.pop(0)
        assert 0 <= v < stop
        return v


def _source(data: bytes = _DATA) -> LineSource:
    return LineSource.from_stream(io.BytesIO(data))


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (0, b"beta"),
        (5, b"beta"),
        (7, b"gamma"),
        (12, b"alpha"),
        (16, b"alpha"),
    ],
)
def test_fast_discards_fragment_and_wraps(offset: int, expected: bytes) -> None:
    rng = _FixedRandom([offset])
    assert FastStrategy().draw(_source(), rng) == expected
    assert rng.stops == [len(_DATA)]


def test_fast_weights_by_preceding_line_length() -> None:
    # Walk every possible offset once; the tally is the exact selection weight
    src = _source()
    strategy = FastStrategy()
    rng = _FixedRandom(list(range(src.size)))
    tally = Counter(strategy.draw(src, rng) for _ in range(src.size))
    assert tally == {b"beta": 6, b"gamma": 5, b"alpha": 6}


def test_fast_every_line_reachable_with_blank_lines() -> None:
    data = b"a\n\nlonger line\n"
    src = _source(data)
    rng = _FixedRandom(list(range(len(data))))
    seen = {FastStrategy().draw(src, rng) for _ in range(len(data))}
    assert seen == {b"a", b"", b"longer line"}


def test_fast_single_line_without_newline_always_returned() -> None:
    data = b"onlyline"
    src = _source(data)
    rng = _FixedRandom(list(range(len(data))))
    for _ in range(len(data)):
        assert FastStrategy().draw(src, rng) == b"onlyline"


def test_fast_raises_when_file_shrank() -> None:
    src = LineSource(io.BytesIO(b""), 8)
    with pytest.raises(AppError) as exc:
        FastStrategy().draw(src, _FixedRandom([3]))
    assert exc.value.code is ErrorCode.IO_ERROR


def test_uniform_picks_indexed_line() -> None:
    src = _source()
    strategy = UniformStrategy.build(src)
    assert strategy.index == (0, 6, 11)
    assert strategy.line_count() == 3
    rng = _FixedRandom([2, 0, 1])
    assert [strategy.draw(src, rng) for _ in range(3)] == [b"gamma", b"alpha", b"beta"]
    assert rng.stops == [3, 3, 3]


def test_uniform_empty_index_is_an_error() -> None:
    with pytest.raises(AppError) as exc:
        UniformStrategy(index=()).draw(_source(), _FixedRandom([0]))
    assert exc.value.code is ErrorCode.IO_ERROR


def test_strategy_names() -> None:
    assert FastStrategy().name() == "fast"
    assert FastStrategy().line_count() is None
    assert UniformStrategy(index=(0,)).name() == "uniform"
