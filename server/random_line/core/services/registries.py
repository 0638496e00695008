from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..contracts.sampling import ALGORITHMS, Algorithm, ByteLineReader, LineStrategy
from ..errors.base import AppError, ErrorCode
from .sampling.strategies import FastStrategy, UniformStrategy

StrategyFactory = Callable[[ByteLineReader], LineStrategy]


def normalize_algorithm(name: str | None) -> Algorithm:
    if name is None:
        return "fast"
    key = name.lower()
    for algo in ALGORITHMS:
        if key == algo:
            return algo
    raise AppError(ErrorCode.INVALID_ARGUMENT, f"unknown algorithm '{name}'")


def _fast(_: ByteLineReader) -> LineStrategy:
    return FastStrategy()


def _uniform(source: ByteLineReader) -> LineStrategy:
    return UniformStrategy.build(source)


@dataclass
class StrategyRegistry:
    factories: Mapping[Algorithm, StrategyFactory]

    @classmethod
    def default(cls: type[StrategyRegistry]) -> StrategyRegistry:
        return cls(factories={"fast": _fast, "uniform": _uniform})

    def create(
        self: StrategyRegistry, algorithm: str | None, source: ByteLineReader
    ) -> LineStrategy:
        algo = normalize_algorithm(algorithm)
        if algo not in self.factories:
            raise AppError(ErrorCode.INVALID_ARGUMENT, f"unsupported algorithm '{algo}'")
        return self.factories[algo](source)
