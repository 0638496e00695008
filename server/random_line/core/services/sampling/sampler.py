from __future__ import annotations

import logging
import os
import random
import warnings
from types import TracebackType
from typing import Final, overload

from ...contracts.sampling import Algorithm, RandomSource, SamplerOptions
from ...errors.base import AppError, ErrorCode, SampleCountWarning
from ...logging.types import LoggingExtra
from ..registries import StrategyRegistry, normalize_algorithm
from ..source.line_source import LineSource

_logger: Final[logging.Logger] = logging.getLogger(__name__)


def validate_count(count: int | None, *, stacklevel: int = 2) -> int:
    """Return how many lines to draw for ``count``.

    ``None`` means one line. Zero is accepted with a ``SampleCountWarning``
    and treated as one. ``stacklevel`` is passed to ``warnings.warn`` so the
    warning points at the code that asked for zero lines.
    """
    if count is None:
        return 1
    if isinstance(count, bool) or not isinstance(count, int):
        raise AppError(
            ErrorCode.INVALID_ARGUMENT,
            f"Number of random lines should be a non-negative integer, not '{count}'",
        )
    if count < 0:
        raise AppError(
            ErrorCode.INVALID_ARGUMENT,
            f"Number of random lines should be a non-negative integer, not '{count}'",
        )
    if count == 0:
        _logger.warning(
            "Zero random lines requested; returning one",
            extra={"event": "zero_count", "requested": 0, "count": 1},
        )
        warnings.warn(
            "Strange call to RandomLineSampler.next(): 0 random lines requested",
            SampleCountWarning,
            stacklevel=stacklevel,
        )
        return 1
    return count


class RandomLineSampler:
    """Draw random lines, with replacement, from one seekable file.

    ``fast`` seeks to a random byte and returns the line after the one it
    lands in; lines following long lines come up more often. ``uniform``
    indexes every line start at construction and then picks each line with
    probability ``1 / line_count``.

    The sampler owns its source for its whole lifetime and moves the shared
    file position on every draw, so one instance must not be used from two
    threads at once.
    """

    def __init__(
        self: RandomLineSampler,
        source: LineSource,
        algorithm: str | None = "fast",
        *,
        rng: RandomSource | None = None,
        seed: int | None = None,
        encoding: str = "utf-8",
        errors: str = "replace",
        registry: StrategyRegistry | None = None,
    ) -> None:
        algo = normalize_algorithm(algorithm)
        if source.size == 0:
            raise AppError(
                ErrorCode.INVALID_ARGUMENT, f"Can't sample lines from empty file {source.name}"
            )
        self._source: Final[LineSource] = source
        self._rng: Final[RandomSource] = rng if rng is not None else random.Random(seed)
        self._encoding: Final[str] = encoding
        self._errors: Final[str] = errors
        self._strategy = (registry or StrategyRegistry.default()).create(algo, source)
        extra: LoggingExtra = {
            "event": "sampler_created",
            "path": source.name,
            "algorithm": algo,
            "size": source.size,
        }
        line_count = self._strategy.line_count()
        if line_count is not None:
            extra["line_count"] = line_count
        _logger.info("Random line sampler ready", extra=extra)

    @classmethod
    def open(
        cls: type[RandomLineSampler],
        path: str | os.PathLike[str] | None,
        algorithm: str | None = "fast",
        *,
        rng: RandomSource | None = None,
        seed: int | None = None,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> RandomLineSampler:
        # Reject a bad algorithm before touching the filesystem
        normalize_algorithm(algorithm)
        source = LineSource.open(path)
        try:
            return cls(
                source, algorithm, rng=rng, seed=seed, encoding=encoding, errors=errors
            )
        except AppError:
            source.close()
            raise

    @classmethod
    def from_options(
        cls: type[RandomLineSampler],
        path: str | os.PathLike[str],
        options: SamplerOptions,
        *,
        rng: RandomSource | None = None,
    ) -> RandomLineSampler:
        return cls.open(
            path,
            options.algorithm,
            rng=rng,
            seed=options.seed,
            encoding=options.encoding,
            errors=options.errors,
        )

    @property
    def algorithm(self: RandomLineSampler) -> Algorithm:
        return self._strategy.name()

    @property
    def line_count(self: RandomLineSampler) -> int | None:
        return self._strategy.line_count()

    @property
    def size(self: RandomLineSampler) -> int:
        return self._source.size

    @property
    def path(self: RandomLineSampler) -> str:
        return self._source.name

    def _draw(self: RandomLineSampler, n: int) -> list[bytes]:
        return [self._strategy.draw(self._source, self._rng) for _ in range(n)]

    def _decode(self: RandomLineSampler, raw: bytes) -> str:
        return raw.decode(self._encoding, self._errors)

    @overload
    def next(self: RandomLineSampler, count: None = None) -> str: ...

    @overload
    def next(self: RandomLineSampler, count: int) -> list[str]: ...

    def _next(self: RandomLineSampler, count: int | None, stacklevel: int) -> list[str]:
        n = validate_count(count, stacklevel=stacklevel)
        return [self._decode(raw) for raw in self._draw(n)]

    def next(self: RandomLineSampler, count: int | None = None) -> str | list[str]:
        """Return one line, or a list of ``count`` lines in draw order.

        Duplicates are possible. Trailing newlines are stripped.
        """
        lines = self._next(count, stacklevel=4)
        if count is None:
            return lines[0]
        return lines

    @overload
    def next_raw(self: RandomLineSampler, count: None = None) -> bytes: ...

    @overload
    def next_raw(self: RandomLineSampler, count: int) -> list[bytes]: ...

    def next_raw(self: RandomLineSampler, count: int | None = None) -> bytes | list[bytes]:
        lines = self._draw(validate_count(count, stacklevel=3))
        if count is None:
            return lines[0]
        return lines

    def next_line(self: RandomLineSampler) -> str:
        return self._next(None, stacklevel=4)[0]

    def next_lines(self: RandomLineSampler, count: int) -> list[str]:
        return self._next(count, stacklevel=4)

    @property
    def closed(self: RandomLineSampler) -> bool:
        return self._source.closed

    def close(self: RandomLineSampler) -> None:
        self._source.close()

    def __enter__(self: RandomLineSampler) -> RandomLineSampler:
        return self

    def __exit__(
        self: RandomLineSampler,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
