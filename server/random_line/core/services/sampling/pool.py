from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Final

from ...contracts.sampling import Algorithm, SamplerOptions
from ...errors.base import AppError, ErrorCode
from ..registries import normalize_algorithm
from .sampler import RandomLineSampler

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class SamplerPool:
    """One open sampler per (file, algorithm), each behind its own lock.

    Samplers are created lazily and kept open so a uniform index is built
    only once per file. ``sample`` holds the sampler's lock across the whole
    draw, which is what makes a sampler usable from a threaded server.
    """

    def __init__(self: SamplerPool, options: SamplerOptions) -> None:
        self._options: Final[SamplerOptions] = options
        self._samplers: dict[tuple[str, Algorithm], RandomLineSampler] = {}
        self._locks: dict[tuple[str, Algorithm], threading.Lock] = {}
        self._guard = threading.Lock()

    def _key(self: SamplerPool, path: Path, algorithm: str | None) -> tuple[str, Algorithm]:
        algo = normalize_algorithm(algorithm or self._options.algorithm)
        return str(path.resolve()), algo

    def _get(
        self: SamplerPool, key: tuple[str, Algorithm]
    ) -> tuple[RandomLineSampler, threading.Lock]:
        with self._guard:
            sampler = self._samplers.get(key)
            if sampler is None:
                opts = self._options.model_copy(update={"algorithm": key[1]})
                sampler = RandomLineSampler.from_options(key[0], opts)
                self._samplers[key] = sampler
                self._locks[key] = threading.Lock()
                _logger.info(
                    "Sampler cached",
                    extra={"event": "pool_sampler_created", "path": key[0], "algorithm": key[1]},
                )
            return sampler, self._locks[key]

    def sample(
        self: SamplerPool, path: Path, count: int, algorithm: str | None = None
    ) -> list[str]:
        key = self._key(path, algorithm)
        sampler, lock = self._get(key)
        with lock:
            # close_all may have run between _get and acquiring the lock
            if sampler.closed:
                raise AppError(ErrorCode.INTERNAL, f"Sampler pool closed while sampling {key[0]}")
            return sampler.next(count)

    def __len__(self: SamplerPool) -> int:
        return len(self._samplers)

    def close_all(self: SamplerPool) -> None:
        with self._guard:
            for key, sampler in self._samplers.items():
                with self._locks[key]:
                    sampler.close()
            n = len(self._samplers)
            self._samplers.clear()
            self._locks.clear()
        _logger.info("Sampler pool closed", extra={"event": "pool_closed", "count": n})
