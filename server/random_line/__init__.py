from __future__ import annotations

# Public API re-exports (kept minimal).
from .core.contracts.sampling import Algorithm, RandomSource, SamplerOptions
from .core.errors.base import AppError, ErrorCode, SampleCountWarning
from .core.services.index.line_indexer import build_index
from .core.services.sampling.sampler import RandomLineSampler
from .core.services.source.line_source import LineSource

__all__ = [
    "Algorithm",
    "AppError",
    "ErrorCode",
    "LineSource",
    "RandomLineSampler",
    "RandomSource",
    "SampleCountWarning",
    "SamplerOptions",
    "build_index",
]
