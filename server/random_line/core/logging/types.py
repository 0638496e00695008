from __future__ import annotations

from typing import Literal, TypedDict


class LoggingExtra(TypedDict, total=False):
    # Core logging context
    category: str
    service: str
    event: str
    error_code: str
    reason: str
    # Source and sampler fields
    path: str
    algorithm: Literal["fast", "uniform"]
    size: int
    line_count: int
    count: int
    requested: int
    elapsed_seconds: float
    # API fields
    lines_file: str
    request_id: str
    files: int
