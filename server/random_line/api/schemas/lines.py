from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class LinesIndexResponse(BaseModel):
    files: list[str]

    model_config = {"extra": "forbid", "validate_assignment": True}


class LinesResponse(BaseModel):
    name: str
    algorithm: Literal["fast", "uniform"]
    count: int
    lines: list[str]

    model_config = {"extra": "forbid", "validate_assignment": True}
