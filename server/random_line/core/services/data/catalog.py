from __future__ import annotations

import os
from pathlib import Path

from ...errors.base import AppError, ErrorCode


def list_text_files(root: str) -> list[str]:
    p = Path(root)
    if p.is_file():
        return [str(p)]
    paths: list[str] = []
    for dirpath, _, filenames in os.walk(root):
        for name in filenames:
            if name.lower().endswith((".txt", ".text")):
                paths.append(str(Path(dirpath) / name))
    return sorted(paths)


def relative_names(root: str) -> list[str]:
    base = Path(root)
    if base.is_file():
        return [base.name]
    return [Path(p).relative_to(base).as_posix() for p in list_text_files(root)]


def resolve_under_root(root: str, name: str) -> Path:
    base = Path(root).resolve()
    candidate = (base / name).resolve()
    if not candidate.is_relative_to(base):
        raise AppError(ErrorCode.INVALID_ARGUMENT, f"Name escapes the lines root: {name}")
    if not candidate.is_file():
        raise AppError(ErrorCode.DATA_NOT_FOUND, f"No such lines file: {name}")
    return candidate
