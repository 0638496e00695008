#!/usr/bin/env python
from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Iterable


ROOT = Path(__file__).resolve().parent.parent
PACKAGE = ROOT / "server" / "random_line"
TESTS = ROOT / "server" / "tests"

EXCLUDE_DIRNAMES = {".venv", "__pycache__", ".mypy_cache", ".pytest_cache"}

ALLOW_EXT = {".py", ".pyi"}

# Flagged in package and tests
PATTERNS: dict[str, re.Pattern[str]] = {
    "typing.Any": re.compile(r"\btyping\.Any\b"),
    "Any import": re.compile(r"\bfrom\s+typing\s+import\b[^#\n]*\bAny\b"),
    "type: ignore": re.compile(r"type:\s*ignore"),
    "typing.cast": re.compile(r"\btyping\.cast\b"),
    "TODO": re.compile(r"\bTODO\b"),
    "FIXME": re.compile(r"\bFIXME\b"),
    "HACK": re.compile(r"\bHACK\b"),
    "XXX": re.compile(r"\bXXX\b"),
    "logging.basicConfig": re.compile(r"\blogging\.basicConfig\s*\("),
    "noqa": re.compile(r"#\s*noqa\b"),
}

# Flagged in package code only
PACKAGE_PATTERNS: dict[str, re.Pattern[str]] = {
    "print()": re.compile(r"(^|\s)print\s*\("),
    # Randomness is injected; the module-level generator is off limits
    "global random": re.compile(
        r"\brandom\.(random|randrange|randint|choice|choices|sample|shuffle|seed)\s*\("
    ),
    # Sampling must never pull a whole file into memory
    "readlines()": re.compile(r"\.readlines\s*\("),
    "dataclass(frozen=True)": re.compile(r"@dataclass\(\s*frozen\s*=\s*True\s*\)"),
}


def iter_files(base: Path) -> Iterable[Path]:
    if not base.exists():
        return
    for p in base.rglob("*"):
        if not p.is_file() or p.suffix not in ALLOW_EXT:
            continue
        if any(part in EXCLUDE_DIRNAMES for part in p.parts):
            continue
        yield p


def _match_lines(path: Path, lines: list[str], patterns: dict[str, re.Pattern[str]]) -> list[str]:
    errors: list[str] = []
    for name, pat in patterns.items():
        for i, line in enumerate(lines, start=1):
            if pat.search(line):
                errors.append(f"{path}:{i}: disallowed pattern: {name}")
    return errors


def _except_blocks(path: Path, lines: list[str]) -> list[str]:
    # Every except body must raise, log, or both (both when catching broadly)
    errors: list[str] = []
    log_call = re.compile(r"\.(debug|info|warning|error|exception|critical)\(")
    raise_re = re.compile(r"\braise\b")
    for i0, line in enumerate(lines, start=1):
        m = re.match(r"^(\s*)except(\s+([^:]+))?:\s*$", line)
        if not m:
            continue
        except_indent = len(m.group(1))
        types = (m.group(3) or "").strip()
        broad = types == "" or "Exception" in types or "BaseException" in types
        has_log = False
        has_raise = False
        for cur in lines[i0:]:
            if cur.strip() == "":
                continue
            cur_indent = len(cur) - len(cur.lstrip())
            if cur_indent <= except_indent:
                break
            if re.match(r"^\s+(pass|\.\.\.)\s*(#.*)?$", cur) and not (has_log or has_raise):
                errors.append(f"{path}:{i0}: disallowed pattern: silent except body")
            has_raise = has_raise or bool(raise_re.search(cur))
            has_log = has_log or bool(log_call.search(cur))
        if broad and not (has_log and has_raise):
            errors.append(f"{path}:{i0}: disallowed pattern: broad except requires log and raise")
        elif not broad and not (has_log or has_raise):
            errors.append(f"{path}:{i0}: disallowed pattern: except block without log/raise")
    return errors


def _pydantic_first(path: Path, lines: list[str]) -> list[str]:
    # contracts/ and config/ hold pydantic models and protocols, never dataclasses
    errors: list[str] = []
    if "contracts" not in path.parts and "config" not in path.parts:
        return errors
    for i, line in enumerate(lines, start=1):
        if re.match(r"^\s*@dataclass\b", line) or re.search(
            r"from\s+dataclasses\s+import\s+dataclass\b", line
        ):
            errors.append(f"{path}:{i}: disallowed pattern: dataclass in contracts/config")
    return errors


def scan_file(path: Path, *, package: bool) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:  # pragma: no cover
        return [f"{path}: failed to read: {e}"]
    lines = text.splitlines()
    errors = _match_lines(path, lines, PATTERNS)
    errors.extend(_except_blocks(path, lines))
    if package:
        errors.extend(_match_lines(path, lines, PACKAGE_PATTERNS))
        errors.extend(_pydantic_first(path, lines))
    return errors


def main() -> int:
    violations: list[str] = []
    for f in iter_files(PACKAGE):
        violations.extend(scan_file(f, package=True))
    for f in iter_files(TESTS):
        violations.extend(scan_file(f, package=False))
    if violations:
        print("Guard checks failed:")
        for v in violations:
            print(f"  {v}")
        return 2
    print("Guards OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
