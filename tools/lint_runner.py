#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def run(cmd: list[str], cwd: Path) -> int:
    proc = subprocess.run(cmd, cwd=str(cwd))
    return proc.returncode


def main() -> int:
    # Ensure lock is current and environment matches lock (no fallbacks)
    sys.stdout.write("[lint] poetry lock\n")
    if run(["poetry", "lock"], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] poetry sync --with dev\n")
    if run(["poetry", "sync", "--with", "dev"], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] ruff --fix\n")
    if run(["poetry", "run", "ruff", "check", ".", "--fix"], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] ruff format\n")
    if run(["poetry", "run", "ruff", "format", "."], ROOT) != 0:
        return 1
    # Mypy strict (always run; fail if deps missing)
    sys.stdout.write("[lint] mypy --strict\n")
    if run(["poetry", "run", "mypy"], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] guards\n")
    if run([sys.executable, str(ROOT / "scripts" / "guard.py")], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] pytest\n")
    if run(["poetry", "run", "pytest", "-q"], ROOT) != 0:
        return 1
    sys.stdout.write("[lint] OK\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
