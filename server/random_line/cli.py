from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .core.config.settings import Settings
from .core.contracts.sampling import ALGORITHMS
from .core.errors.base import AppError
from .core.logging.service import LoggingService
from .core.logging.setup import setup_logging
from .core.services.sampling.sampler import RandomLineSampler


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="random-line",
        description="Print random lines from a file without reading all of it",
    )
    parser.add_argument("file", help="file to draw lines from")
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=None,
        help="number of lines to draw, with replacement (default: 1)",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        choices=ALGORITHMS,
        type=str.lower,
        default=settings.sampler.algorithm,
        help="fast (length-biased, no pre-scan) or uniform (indexes the file first)",
    )
    parser.add_argument("--seed", type=int, default=settings.sampler.seed)
    parser.add_argument("--encoding", default=settings.sampler.encoding)
    parser.add_argument("--log-level", default=settings.logging.level)
    parser.add_argument("--log-file", default=None, help="also write JSON logs to this file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level)
    service = LoggingService.create()
    if args.log_file is not None:
        log = service.attach_file(path=args.log_file, category="cli", service="random-line")
    else:
        log = service.adapter(category="cli", service="random-line")
    try:
        with RandomLineSampler.open(
            args.file,
            args.algorithm,
            seed=args.seed,
            encoding=args.encoding,
            errors=settings.sampler.errors,
        ) as sampler:
            lines = sampler.next_lines(args.count) if args.count is not None else [sampler.next()]
        for line in lines:
            sys.stdout.write(line + "\n")
        log.debug("random-line done", extra={"event": "cli_done", "count": len(lines)})
    except AppError as exc:
        log.error(
            "random-line failed",
            extra={"event": "cli_failed", "error_code": exc.code.value, "path": args.file},
        )
        sys.stderr.write(f"random-line: {exc.message}\n")
        return 2
    finally:
        if args.log_file is not None:
            service.close_file(path=args.log_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
