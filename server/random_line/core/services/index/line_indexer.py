from __future__ import annotations

import logging
import time
from typing import Final

from ...contracts.sampling import ByteLineReader

_logger: Final[logging.Logger] = logging.getLogger(__name__)


def build_index(source: ByteLineReader) -> tuple[int, ...]:
    """Return the byte offset of every line start, in file order.

    One sequential pass from offset 0. A last line without a trailing
    newline still gets an entry.
    """
    start_time = time.time()
    offsets: list[int] = []
    source.seek(0)
    while not source.at_eof():
        offset = source.tell()
        if not source.skip_line():
            # Shorter than the size captured at open time
            break
        offsets.append(offset)
    elapsed = time.time() - start_time
    _logger.debug(
        "Line index built",
        extra={
            "line_count": len(offsets),
            "size": source.size,
            "elapsed_seconds": round(elapsed, 4),
        },
    )
    return tuple(offsets)
