"""
Wall-clock timing helpers used to annotate request traces.

Usage:
    from sp_satellites.utils.timing import timed

    with timed("list") as timing:
        response = await http.get(url)

    log.info("done", extra={"duration_ms": timing.duration_ms})
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Generator


@dataclass
class Timing:
    """
    Container for a single timed block.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)

    @property
    def duration_ms(self) -> float:
        return round(self.duration_seconds * 1000.0, 2)


@contextlib.contextmanager
def timed(label: str) -> Generator[Timing, None, None]:
    """
    Measure the wall-clock duration of the enclosed block.

    The measurement is recorded even when the block raises.
    """
    timing = Timing(label=label)
    timing.start_ts = time.perf_counter()
    try:
        yield timing
    finally:
        timing.end_ts = time.perf_counter()
        timing.duration_seconds = timing.end_ts - timing.start_ts


__all__ = ["Timing", "timed"]
