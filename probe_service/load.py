"""
CPU load generation.

``run_load`` burns CPU for a bounded wall-clock duration so an external
autoscaler sees utilisation rise. The work itself (square roots and powers
of random numbers) is discarded; only elapsed time and CPU use matter.
"""

import math
import random
import re
import time
from dataclasses import dataclass

DEFAULT_DURATION_SECONDS = 5
MIN_DURATION_SECONDS = 1
MAX_DURATION_SECONDS = 30

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class LoadRun:
    requested_seconds: int
    actual_seconds: float
    iterations: int


def parse_duration(raw: str | None) -> int:
    """
    Turn the ``duration`` query value into a run length in seconds.

    The leading integer is used (``"7s"`` -> 7, ``"2.9"`` -> 2). Missing,
    non-numeric and non-positive values fall back to the default; anything
    above the maximum is clamped to it.
    """
    if raw is None:
        return DEFAULT_DURATION_SECONDS
    match = _LEADING_INT.match(raw)
    if not match:
        return DEFAULT_DURATION_SECONDS
    value = int(match.group(1))
    if value < MIN_DURATION_SECONDS:
        return DEFAULT_DURATION_SECONDS
    return min(value, MAX_DURATION_SECONDS)


def _work_batch(size: int) -> None:
    rand = random.random
    for _ in range(size):
        math.sqrt(rand() * 999999)
        math.pow(rand(), rand())


def run_load(duration: int, batch_size: int = 10_000, clock=time.monotonic) -> LoadRun:
    """
    Run work batches until ``duration`` seconds have elapsed.

    The deadline is only checked between batches, so the measured duration
    is never shorter than requested.
    """
    start = clock()
    deadline = start + duration
    iterations = 0
    while clock() < deadline:
        _work_batch(batch_size)
        iterations += 1
    elapsed = clock() - start
    return LoadRun(
        requested_seconds=duration,
        actual_seconds=round(elapsed, 2),
        iterations=iterations,
    )
