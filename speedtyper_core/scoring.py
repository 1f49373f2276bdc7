"""Words-per-minute computation."""
from __future__ import annotations

import math


def elapsed_minutes(start_time: float | None, now: float) -> float:
    """Minutes between ``start_time`` and ``now`` (epoch seconds); NaN if unset."""
    if start_time is None:
        return math.nan
    return (now - start_time) / 60.0


def words_per_minute(num_correct: int, start_time: float | None, now: float) -> float:
    """Correct words divided by elapsed minutes.

    - start_time unset -> NaN (no race has started; callers should not ask)
    - elapsed <= 0     -> 0.0 (right after a reset, instead of a division blow-up)
    """
    minutes = elapsed_minutes(start_time, now)
    if math.isnan(minutes):
        return math.nan
    if minutes <= 0:
        return 0.0
    return num_correct / minutes
