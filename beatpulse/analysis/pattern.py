"""Rhythm patterns: grid quantization, grid matching and swing."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from beatpulse.analysis.models import round_half_up

# Beats per bar assumed by the quantizer (4/4).
_BEATS_PER_BAR = 4
# Scales mean relative deviation into the swing score.
_SWING_SCALE = 0.1
_NEUTRAL_SWING = 0.5


def extract_rhythm_pattern(
    beats: Sequence[float],
    sample_rate: int,
    pattern_length: int = 16,
) -> list[int]:
    """Quantize beats onto a one-bar occupancy grid of *pattern_length* steps.

    The bar length is four times the mean beat interval. Each cell is 1 if
    at least one beat lands on it. Returns ``[]`` with fewer than two beats.
    """
    if pattern_length <= 0:
        raise ValueError(f"pattern_length must be positive, got {pattern_length}")
    if len(beats) < 2:
        return []

    times = np.asarray(beats, dtype=np.float64)
    avg_interval = float(np.mean(np.diff(times)))
    pattern = [0] * pattern_length
    # No spacing to quantize against, so nothing is placed
    if avg_interval <= 0:
        return pattern

    bar_length = avg_interval * _BEATS_PER_BAR
    step_size = avg_interval / (pattern_length / _BEATS_PER_BAR)

    for beat in times:
        step = round_half_up((beat % bar_length) / step_size) % pattern_length
        pattern[step] = 1
    return pattern


def rhythm_pattern(
    onsets: Sequence[float],
    grid_beats: Sequence[float],
    tolerance: float,
) -> list[int]:
    """Mark each grid point that has an onset within ``tolerance * grid_time``.

    The window is relative to the grid time, so a grid point at 0 only
    matches an onset at exactly 0.
    """
    pattern = []
    for grid_time in grid_beats:
        window = tolerance * grid_time
        hit = any(abs(onset - grid_time) <= window for onset in onsets)
        pattern.append(1 if hit else 0)
    return pattern


def swing_ratio(onsets: Sequence[float], expected: Sequence[float]) -> float:
    """Score how far onset spacing strays from the expected spacing.

    0.5 means the intervals match the reference exactly; larger average
    relative deviation pushes the score toward 1. Pairs whose expected
    interval is not positive are skipped.
    """
    if len(onsets) < 2 or len(expected) < 2:
        return _NEUTRAL_SWING

    total_deviation = 0.0
    count = 0
    for i in range(1, min(len(onsets), len(expected))):
        expected_interval = expected[i] - expected[i - 1]
        if expected_interval <= 0:
            continue
        actual_interval = onsets[i] - onsets[i - 1]
        total_deviation += abs(actual_interval / expected_interval - 1)
        count += 1

    if count == 0:
        return _NEUTRAL_SWING
    return max(0.0, min(1.0, _NEUTRAL_SWING + (total_deviation / count) * _SWING_SCALE))
