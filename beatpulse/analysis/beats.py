"""Beat extraction from onsets and idealized beat grids."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from beatpulse.analysis.models import BeatDetectionOptions
from beatpulse.analysis.onset import OnsetDetector, detect_onsets

logger = logging.getLogger(__name__)


def beat_grid(duration: float, bpm: float, sample_rate: int) -> list[float]:
    """Evenly spaced beat positions (in samples) covering *duration* samples.

    The grid starts at 0 and holds ``floor(duration / beat_interval)`` points.
    """
    if bpm <= 0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    beat_interval = (60.0 / bpm) * sample_rate
    if beat_interval <= 0:
        return []
    n_beats = math.floor(duration / beat_interval)
    return [i * beat_interval for i in range(max(0, n_beats))]


def filter_onsets(
    onsets: Sequence[float],
    sample_rate: int,
    min_interval_fraction: float = 0.2,
) -> list[float]:
    """Drop onsets closer than ``sample_rate * min_interval_fraction`` to the last kept one.

    Greedy left-to-right scan, so the first onset is always kept.
    """
    min_interval = sample_rate * min_interval_fraction
    beats = []
    last_beat = -min_interval
    for onset in onsets:
        if onset - last_beat >= min_interval:
            beats.append(onset)
            last_beat = onset
    return beats


def detect_beats(
    audio: np.ndarray,
    sample_rate: int,
    options: BeatDetectionOptions | None = None,
    onset_detector: OnsetDetector | None = None,
) -> list[float]:
    """Run onset detection on *audio* and thin the onsets into beats."""
    options = options or BeatDetectionOptions.from_settings()
    detector = onset_detector or detect_onsets

    onsets = detector(audio, sample_rate, options.threshold)
    beats = filter_onsets(onsets, sample_rate, options.min_interval_fraction)
    logger.debug("Kept %d of %d onsets as beats", len(beats), len(onsets))
    return beats
