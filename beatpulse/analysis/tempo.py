"""Tempo estimation from inter-beat intervals."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from beatpulse.analysis.beats import detect_beats
from beatpulse.analysis.models import BeatDetectionOptions, TempoAnalysisResult, round_half_up
from beatpulse.analysis.onset import OnsetDetector

logger = logging.getLogger(__name__)

# Variance (in BPM^2) at which confidence reaches zero.
_VARIANCE_SCALE = 1000.0


def estimate_tempo_from_beats(
    beats: Sequence[float],
    sample_rate: int,
    min_bpm: float = 60.0,
    max_bpm: float = 180.0,
) -> TempoAnalysisResult:
    """Average the per-interval BPM of *beats* that falls within [min_bpm, max_bpm].

    Confidence drops linearly with the variance of those candidates.
    Returns ``bpm=0`` when there are fewer than two beats or no candidate
    is in range, or when the rounded average lands outside the range.
    """
    beats = list(beats)
    if len(beats) < 2:
        return TempoAnalysisResult(bpm=0, confidence=0.0, beats=beats)

    intervals = np.diff(np.asarray(beats, dtype=np.float64))
    # Duplicate timestamps would divide by zero
    intervals = intervals[intervals > 0]
    if len(intervals) == 0:
        return TempoAnalysisResult(bpm=0, confidence=0.0, beats=beats)

    bpms = 60.0 * sample_rate / intervals
    valid = bpms[(bpms >= min_bpm) & (bpms <= max_bpm)]
    if len(valid) == 0:
        logger.debug("No BPM candidates in [%.0f, %.0f] from %d intervals", min_bpm, max_bpm, len(bpms))
        return TempoAnalysisResult(bpm=0, confidence=0.0, beats=beats)

    avg_bpm = float(np.mean(valid))
    variance = float(np.mean((valid - avg_bpm) ** 2))
    confidence = max(0.0, min(1.0, 1.0 - variance / _VARIANCE_SCALE))

    bpm = round_half_up(avg_bpm)
    # Fractional bounds can push the rounded value just outside the range
    if not min_bpm <= bpm <= max_bpm:
        return TempoAnalysisResult(bpm=0, confidence=0.0, beats=beats)

    return TempoAnalysisResult(bpm=bpm, confidence=confidence, beats=beats)


def analyze_tempo(
    audio: np.ndarray,
    sample_rate: int,
    options: BeatDetectionOptions | None = None,
    onset_detector: OnsetDetector | None = None,
) -> TempoAnalysisResult:
    """Detect beats in *audio* and estimate its tempo."""
    options = options or BeatDetectionOptions.from_settings()
    beats = detect_beats(audio, sample_rate, options, onset_detector)
    result = estimate_tempo_from_beats(beats, sample_rate, options.min_bpm, options.max_bpm)
    logger.debug(f"Tempo {result.bpm} BPM (confidence {result.confidence:.2f}, {len(beats)} beats)")
    return result
