"""Smoothed tempo tracking across successive audio windows."""

from __future__ import annotations

import dataclasses
import logging
from collections import deque

import numpy as np

from beatpulse.analysis.models import BeatDetectionOptions, TempoAnalysisResult, round_half_up
from beatpulse.analysis.onset import OnsetDetector
from beatpulse.analysis.tempo import analyze_tempo

logger = logging.getLogger(__name__)

_MAX_HISTORY = 8


class TempoTracker:
    """Moving-average filter over the last few per-window BPM estimates.

    Windows whose tempo is undetermined (``bpm == 0``) are not recorded.
    An instance is not thread-safe; callers serialize ``update`` and ``reset``.
    """

    def __init__(
        self,
        options: BeatDetectionOptions | None = None,
        onset_detector: OnsetDetector | None = None,
        max_history: int = _MAX_HISTORY,
    ) -> None:
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        self.options = options or BeatDetectionOptions.from_settings()
        self.onset_detector = onset_detector
        self._history: deque[int] = deque(maxlen=max_history)

    def update(self, audio: np.ndarray, sample_rate: int) -> TempoAnalysisResult:
        """Analyze one window and return it with the smoothed BPM."""
        analysis = analyze_tempo(audio, sample_rate, self.options, self.onset_detector)

        if analysis.bpm > 0:
            self._history.append(analysis.bpm)

        smoothed = self.smoothed_bpm
        if smoothed is None:
            return analysis

        logger.debug("Raw %d BPM, smoothed %.1f over %d windows", analysis.bpm, smoothed, len(self._history))
        return dataclasses.replace(analysis, bpm=round_half_up(smoothed))

    def reset(self) -> None:
        self._history.clear()

    @property
    def history(self) -> tuple[int, ...]:
        """Recorded BPM estimates, oldest first."""
        return tuple(self._history)

    @property
    def smoothed_bpm(self) -> float | None:
        if not self._history:
            return None
        return sum(self._history) / len(self._history)
