"""Sliding analysis window over live audio."""

from __future__ import annotations

import numpy as np


class StreamBuffer:
    """Keeps the newest ``window_seconds`` of audio and says when to re-analyse.

    Every ``hop_seconds`` worth of newly pushed samples, :meth:`push`
    hands back a copy of the current window; otherwise it returns ``None``.

    Parameters
    ----------
    sr:
        Sample rate in Hz.
    window_seconds:
        Length of the analysis window.
    hop_seconds:
        Amount of new audio between two analyses.
    """

    def __init__(self, sr: int, window_seconds: float = 8.0, hop_seconds: float = 1.0) -> None:
        if sr <= 0:
            raise ValueError(f"sample rate must be positive, got {sr}")
        if window_seconds <= 0 or hop_seconds <= 0:
            raise ValueError("window_seconds and hop_seconds must be positive")
        self.sr = sr
        self.window_samples = max(1, int(sr * window_seconds))
        self.hop_samples = max(1, int(sr * hop_seconds))
        self._window = np.zeros(0, dtype=np.float32)
        self._pending = 0  # samples pushed since the last window was handed out

    def push(self, chunk: np.ndarray) -> np.ndarray | None:
        """Add a chunk; return the window if a new analysis is due."""
        chunk = np.asarray(chunk, dtype=np.float32).ravel()
        if len(chunk) == 0:
            return None

        self._window = np.concatenate([self._window, chunk])[-self.window_samples:]
        self._pending += len(chunk)
        if self._pending < self.hop_samples:
            return None

        self._pending = 0
        return self._window.copy()

    @property
    def duration(self) -> float:
        """Seconds of audio currently in the window."""
        return len(self._window) / self.sr

    def clear(self) -> None:
        self._window = np.zeros(0, dtype=np.float32)
        self._pending = 0
