"""Onset detection using librosa."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

import librosa
import numpy as np

from beatpulse.audio.preprocessing import preprocess
from beatpulse.config import settings

logger = logging.getLogger(__name__)


class OnsetDetector(Protocol):
    """Anything that turns audio into ascending onset sample indices."""

    def __call__(self, audio: np.ndarray, sr: int, threshold: float) -> Sequence[float]: ...


def detect_onsets(audio: np.ndarray, sr: int = 22050, threshold: float = 0.3) -> list[int]:
    """Detect onsets in audio, returned as ascending sample indices.

    *threshold* is the peak-picking delta on the normalized onset strength
    envelope; higher values keep only stronger transients.
    """
    audio = np.asarray(audio, dtype=np.float32).ravel()
    if len(audio) == 0:
        return []

    audio = preprocess(audio, sr, cutoff=settings.high_pass_cutoff)
    onset_env = librosa.onset.onset_strength(y=audio, sr=sr)
    samples = librosa.onset.onset_detect(
        onset_envelope=onset_env,
        sr=sr,
        units="samples",
        backtrack=False,
        delta=threshold,
    )
    onsets = sorted(int(s) for s in samples)
    logger.debug("Detected %d onsets in %.2fs of audio", len(onsets), len(audio) / sr)
    return onsets
