"""Audio conditioning helpers applied before onset detection."""

from __future__ import annotations

import numpy as np
from scipy.signal import butter, sosfilt


def rms(audio: np.ndarray) -> float:
    """Root-mean-square amplitude of *audio*, 0.0 for an empty buffer."""
    audio = np.asarray(audio, dtype=np.float64)
    if audio.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(audio ** 2)))


def normalize(audio: np.ndarray) -> np.ndarray:
    """Peak-normalize audio to the range [-1, 1].

    Silent input is returned unchanged.
    """
    peak = np.max(np.abs(audio)) if len(audio) else 0.0
    if peak == 0:
        return audio
    return audio / peak


def high_pass_filter(
    audio: np.ndarray,
    sr: int,
    cutoff: float = 60.0,
) -> np.ndarray:
    """Apply a 4th-order Butterworth high-pass filter.

    Parameters
    ----------
    audio:
        Input audio signal.
    sr:
        Sample rate in Hz.
    cutoff:
        Cutoff frequency in Hz. Must be below Nyquist.
    """
    if cutoff >= sr / 2:
        raise ValueError(f"cutoff {cutoff} Hz must be below Nyquist ({sr / 2} Hz)")
    sos = butter(N=4, Wn=cutoff, btype="high", fs=sr, output="sos")
    return sosfilt(sos, audio)


def preprocess(audio: np.ndarray, sr: int, cutoff: float = 60.0) -> np.ndarray:
    """Normalize then high-pass filter, removing rumble that masks transients."""
    audio = normalize(np.asarray(audio, dtype=np.float32))
    if len(audio) == 0:
        return audio
    return high_pass_filter(audio, sr, cutoff=cutoff).astype(np.float32)
