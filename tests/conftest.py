"""Shared test fixtures for tempo and rhythm tests."""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from beatpulse.main import app

SR = 22050


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def generate_click_track(
    bpm: float,
    duration_seconds: float = 4.0,
    sr: int = SR,
) -> np.ndarray:
    """Generate a synthetic click track with one 1 kHz click per beat."""
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    click_samples = int(0.02 * sr)
    t_click = np.arange(click_samples) / sr
    click = np.sin(2 * np.pi * 1000 * t_click) * np.exp(-t_click * 100)

    beat_interval = 60.0 / bpm
    time = 0.0
    while time < duration_seconds:
        start = int(time * sr)
        end = min(start + click_samples, n_samples)
        if end > start:
            audio[start:end] += click[:end - start]
        time += beat_interval

    return audio


def fixed_onsets(*onset_lists):
    """Onset detector stub that returns the given onset lists on successive calls.

    The last list repeats once the others are used up.
    """
    calls = {"n": 0, "thresholds": []}

    def detector(audio, sr, threshold):
        calls["thresholds"].append(threshold)
        index = min(calls["n"], len(onset_lists) - 1)
        calls["n"] += 1
        return list(onset_lists[index])

    detector.calls = calls
    return detector


def steady_onsets(bpm: float, n_beats: int = 8, sr: int = SR) -> list[float]:
    interval = 60.0 * sr / bpm
    return [i * interval for i in range(n_beats)]


@pytest.fixture
def click_120():
    """Click track at 120 BPM."""
    return generate_click_track(bpm=120, duration_seconds=4)


@pytest.fixture
def silence():
    return np.zeros(SR, dtype=np.float32)
