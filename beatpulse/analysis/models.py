"""Core data models for tempo and rhythm analysis."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from beatpulse.config import Settings, settings as default_settings


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (120.5 -> 121)."""
    return int(math.floor(value + 0.5))


@dataclass
class BeatDetectionOptions:
    """Knobs for beat detection and tempo estimation."""
    threshold: float = 0.3  # onset sensitivity, forwarded to the detector
    min_bpm: float = 60.0
    max_bpm: float = 180.0
    window_size: int = 1024  # accepted but unused
    min_interval_fraction: float = 0.2

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> BeatDetectionOptions:
        s = s or default_settings
        return cls(
            threshold=s.onset_threshold,
            min_bpm=s.min_bpm,
            max_bpm=s.max_bpm,
            window_size=s.window_size,
            min_interval_fraction=s.min_interval_fraction,
        )


@dataclass
class TempoAnalysisResult:
    """Tempo estimate for one audio window.

    ``bpm == 0`` means the tempo could not be determined.
    """
    bpm: int
    confidence: float  # 0.0-1.0
    beats: list[float] = field(default_factory=list)  # sample indices

    @property
    def is_determined(self) -> bool:
        return self.bpm > 0
