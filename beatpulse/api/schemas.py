"""Pydantic request/response models for the API."""

from pydantic import BaseModel, Field

from beatpulse.config import settings


class GridRequest(BaseModel):
    duration: float = Field(ge=0)  # samples
    bpm: float = Field(gt=0)
    sample_rate: int = Field(default_factory=lambda: settings.sample_rate, gt=0)


class GridResponse(BaseModel):
    beats: list[float]


class PatternRequest(BaseModel):
    onsets: list[float]
    grid_beats: list[float]
    tolerance: float = Field(default=0.05, ge=0)
    expected: list[float] | None = None  # defaults to grid_beats


class PatternResponse(BaseModel):
    pattern: list[int]
    swing_ratio: float


class QuantizeRequest(BaseModel):
    beats: list[float]
    sample_rate: int = Field(default_factory=lambda: settings.sample_rate, gt=0)
    pattern_length: int = Field(default_factory=lambda: settings.pattern_length, gt=0)


class QuantizeResponse(BaseModel):
    pattern: list[int]


# WebSocket message types

class TempoMessage(BaseModel):
    type: str = "tempo"
    bpm: int
    confidence: float
    beats: list[float]
    level: float  # RMS of the analysed window


class ResetMessage(BaseModel):
    type: str = "reset"


class ErrorMessage(BaseModel):
    type: str = "error"
    message: str
