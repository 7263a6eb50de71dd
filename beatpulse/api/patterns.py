"""Stateless endpoints over the rhythm pattern functions."""

import logging

from fastapi import APIRouter

from beatpulse.analysis.beats import beat_grid
from beatpulse.analysis.pattern import extract_rhythm_pattern, rhythm_pattern, swing_ratio
from beatpulse.api.schemas import (
    GridRequest,
    GridResponse,
    PatternRequest,
    PatternResponse,
    QuantizeRequest,
    QuantizeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/grid", response_model=GridResponse)
async def grid(request: GridRequest):
    """Ideal beat positions for a tempo."""
    return GridResponse(beats=beat_grid(request.duration, request.bpm, request.sample_rate))


@router.post("/pattern", response_model=PatternResponse)
async def pattern(request: PatternRequest):
    """Match onsets against a grid and score their swing."""
    expected = request.expected if request.expected is not None else request.grid_beats
    logger.debug("Matching %d onsets against %d grid points", len(request.onsets), len(request.grid_beats))
    return PatternResponse(
        pattern=rhythm_pattern(request.onsets, request.grid_beats, request.tolerance),
        swing_ratio=swing_ratio(request.onsets, expected),
    )


@router.post("/quantize", response_model=QuantizeResponse)
async def quantize(request: QuantizeRequest):
    """One-bar occupancy pattern for a beat list."""
    return QuantizeResponse(
        pattern=extract_rhythm_pattern(request.beats, request.sample_rate, request.pattern_length),
    )
