"""WebSocket endpoint for live tempo tracking."""

import asyncio
import logging

import numpy as np
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from beatpulse.analysis.onset import detect_onsets
from beatpulse.analysis.tracker import TempoTracker
from beatpulse.api.schemas import ErrorMessage, ResetMessage, TempoMessage
from beatpulse.audio.preprocessing import rms
from beatpulse.audio.stream import StreamBuffer
from beatpulse.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/live")
async def live_tempo(websocket: WebSocket):
    """Live tempo tracking via WebSocket.

    Protocol:
    - Client sends binary Float32 PCM chunks (settings.sample_rate, mono)
    - Client may send the text message "reset" to clear tracker and buffer
    - Server sends JSON messages:
      - {"type": "tempo", "bpm": B, "confidence": C, "beats": [...], "level": L}
      - {"type": "reset"}
      - {"type": "error", "message": "..."}
    """
    await websocket.accept()
    logger.info("Live tempo session opened")

    sr = settings.sample_rate
    stream_buffer = StreamBuffer(
        sr=sr,
        window_seconds=settings.analysis_window_seconds,
        hop_seconds=settings.reanalysis_seconds,
    )
    tracker = TempoTracker(onset_detector=detect_onsets, max_history=settings.tracker_history)
    loop = asyncio.get_running_loop()

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            text = message.get("text")
            if text is not None:
                if text.strip() == "reset":
                    tracker.reset()
                    stream_buffer.clear()
                    await websocket.send_json(ResetMessage().model_dump())
                continue

            data = message.get("bytes") or b""
            n_samples = len(data) // 4
            if n_samples == 0:
                continue
            audio = stream_buffer.push(np.frombuffer(data[:n_samples * 4], dtype=np.float32))
            if audio is None:
                continue

            # Awaited before the next receive, so the tracker is never updated concurrently
            result = await loop.run_in_executor(None, tracker.update, audio, sr)
            await websocket.send_json(TempoMessage(
                bpm=result.bpm,
                confidence=result.confidence,
                beats=[float(b) for b in result.beats],
                level=rms(audio),
            ).model_dump())

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception("Live tempo session failed")
        try:
            await websocket.send_json(ErrorMessage(message=str(e)).model_dump())
        except (WebSocketDisconnect, RuntimeError):
            logger.debug("Client gone before error could be sent")
    finally:
        logger.info("Live tempo session closed")
