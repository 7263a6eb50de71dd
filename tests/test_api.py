"""Tests for the HTTP and WebSocket API."""

import numpy as np

import beatpulse.api.websocket as websocket_module
from beatpulse.config import settings
from tests.conftest import SR, fixed_onsets, steady_onsets


def test_health_endpoint(client):
    """GET /api/health should return ok."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_grid_endpoint(client):
    response = client.post("/api/grid", json={"duration": SR, "bpm": 120, "sample_rate": SR})
    assert response.status_code == 200
    assert response.json() == {"beats": [0.0, SR / 2]}


def test_grid_endpoint_rejects_zero_bpm(client):
    response = client.post("/api/grid", json={"duration": SR, "bpm": 0})
    assert response.status_code == 422


def test_pattern_endpoint(client):
    response = client.post("/api/pattern", json={
        "onsets": [0, 22050, 44100],
        "grid_beats": [0, 22050, 44100],
        "tolerance": 0.05,
    })
    assert response.status_code == 200
    assert response.json() == {"pattern": [1, 1, 1], "swing_ratio": 0.5}


def test_pattern_endpoint_with_expected(client):
    response = client.post("/api/pattern", json={
        "onsets": [0, 150, 200, 350],
        "grid_beats": [0, 100, 200, 300],
        "expected": [0, 100, 200, 300],
        "tolerance": 0.0,
    })
    data = response.json()
    assert data["pattern"] == [1, 0, 1, 0]
    assert abs(data["swing_ratio"] - 0.55) < 1e-9


def test_quantize_endpoint(client):
    response = client.post("/api/quantize", json={"beats": steady_onsets(120), "sample_rate": SR})
    pattern = response.json()["pattern"]
    assert len(pattern) == settings.pattern_length
    assert pattern[0] == pattern[4] == 1


def test_quantize_endpoint_insufficient_beats(client):
    response = client.post("/api/quantize", json={"beats": [0]})
    assert response.json() == {"pattern": []}


def test_live_websocket_tracks_tempo(client, monkeypatch):
    monkeypatch.setattr(settings, "reanalysis_seconds", 0.5)
    monkeypatch.setattr(websocket_module, "detect_onsets", fixed_onsets(steady_onsets(120), steady_onsets(90)))
    chunk = np.zeros(SR // 2, dtype=np.float32)

    with client.websocket_connect("/api/ws/live") as ws:
        ws.send_bytes(chunk.tobytes())
        first = ws.receive_json()
        assert first["type"] == "tempo"
        assert first["bpm"] == 120
        assert first["confidence"] == 1.0
        assert first["level"] == 0.0

        ws.send_bytes(chunk.tobytes())
        second = ws.receive_json()
        assert second["bpm"] == 105

        ws.send_text("reset")
        assert ws.receive_json() == {"type": "reset"}

        ws.send_bytes(chunk.tobytes())
        assert ws.receive_json()["bpm"] == 90


def test_live_websocket_waits_for_enough_audio(client, monkeypatch):
    monkeypatch.setattr(settings, "reanalysis_seconds", 1.0)
    monkeypatch.setattr(websocket_module, "detect_onsets", fixed_onsets([]))
    quarter = np.zeros(SR // 4, dtype=np.float32)

    with client.websocket_connect("/api/ws/live") as ws:
        for _ in range(3):
            ws.send_bytes(quarter.tobytes())
        ws.send_text("reset")
        # no tempo message was produced before the reset reply
        assert ws.receive_json() == {"type": "reset"}
