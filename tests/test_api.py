"""Tests for the Sur Engine API endpoints."""

import pytest
from fastapi.testclient import TestClient

from sur_engine.api.main import create_app

YAMAN_AROHA = ["Sa", "Re", "Ga", "Ma#", "Pa", "Dha", "Ni", "Sa"]


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealthEndpoint:
    def test_returns_ok(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert data["raag_count"] == 27


# ---------------------------------------------------------------------------
# Swaras
# ---------------------------------------------------------------------------


class TestSwaraEndpoints:
    def test_swaras_returns_12(self, client):
        r = client.get("/api/v1/swaras")
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 12
        assert data[0]["label"] == "Sa"
        assert data[0]["devanagari"] == "सा"
        assert data[0]["western_equivalent"] == "C"
        assert data[6]["label"] == "Ma#"
        assert data[6]["is_teevra"] is True
        assert data[1]["is_komal"] is True

    def test_swaras_for_other_tonic(self, client):
        r = client.get("/api/v1/swaras", params={"pitch_class": "D", "octave": 3})
        data = r.json()
        assert data[0]["western_equivalent"] == "D"
        assert data[7]["western_equivalent"] == "A"
        assert data[7]["frequency_hz"] == pytest.approx(220.0)

    def test_swaras_bad_tonic(self, client):
        r = client.get("/api/v1/swaras", params={"pitch_class": "H"})
        assert r.status_code == 400

    def test_map_frequency(self, client):
        r = client.post("/api/v1/map", json={"frequency_hz": 369.99})
        assert r.status_code == 200
        body = r.json()
        assert body["western_note"] == "F#"
        assert body["octave"] == 4
        assert body["swara_label"] == "Ma#"
        assert body["swara_devanagari"] == "म#"
        assert body["saptak"] == 0

    def test_map_relative_to_tonic(self, client):
        r = client.post(
            "/api/v1/map",
            json={"frequency_hz": 880.0, "tonic": {"pitch_class": "A", "octave": 4}},
        )
        body = r.json()
        assert body["swara_label"] == "Sa*"
        assert body["saptak"] == 1
        assert body["midi_number"] == 81

    @pytest.mark.parametrize("freq", [0, -100.0])
    def test_map_rejects_non_positive(self, client, freq):
        r = client.post("/api/v1/map", json={"frequency_hz": freq})
        assert r.status_code == 400

    def test_map_rejects_bad_tonic(self, client):
        r = client.post(
            "/api/v1/map",
            json={"frequency_hz": 440.0, "tonic": {"pitch_class": "Z", "octave": 4}},
        )
        assert r.status_code == 400


# ---------------------------------------------------------------------------
# Raags
# ---------------------------------------------------------------------------


class TestRaagEndpoints:
    def test_raags_returns_27(self, client):
        r = client.get("/api/v1/raags")
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 27
        assert data[0]["id"] == "Yaman"
        assert data[0]["time"] == "Evening"

    def test_single_raag(self, client):
        r = client.get("/api/v1/raags/malkauns")
        assert r.status_code == 200
        body = r.json()
        assert body["id"] == "Malkauns"
        assert body["thaat"] == "Bhairavi"

    def test_unknown_raag(self, client):
        r = client.get("/api/v1/raags/Hamsadhwani")
        assert r.status_code == 404

    def test_thaats(self, client):
        data = client.get("/api/v1/thaats").json()
        assert data["Todi"] == ["Todi", "Miyan Ki Todi"]

    def test_match_yaman(self, client):
        r = client.post("/api/v1/match", json={"swaras": YAMAN_AROHA})
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "success"
        assert body["sufficient_data"] is True
        top = body["matches"][0]
        assert top["raag_id"] == "Yaman"
        assert top["thaat"] == "Kalyan"
        assert top["aroha_presence"] == 1.0
        assert top["aroha_sequence"] == 1.0
        assert top["confidence"] == pytest.approx(0.8075)

    def test_match_insufficient_data(self, client):
        r = client.post("/api/v1/match", json={"swaras": ["Sa", "Re"]})
        assert r.status_code == 200
        body = r.json()
        assert body["sufficient_data"] is False
        assert body["matches"] == []

    def test_match_strips_octave_markers(self, client):
        marked = ["*Ni", "Sa", "Re", "Ga", "Ma#", "Pa", "Dha", "Ni", "Sa*"]
        r = client.post("/api/v1/match", json={"swaras": marked, "strip_octave_markers": True})
        body = r.json()
        assert body["swaras"][0] == "Ni"
        assert body["swaras"][-1] == "Sa"
        assert body["matches"][0]["raag_id"] == "Yaman"

    def test_match_strip_rejects_unknown_label(self, client):
        r = client.post(
            "/api/v1/match",
            json={"swaras": ["Sa", "Xa", "Ga"], "strip_octave_markers": True},
        )
        assert r.status_code == 400
