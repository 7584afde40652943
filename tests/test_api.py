"""Tests for the FastAPI timeline API.

WHY: Validates that every endpoint behaves correctly — happy paths,
validation errors and unknown formats. Uses the FastAPI TestClient for
synchronous in-process testing.

HOW: Each test posts the shared sample payload (or a variant) and checks
status codes, bodies and headers.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- Word ids are random UUIDs here; tests never assert on their values
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from suno_timeline import __version__
from suno_timeline.server.app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def body(sample_aligned_words):
    return {"resource_id": "song-1", "aligned_words": sample_aligned_words}


# ---------------------------------------------------------------------------
# POST /timelines
# ---------------------------------------------------------------------------


class TestCreateTimeline:

    def test_returns_nested_timeline(self, client, body):
        response = client.post("/timelines", json=body)
        assert response.status_code == 200
        data = response.json()
        assert data["resourceID"] == "song-1"
        assert data["duration"] == 0
        texts = [
            [[w["text"] for w in line["words"]] for line in p["lines"]]
            for p in data["paragraphs"]
        ]
        assert texts == [[["Hello", "world"], ["sing", "along"]], [[], ["La", "la"]]]

    def test_word_ids_unique(self, client, body):
        data = client.post("/timelines", json=body).json()
        ids = [
            w["wordID"]
            for p in data["paragraphs"] for line in p["lines"] for w in line["words"]
        ]
        assert len(ids) == len(set(ids)) == 6

    def test_options(self, client, body):
        body.update({"offset_s": 1.0, "duration_s": 42.0, "split_words": False})
        data = client.post("/timelines", json=body).json()
        assert data["offsetSec"] == 1.0
        assert data["duration"] == 42.0
        first = data["paragraphs"][0]["lines"][0]["words"][0]
        assert first["text"] == "Hello world"
        assert first["begin"] == pytest.approx(1.5)

    def test_empty_words(self, client):
        data = client.post("/timelines", json={"resource_id": "x", "aligned_words": []}).json()
        assert data["paragraphs"] == [{"lines": [{"words": [], "tokens": None}], "tokens": None}]

    def test_missing_field_is_422(self, client):
        response = client.post(
            "/timelines",
            json={"resource_id": "x", "aligned_words": [{"word": "a", "start_s": 0}]},
        )
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# POST /timelines/render/{format_key}
# ---------------------------------------------------------------------------


class TestRenderTimeline:

    def test_plain_text(self, client, body):
        response = client.post("/timelines/render/plain_text", json=body)
        assert response.status_code == 200
        assert response.text == "Hello world\nsing along\n\nLa la\n"
        assert response.headers["content-type"].startswith("text/plain")
        assert 'filename="song-1-lyrics.txt"' in response.headers["content-disposition"]

    def test_lrc(self, client, body):
        response = client.post("/timelines/render/lrc", json=body)
        assert response.status_code == 200
        assert "[00:00.50]<00:00.50>Hello <00:01.00>world<00:01.50>" in response.text

    def test_unknown_format_is_404(self, client, body):
        response = client.post("/timelines/render/midi", json=body)
        assert response.status_code == 404
        assert "Unknown format 'midi'" in response.json()["detail"]


# ---------------------------------------------------------------------------
# GET /formats, GET /health
# ---------------------------------------------------------------------------


class TestDiscovery:

    def test_formats(self, client):
        response = client.get("/formats")
        assert response.status_code == 200
        formats = {f["key"]: f for f in response.json()}
        assert set(formats) == {"lrc", "plain_text", "srt_captions", "timeline_json"}
        assert formats["lrc"]["suffix"] == "-lyrics.lrc"
        assert formats["timeline_json"]["name"] == "Timeline JSON"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}
