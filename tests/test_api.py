"""Tests for ui/app.py: JSON endpoints over the workspace store."""

import pytest
from fastapi.testclient import TestClient

from ui.app import app


@pytest.fixture
def client(workspace):
    return TestClient(app)


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": "true"}


def test_list_habits(client):
    resp = client.get("/api/habits")
    assert resp.status_code == 200
    assert [h["id"] for h in resp.json()["habits"]] == [1, 2, 3, 4]


def test_scores(client):
    resp = client.get("/api/habits/1/scores", params={"days": 7})
    assert resp.status_code == 200
    scores = resp.json()["scores"]
    assert len(scores) == 7
    assert scores[0]["day"] < scores[-1]["day"]


def test_scores_bad_window(client):
    assert client.get("/api/habits/1/scores", params={"days": 0}).status_code == 400


def test_unknown_habit(client):
    assert client.get("/api/habits/99/scores").status_code == 404
    assert client.get("/api/habits/99/months").status_code == 404


def test_months(client):
    resp = client.get("/api/habits/1/months", params={"months": 3})
    assert resp.status_code == 200
    months = resp.json()["months"]
    assert len(months) == 3
    assert months[0]["monthStart"] < months[-1]["monthStart"]


def test_days(client):
    resp = client.get("/api/habits/3/days", params={"start": "2026-03-01", "end": "2026-03-31"})
    assert resp.status_code == 200
    assert resp.json()["days"] == {"2026-03-10": 8000}


def test_days_bad_range(client):
    params = {"start": "2026-03-31", "end": "2026-03-01"}
    assert client.get("/api/habits/1/days", params=params).status_code == 400
    params = {"start": "March", "end": "2026-03-01"}
    assert client.get("/api/habits/1/days", params=params).status_code == 400


def test_toggle(client):
    resp = client.post("/api/habits/2/toggle", json={"date": "2026-03-12"})
    assert resp.json() == {"ok": True, "habit": 2, "date": "2026-03-12", "done": True}
    days = client.get("/api/habits/2/days", params={"start": "2026-03-12", "end": "2026-03-12"}).json()
    assert days["days"] == {"2026-03-12": 1}
    resp = client.post("/api/habits/2/toggle", json={"date": "2026-03-12"})
    assert resp.json()["done"] is False


def test_auth_required_when_configured(client, monkeypatch):
    monkeypatch.setenv("HABITS_USERNAME", "me")
    monkeypatch.setenv("HABITS_PASSWORD", "secret")
    assert client.get("/api/habits").status_code == 401
    assert client.get("/api/habits", auth=("me", "wrong")).status_code == 401
    assert client.get("/api/habits", auth=("me", "secret")).status_code == 200


def test_list_habits_flags_done_today(client):
    assert not any(h["done_today"] for h in client.get("/api/habits").json()["habits"])
    assert client.post("/api/habits/2/toggle", json={}).json()["done"] is True
    flags = {h["id"]: h["done_today"] for h in client.get("/api/habits").json()["habits"]}
    assert flags == {1: False, 2: True, 3: False, 4: False}
