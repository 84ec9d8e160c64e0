"""Integration tests for /activities routes."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from fittrack.api.main import create_app
from fittrack.db.engine import get_session
from fittrack.db.repository import save_activity
from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats


@pytest.fixture(name="client")
def client_fixture(engine):
    app = create_app()

    def override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as c:
        yield c


@pytest.fixture(name="seeded_ids")
def seeded_activities_fixture(engine):
    ids = []
    with Session(engine) as s:
        for i in range(3):
            activity = save_activity(
                s,
                TrackingStats(distance_km=5.0 + i, duration_sec=1800, pace_min_per_km=6.0,
                              calories_kcal=300, avg_speed_kmh=10.0),
                [LocationSample(latitude=0.0, longitude=j * 0.001, timestamp_ms=j * 1000)
                 for j in range(i + 1)],
                ActivityType.RUN,
                recorded_at=datetime(2025, 1, 15 - i, 7, 30, tzinfo=timezone.utc),
            )
            ids.append(activity.id)
    return ids


class TestActivityRoutes:
    def test_list_activities_empty(self, client):
        resp = client.get("/activities/")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_list_activities_returns_all(self, client, seeded_ids):
        resp = client.get("/activities/")
        assert len(resp.json()) == 3

    def test_list_activities_newest_first(self, client, seeded_ids):
        dates = [a["recorded_at"] for a in client.get("/activities/").json()]
        assert dates == sorted(dates, reverse=True)

    def test_list_activities_limit(self, client, seeded_ids):
        assert len(client.get("/activities/?limit=2").json()) == 2

    def test_get_activity_by_id(self, client, seeded_ids):
        resp = client.get(f"/activities/{seeded_ids[1]}")
        assert resp.status_code == 200
        assert resp.json()["distance_km"] == 6.0

    def test_get_activity_not_found(self, client):
        assert client.get("/activities/99999").status_code == 404

    def test_get_path(self, client, seeded_ids):
        resp = client.get(f"/activities/{seeded_ids[2]}/path")
        assert resp.status_code == 200
        assert [p["seq"] for p in resp.json()] == [0, 1, 2]

    def test_get_path_not_found(self, client):
        assert client.get("/activities/99999/path").status_code == 404
