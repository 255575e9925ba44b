import pytest
from fastapi.testclient import TestClient

from trail_service.config import Settings
from trail_service.datasource import ResolutionPolicy
from trail_service.main import create_app

MEMORY_URL = "jdbc:sqlite:///:memory:"

BUCEGI_TRAILS = [
    {
        "name": "Zarnesti Loop (Blue Triangle)",
        "description": "Refugiul Diana - Padina Popii - Ridge traverse",
        "distance": 14.2,
        "elevationGain": 880,
        "elevationLoss": 880,
        "durationMinutes": 300,
        "maxSlope": 40.0,
        "avgSlope": 18.0,
        "terrain": ["alpine", "rocky", "ridge"],
        "difficulty": "HARD",
        "hazards": ["exposure"],
        "source": "osm",
        "latitude": 45.42,
        "longitude": 25.61,
        "waypoints": [[45.41, 25.595], [45.42, 25.61]],
        "trailMarking": "BLUE_TRIANGLE",
        "isCircular": True,
    },
    {
        "name": "Babele to Sphinx Ridge (Blue Cross)",
        "description": "Alpine ridge connector with dramatic rock formations",
        "distance": 8.5,
        "elevationGain": 520,
        "elevationLoss": 520,
        "durationMinutes": 180,
        "terrain": ["ridge", "rock", "alpine"],
        "difficulty": "MEDIUM",
        "hazards": ["exposure"],
        "source": "osm",
        "latitude": 45.3456,
        "longitude": 25.5123,
        "trailMarking": "BLUE_CROSS",
    },
    {
        "name": "Sinaia to Omu Peak (Blue Route)",
        "description": "Blue-striped trail from Sinaia through Cabana Stana Regala to Omu",
        "distance": 18.5,
        "elevationGain": 1850,
        "elevationLoss": 1850,
        "durationMinutes": 420,
        "terrain": ["forest", "alpine_meadow", "rocky"],
        "difficulty": "HARD",
        "hazards": ["exposure", "weather"],
        "source": "osm",
        "latitude": 45.3585,
        "longitude": 25.505,
        "trailMarking": "BLUE_STRIPE",
    },
    {
        "name": "Peaks Connector Trail (Blue Dot)",
        "distance": 7.5,
        "difficulty": "easy",
        "latitude": 45.35,
        "longitude": 25.52,
    },
]


@pytest.fixture
def settings() -> Settings:
    return Settings(policy=ResolutionPolicy.FALLBACK_SILENT, default_url=MEMORY_URL)


@pytest.fixture
def app(settings):
    return create_app(settings, setup_logging=False)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client):
    for trail in BUCEGI_TRAILS:
        resp = client.post("/api/v1/trails", json=trail)
        assert resp.status_code == 201
    return client
