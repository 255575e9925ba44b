import pytest

from trail_service.datasource import ConnectionDescriptor
from trail_service.db import Database, DuplicateTrailError, TrailRepository, engine_url
from trail_service.schemas import TrailCreate

from conftest import BUCEGI_TRAILS, MEMORY_URL


def _repository() -> TrailRepository:
    database = Database(ConnectionDescriptor(driver_id="sqlite", url=MEMORY_URL))
    database.create_all()
    repo = TrailRepository(database)
    for trail in BUCEGI_TRAILS:
        repo.add(TrailCreate(**trail))
    return repo


def test_engine_url_strips_prefix_and_selects_driver():
    descriptor = ConnectionDescriptor(
        driver_id="postgresql",
        url="jdbc:postgresql://u:p@h:5432/db?sslmode=require",
    )

    url = engine_url(descriptor)

    assert url.drivername == "postgresql+psycopg"
    assert url.username == "u"
    assert url.password == "p"
    assert url.host == "h"
    assert url.port == 5432
    assert url.database == "db"
    assert url.query["sslmode"] == "require"


def test_engine_url_accepts_postgres_scheme():
    descriptor = ConnectionDescriptor(driver_id="postgresql", url="jdbc:postgres://h/db?sslmode=require")

    assert engine_url(descriptor).drivername == "postgresql+psycopg"


def test_engine_url_explicit_credentials_override_embedded():
    descriptor = ConnectionDescriptor(
        driver_id="postgresql",
        url="jdbc:postgresql://embedded:old@h/db?sslmode=require",
        username="trail",
        password="new",
    )

    url = engine_url(descriptor)

    assert url.username == "trail"
    assert url.password == "new"


def test_engine_url_keeps_sqlite():
    url = engine_url(ConnectionDescriptor(driver_id="sqlite", url=MEMORY_URL))

    assert url.get_backend_name() == "sqlite"
    assert url.database == ":memory:"


def test_find_in_area_without_difficulty_returns_all_sorted():
    repo = _repository()

    names = [t.name for t in repo.find_in_area(None)]

    assert names == sorted(t["name"] for t in BUCEGI_TRAILS)


def test_find_in_area_filters_by_exact_difficulty():
    repo = _repository()

    hard = repo.find_in_area("HARD")

    assert [t.name for t in hard] == ["Sinaia to Omu Peak (Blue Route)", "Zarnesti Loop (Blue Triangle)"]
    assert repo.find_in_area("hard") == []
    assert [t.name for t in repo.find_in_area("easy")] == ["Peaks Connector Trail (Blue Dot)"]


def test_find_by_difficulty_exact_match():
    repo = _repository()

    medium = repo.find_by_difficulty("MEDIUM")

    assert len(medium) == 1
    assert medium[0].trail_marking == "BLUE_CROSS"
    assert repo.find_by_difficulty("EXTREME") == []


def test_add_and_get_round_trip_fields():
    repo = _repository()
    created = repo.add(TrailCreate(**BUCEGI_TRAILS[0], id="trail-fixed-id"))

    fetched = repo.get("trail-fixed-id")

    assert fetched == created
    assert fetched.terrain == ["alpine", "rocky", "ridge"]
    assert fetched.waypoints == [[45.41, 25.595], [45.42, 25.61]]
    assert fetched.is_circular is True
    assert repo.get("missing") is None
    assert repo.count() == len(BUCEGI_TRAILS) + 1


def test_add_duplicate_id_raises_domain_error():
    repo = _repository()
    repo.add(TrailCreate(**BUCEGI_TRAILS[1], id="babele-sphinx"))

    with pytest.raises(DuplicateTrailError):
        repo.add(TrailCreate(**BUCEGI_TRAILS[1], id="babele-sphinx"))

    # The session was rolled back; the repository keeps working.
    assert repo.get("babele-sphinx").name == BUCEGI_TRAILS[1]["name"]
    assert repo.count() == len(BUCEGI_TRAILS) + 1


def test_snake_case_fields_still_accepted():
    trail = TrailCreate(name="Snake", distance=1.0, difficulty="EASY", latitude=45.0, longitude=25.0, elevation_gain=42)

    assert trail.elevation_gain == 42
