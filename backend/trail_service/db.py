from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, select, func
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .datasource import ConnectionDescriptor, URL_SCHEME_PREFIX
from .models import Base, TrailModel
from .schemas import Trail, TrailCreate

POSTGRES_DIALECT = "postgresql+psycopg"


class DuplicateTrailError(ValueError):
    """A trail with the same id is already stored."""


def engine_url(descriptor: ConnectionDescriptor) -> URL:
    """Translate a descriptor into a SQLAlchemy URL.

    Explicit credentials on the descriptor win over any embedded in the URL.
    """

    raw = descriptor.url
    if raw.startswith(URL_SCHEME_PREFIX):
        raw = raw[len(URL_SCHEME_PREFIX):]
    url = make_url(raw)
    if url.drivername in ("postgresql", "postgres"):
        url = url.set(drivername=POSTGRES_DIALECT)
    if descriptor.username is not None:
        url = url.set(username=descriptor.username)
    if descriptor.password is not None:
        url = url.set(password=descriptor.password)
    return url


class Database:
    """Engine and session factory built from a resolved descriptor."""

    def __init__(self, descriptor: ConnectionDescriptor) -> None:
        self.descriptor = descriptor
        url = engine_url(descriptor)

        engine_kwargs = {}
        # SQLite needs thread override for TestClient; in-memory gets StaticPool.
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self._sessions = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._sessions() as session:
            yield session

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def _to_trail(row: TrailModel) -> Trail:
    return Trail(
        id=row.id,
        name=row.name,
        description=row.description,
        distance=row.distance,
        elevation_gain=row.elevation_gain,
        elevation_loss=row.elevation_loss,
        duration_minutes=row.duration_minutes,
        max_slope=row.max_slope,
        avg_slope=row.avg_slope,
        terrain=row.terrain_json,
        difficulty=row.difficulty,
        hazards=row.hazards_json,
        source=row.source,
        latitude=row.latitude,
        longitude=row.longitude,
        waypoints=row.waypoints_json,
        trail_marking=row.trail_marking,
        is_circular=row.is_circular,
    )


class TrailRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    def add(self, trail: TrailCreate) -> Trail:
        with self._db.session() as session:
            model = TrailModel(
                name=trail.name,
                description=trail.description,
                distance=trail.distance,
                elevation_gain=trail.elevation_gain,
                elevation_loss=trail.elevation_loss,
                duration_minutes=trail.duration_minutes,
                max_slope=trail.max_slope,
                avg_slope=trail.avg_slope,
                terrain_json=trail.terrain,
                difficulty=trail.difficulty,
                hazards_json=trail.hazards,
                source=trail.source,
                latitude=trail.latitude,
                longitude=trail.longitude,
                waypoints_json=trail.waypoints,
                trail_marking=trail.trail_marking,
                is_circular=trail.is_circular,
            )
            if trail.id:
                model.id = trail.id
            session.add(model)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateTrailError(f"trail {trail.id!r} already exists") from exc
            session.refresh(model)
            return _to_trail(model)

    def get(self, trail_id: str) -> Optional[Trail]:
        with self._db.session() as session:
            row = session.get(TrailModel, trail_id)
            return _to_trail(row) if row is not None else None

    def count(self) -> int:
        with self._db.session() as session:
            return session.scalar(select(func.count()).select_from(TrailModel)) or 0

    def find_by_difficulty(self, difficulty: str) -> List[Trail]:
        with self._db.session() as session:
            rows = session.execute(
                select(TrailModel).where(TrailModel.difficulty == difficulty)
            ).scalars().all()
        return [_to_trail(row) for row in rows]

    def find_in_area(self, difficulty: Optional[str] = None) -> List[Trail]:
        """Trails ordered by name, optionally filtered by exact difficulty.

        Despite the name this does no geographic filtering (PostGIS not wired).
        """

        query = select(TrailModel)
        if difficulty is not None:
            query = query.where(TrailModel.difficulty == difficulty)
        query = query.order_by(TrailModel.name.asc())

        with self._db.session() as session:
            rows = session.execute(query).scalars().all()
        return [_to_trail(row) for row in rows]
