import uuid
from datetime import datetime

from sqlalchemy import Column, Float, Integer, String, Boolean, JSON, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class TrailModel(Base):
    __tablename__ = "trails"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, index=True, nullable=False)
    description = Column(String, nullable=False, default="")
    distance = Column(Float, nullable=False)
    elevation_gain = Column(Integer, nullable=False, default=0)
    elevation_loss = Column(Integer, nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False, default=0)
    max_slope = Column(Float, nullable=False, default=0.0)
    avg_slope = Column(Float, nullable=False, default=0.0)
    terrain_json = Column(JSON, nullable=False, default=list)
    difficulty = Column(String, index=True, nullable=False)
    hazards_json = Column(JSON, nullable=False, default=list)
    source = Column(String, nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    waypoints_json = Column(JSON, nullable=False, default=list)
    trail_marking = Column(String, nullable=True)
    is_circular = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
