from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel


class TrailBase(BaseModel):
    """Hiking trail as served to the map UI.

    Distances are kilometres, elevations metres, slopes percent. JSON field
    names are camelCase on the wire; snake_case is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str
    description: str = ""
    distance: float = Field(ge=0)
    elevation_gain: int = 0
    elevation_loss: int = 0
    duration_minutes: int = 0
    max_slope: float = 0.0
    avg_slope: float = 0.0
    terrain: List[str] = Field(default_factory=list)
    difficulty: str  # EASY / MEDIUM / HARD, matched exactly
    hazards: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    waypoints: List[List[float]] = Field(default_factory=list)
    trail_marking: Optional[str] = None  # e.g. BLUE_STRIPE, RED_CROSS
    is_circular: bool = False


class TrailCreate(TrailBase):
    id: Optional[str] = None


class Trail(TrailBase):
    id: str
