from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from ..auth import require_token
from ..db import DuplicateTrailError, TrailRepository
from ..metrics import TRAILS_KNOWN
from ..schemas import Trail, TrailCreate

router = APIRouter()


def get_repository(request: Request) -> TrailRepository:
    return request.app.state.trails


@router.get("", response_model=List[Trail])
async def list_trails(
    difficulty: Optional[str] = None,
    repo: TrailRepository = Depends(get_repository),
) -> List[Trail]:
    """All trails ordered by name, optionally narrowed to one difficulty."""
    return repo.find_in_area(difficulty)


@router.get("/difficulty/{difficulty}", response_model=List[Trail])
async def trails_by_difficulty(difficulty: str, repo: TrailRepository = Depends(get_repository)) -> List[Trail]:
    return repo.find_by_difficulty(difficulty)


@router.get("/{trail_id}", response_model=Trail)
async def get_trail(trail_id: str, repo: TrailRepository = Depends(get_repository)) -> Trail:
    trail = repo.get(trail_id)
    if trail is None:
        raise HTTPException(status_code=404, detail="Trail not found")
    return trail


@router.post("", response_model=Trail, status_code=201, dependencies=[Depends(require_token)])
async def create_trail(trail: TrailCreate, repo: TrailRepository = Depends(get_repository)) -> Trail:
    try:
        created = repo.add(trail)
    except DuplicateTrailError:
        raise HTTPException(status_code=409, detail="Trail already exists") from None
    TRAILS_KNOWN.set(repo.count())
    return created
