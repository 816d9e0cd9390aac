from typing import List

from fastapi import APIRouter, Depends, Query, status

from snipers.api.deps import get_current_user_id, get_repository
from snipers.core.errors import NotFoundError
from snipers.schemas.common import MAX_INT
from snipers.schemas.portfolio import SnapshotCreate, SnapshotResponse
from snipers.services.repository import DEFAULT_HISTORY_LIMIT, Repository

router = APIRouter()


@router.get("/portfolio", response_model=SnapshotResponse, summary="Latest portfolio snapshot")
def latest_snapshot(user_id: int = Depends(get_current_user_id), repo: Repository = Depends(get_repository)):
    snapshot = repo.get_latest_portfolio_snapshot(user_id)
    if not snapshot:
        raise NotFoundError("No portfolio data found")
    return snapshot


@router.get("/portfolio/history", response_model=List[SnapshotResponse], summary="Most recent snapshots first")
def snapshot_history(
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=0, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return repo.get_portfolio_snapshots(user_id, limit)


@router.post("/portfolio/snapshot", response_model=SnapshotResponse, status_code=status.HTTP_201_CREATED)
def create_snapshot(
    payload: SnapshotCreate,
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return repo.create_portfolio_snapshot(user_id, **payload.model_dump())
