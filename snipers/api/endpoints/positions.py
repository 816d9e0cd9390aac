from typing import List

from fastapi import APIRouter, Depends, Path, status

from snipers.api.deps import ensure_owner, get_current_user_id, get_repository
from snipers.schemas.common import MAX_INT, MessageResponse
from snipers.schemas.positions import PositionCreate, PositionResponse, PositionUpdate
from snipers.services.repository import Repository

router = APIRouter()


@router.get("/positions", response_model=List[PositionResponse])
def list_positions(user_id: int = Depends(get_current_user_id), repo: Repository = Depends(get_repository)):
    return repo.get_positions(user_id)


@router.get("/positions/{position_id}", response_model=PositionResponse)
def get_position(
    position_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return ensure_owner(repo.get_position(position_id), user_id, "position")


@router.post("/positions", response_model=PositionResponse, status_code=status.HTTP_201_CREATED)
def create_position(
    payload: PositionCreate,
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return repo.create_position(user_id, **payload.model_dump())


@router.patch("/positions/{position_id}", response_model=PositionResponse, summary="Update prices / P&L")
def update_position(
    payload: PositionUpdate,
    position_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    ensure_owner(repo.get_position(position_id), user_id, "position", "update")
    return repo.update_position(position_id, payload.model_dump(exclude_unset=True))


@router.delete("/positions/{position_id}", response_model=MessageResponse, summary="Close a position")
def delete_position(
    position_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
) -> MessageResponse:
    ensure_owner(repo.get_position(position_id), user_id, "position", "delete")
    repo.delete_position(position_id)
    return MessageResponse(message="Position deleted successfully")
