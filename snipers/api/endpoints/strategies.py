from typing import List

from fastapi import APIRouter, Depends, Path, status

from snipers.api.deps import ensure_owner, get_current_user_id, get_repository
from snipers.schemas.common import MAX_INT, MessageResponse
from snipers.schemas.strategies import StrategyCreate, StrategyResponse, StrategyUpdate
from snipers.services.repository import Repository

router = APIRouter()


@router.get("/strategies", response_model=List[StrategyResponse])
def list_strategies(user_id: int = Depends(get_current_user_id), repo: Repository = Depends(get_repository)):
    return repo.get_strategies(user_id)


@router.get("/strategies/deployed", response_model=List[StrategyResponse])
def list_deployed_strategies(user_id: int = Depends(get_current_user_id), repo: Repository = Depends(get_repository)):
    return repo.get_deployed_strategies(user_id)


@router.get("/strategies/{strategy_id}", response_model=StrategyResponse)
def get_strategy(
    strategy_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return ensure_owner(repo.get_strategy(strategy_id), user_id, "strategy")


@router.post("/strategies", response_model=StrategyResponse, status_code=status.HTTP_201_CREATED)
def create_strategy(
    payload: StrategyCreate,
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    return repo.create_strategy(user_id, **payload.model_dump())


@router.patch("/strategies/{strategy_id}", response_model=StrategyResponse)
def update_strategy(
    payload: StrategyUpdate,
    strategy_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
):
    ensure_owner(repo.get_strategy(strategy_id), user_id, "strategy", "update")
    return repo.update_strategy(strategy_id, payload.model_dump(exclude_unset=True))


@router.delete("/strategies/{strategy_id}", response_model=MessageResponse)
def delete_strategy(
    strategy_id: int = Path(..., ge=1, le=MAX_INT),
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
) -> MessageResponse:
    ensure_owner(repo.get_strategy(strategy_id), user_id, "strategy", "delete")
    repo.delete_strategy(strategy_id)
    return MessageResponse(message="Strategy deleted successfully")
