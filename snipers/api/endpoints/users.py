from fastapi import APIRouter, Depends

from snipers.api.deps import get_current_user_id, get_repository
from snipers.core.errors import NotFoundError
from snipers.schemas.auth import UserProfile
from snipers.services.repository import Repository

router = APIRouter()


@router.get("/user", response_model=UserProfile, summary="Current user's profile")
def current_user(
    user_id: int = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
) -> UserProfile:
    user = repo.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return UserProfile.model_validate(user)
