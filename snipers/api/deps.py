from typing import Optional, TypeVar

from fastapi import Depends, Request

from snipers.core.config import Settings
from snipers.core.errors import AuthenticationError, AuthorizationError, NotFoundError
from snipers.core.security import decode_session_token
from snipers.services.otp import OtpCache
from snipers.services.repository import Repository
from snipers.services.sessions import SessionStore

OwnedT = TypeVar("OwnedT")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def get_otp_cache(request: Request) -> OtpCache:
    return request.app.state.otp_cache


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_id(request: Request, settings: Settings = Depends(get_app_settings)) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    return decode_session_token(token, settings.secret_key)


def get_current_user_id(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
) -> int:
    user_id = sessions.resolve(session_id) if session_id else None
    if user_id is None:
        raise AuthenticationError("Unauthorized")
    return user_id


def ensure_owner(entity: Optional[OwnedT], user_id: int, label: str, action: str = "access") -> OwnedT:
    """Missing entity -> 404, someone else's entity -> 403."""
    if entity is None:
        raise NotFoundError(f"{label.capitalize()} not found")
    if entity.user_id != user_id:
        raise AuthorizationError(f"Not authorized to {action} this {label}")
    return entity
