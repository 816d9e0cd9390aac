from datetime import timedelta

from fastapi import APIRouter, Depends, Response

from snipers.api.deps import (
    get_app_settings,
    get_otp_cache,
    get_repository,
    get_session_id,
    get_session_store,
)
from snipers.core.config import Settings
from snipers.core.security import create_session_token
from snipers.schemas.auth import (
    AuthResponse,
    RegistrationRequest,
    SignInRequest,
    SignupRequest,
    UserSummary,
    VerifyOtpRequest,
)
from snipers.schemas.common import MessageResponse
from snipers.services import auth_service
from snipers.services.otp import OtpCache
from snipers.services.repository import Repository
from snipers.services.sessions import SessionStore

router = APIRouter()


def _start_session(response: Response, user_id: int, sessions: SessionStore, settings: Settings) -> None:
    session_id = sessions.create(user_id)
    token = create_session_token(session_id, settings.secret_key, timedelta(days=settings.session_ttl_days))
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


@router.post("/auth/signup", response_model=MessageResponse, summary="Request a signup code")
def signup(
    payload: SignupRequest,
    repo: Repository = Depends(get_repository),
    otp_cache: OtpCache = Depends(get_otp_cache),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    auth_service.start_signup(repo, otp_cache, settings, payload.email)
    return MessageResponse(message="OTP sent successfully")


@router.post("/auth/verify-otp", response_model=MessageResponse, summary="Verify a signup code")
def verify_otp(payload: VerifyOtpRequest, otp_cache: OtpCache = Depends(get_otp_cache)) -> MessageResponse:
    auth_service.verify_signup_code(otp_cache, payload.email, payload.otp)
    return MessageResponse(message="OTP verified successfully")


@router.post("/auth/complete-registration", response_model=AuthResponse, summary="Create the account")
def complete_registration(
    payload: RegistrationRequest,
    response: Response,
    repo: Repository = Depends(get_repository),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    user = auth_service.complete_registration(repo, payload)
    _start_session(response, user.id, sessions, settings)
    return AuthResponse(message="Registration completed successfully", user=UserSummary.model_validate(user))


@router.post("/auth/signin", response_model=AuthResponse, summary="Sign in with email and password")
def signin(
    payload: SignInRequest,
    response: Response,
    repo: Repository = Depends(get_repository),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    user = auth_service.authenticate_user(repo, payload.email, payload.password)
    _start_session(response, user.id, sessions, settings)
    return AuthResponse(message="Login successful", user=UserSummary.model_validate(user))


@router.post("/auth/signout", response_model=MessageResponse, summary="Destroy the current session")
def signout(
    response: Response,
    session_id: str | None = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    if session_id:
        sessions.destroy(session_id)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logout successful")
