from typing import Optional

from pydantic import Field

from snipers.schemas.common import CamelModel


class SignupRequest(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None


class VerifyOtpRequest(CamelModel):
    email: Optional[str] = None
    otp: Optional[str] = None


class RegistrationRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    password: str = Field(..., min_length=1)
    api_key: Optional[str] = None
    api_secret: Optional[str] = None


class SignInRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserSummary(CamelModel):
    id: int
    username: str
    email: str
    name: Optional[str] = None


class UserProfile(UserSummary):
    phone: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    user: UserSummary
