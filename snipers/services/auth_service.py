import logging

from snipers.core.config import Settings
from snipers.core.errors import AuthenticationError, ConflictError, ValidationError
from snipers.core.security import hash_password, verify_password
from snipers.models import User
from snipers.schemas.auth import RegistrationRequest
from snipers.services import notifications
from snipers.services.otp import OtpCache
from snipers.services.repository import Repository

logger = logging.getLogger(__name__)


def start_signup(repo: Repository, otp_cache: OtpCache, settings: Settings, email: str | None) -> None:
    if not email:
        raise ValidationError("Email is required")
    if repo.get_user_by_email(email):
        raise ConflictError("User with this email already exists")
    code = otp_cache.issue(email)
    notifications.send_otp(settings, email, code)


def verify_signup_code(otp_cache: OtpCache, email: str | None, otp: str | None) -> None:
    if not email or not otp:
        raise ValidationError("Email and OTP are required")
    otp_cache.verify(email, otp)
    logger.info("Signup code verified for %s", email)


def complete_registration(repo: Repository, payload: RegistrationRequest) -> User:
    password_hash, password_salt = hash_password(payload.password)
    with repo.atomic():
        if repo.get_user_by_email(payload.email):
            raise ConflictError("User with this email already exists")
        if repo.get_user_by_username(payload.username):
            raise ConflictError("Username is already taken")
        user = repo.create_user(
            username=payload.username,
            email=payload.email,
            name=payload.name,
            phone=payload.phone,
            password_hash=password_hash,
            password_salt=password_salt,
            api_key=payload.api_key,
            api_secret=payload.api_secret,
        )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate_user(repo: Repository, email: str | None, password: str | None) -> User:
    if not email or not password:
        raise ValidationError("Email and password are required")
    user = repo.get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash, user.password_salt):
        raise AuthenticationError("Invalid credentials")
    return user
