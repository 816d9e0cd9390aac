import hashlib
import hmac
import os
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError, jwt

ALGORITHM = "HS256"


def hash_password(password: str, salt: str | None = None) -> Tuple[str, str]:
    """Return (hash, salt) using SHA256 with salt."""
    salt = salt or os.urandom(16).hex()
    digest = hashlib.sha256((salt + password).encode("utf-8")).hexdigest()
    return digest, salt


def verify_password(password: str, hashed: str, salt: str) -> bool:
    computed, _ = hash_password(password, salt)
    return hmac.compare_digest(computed, hashed)


def create_session_token(session_id: str, secret_key: str, expires_delta: timedelta) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    return jwt.encode({"sid": session_id, "exp": expire}, secret_key, algorithm=ALGORITHM)


def decode_session_token(token: str, secret_key: str) -> Optional[str]:
    """Return the session id carried by ``token``, or None if it is tampered or expired."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None
