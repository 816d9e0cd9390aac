import logging
import random
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict

from snipers.core.errors import ExpiredCodeError, InvalidCodeError, MissingCodeError

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999


@dataclass(frozen=True)
class IssuedCode:
    code: str
    issued_at: float


def generate_code() -> str:
    return str(random.randint(OTP_MIN, OTP_MAX))


class OtpCache:
    """One outstanding signup code per email, expiring on read.

    Issuing again for the same email replaces the previous code. A code is
    removed once it is verified or found expired; a wrong guess leaves it in
    place until it expires.
    """

    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._codes: Dict[str, IssuedCode] = {}
        self._lock = Lock()

    def issue(self, email: str) -> str:
        code = generate_code()
        with self._lock:
            self._codes[email] = IssuedCode(code=code, issued_at=self._clock())
        return code

    def verify(self, email: str, code: str) -> None:
        with self._lock:
            entry = self._codes.get(email)
            if entry is None:
                raise MissingCodeError()
            if self._clock() - entry.issued_at > self.ttl_seconds:
                del self._codes[email]
                raise ExpiredCodeError()
            if entry.code != code:
                raise InvalidCodeError()
            del self._codes[email]

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [email for email, entry in self._codes.items() if now - entry.issued_at > self.ttl_seconds]
            for email in expired:
                del self._codes[email]
        if expired:
            logger.info("Purged %d expired signup codes", len(expired))
        return len(expired)

    def __contains__(self, email: str) -> bool:
        with self._lock:
            return email in self._codes

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)
