from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_ENVIRONMENTS = ("dev", "local", "test")


class Settings(BaseSettings):
    """Centralized application configuration."""

    app_name: str = "Crypto Snipers"
    environment: str = "dev"
    api_prefix: str = "/api"
    allowed_origins: List[str] = ["*"]

    # Storage
    database_url: str = "sqlite://"
    seed_demo_data: bool = True

    # Sessions
    secret_key: str = "crypto-snipers-secret"
    session_cookie_name: str = "sid"
    session_ttl_days: int = 7
    session_sweep_minutes: int = 24 * 60

    # Signup codes
    otp_ttl_seconds: int = 5 * 60
    otp_sweep_minutes: int = 5
    otp_delivery: str = "log"  # log|email

    # Mail
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from: str = "no-reply@example.com"
    smtp_use_tls: bool = True

    # Logging
    log_level: str = "INFO"

    scheduler_enabled: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def secure_cookies(self) -> bool:
        return self.environment not in LOCAL_ENVIRONMENTS

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
