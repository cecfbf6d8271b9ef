from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings
import os


def _env_flag(value, default: bool) -> bool:
    # Only the literal string "true" (any case) switches a flag on
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class Settings(BaseSettings):
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DATABASE: str = os.getenv("MONGO_DATABASE", "artschool")

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    SCHOOL_NAME: str = "Gallagher Art School"
    FRONTEND_URL: str = "http://localhost:5001"
    SUPPORT_EMAIL: str = "hello@gallagherartschool.com"

    # Display only; the dispatch endpoint reads its own flag per request
    EMAIL_DRY_RUN_BANNER: bool = True

    # Where the signup flow posts its welcome email
    EMAIL_ENDPOINT_URL: str = "http://localhost:5001/api/send-email"
    EMAIL_NOTIFY_TIMEOUT_SECONDS: float = 10.0

    @field_validator("EMAIL_DRY_RUN_BANNER", mode="before")
    @classmethod
    def parse_banner_flag(cls, v):
        return _env_flag(v, default=True)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class EmailDispatchConfig(BaseSettings):
    """
    Configuration of the email dispatch endpoint.

    Built fresh for every request so flipping EMAIL_DRY_RUN or rotating the
    Postmark token takes effect without a restart.
    """
    EMAIL_DRY_RUN: bool = True
    POSTMARK_SERVER_TOKEN: Optional[str] = None
    POSTMARK_FROM_EMAIL: Optional[str] = None
    POSTMARK_API_URL: str = "https://api.postmarkapp.com/email"
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    @field_validator("EMAIL_DRY_RUN", mode="before")
    @classmethod
    def parse_dry_run(cls, v):
        return _env_flag(v, default=True)

    @property
    def is_configured(self) -> bool:
        return bool(self.POSTMARK_SERVER_TOKEN) and bool(self.POSTMARK_FROM_EMAIL)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# create a singleton instance
settings = Settings()
