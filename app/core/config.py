from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field("sqlite+aiosqlite:///./sdms.db", alias="DATABASE_URL")

    jwt_secret_key: str = Field("change-me", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(480, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    school_name: str = Field("ETP Nyarurema", alias="SCHOOL_NAME")
    total_base_marks: int = Field(40, alias="TOTAL_BASE_MARKS")
    login_events_cap: int = Field(100, alias="LOGIN_EVENTS_CAP")
    weekend_dismissal_days: int = Field(3, alias="WEEKEND_DISMISSAL_DAYS")
    exit_permission_default_days: int = Field(7, alias="EXIT_PERMISSION_DEFAULT_DAYS")

    # Africa's Talking messaging; when disabled, messages are only written to the log.
    sms_enabled: bool = Field(False, alias="SMS_ENABLED")
    sms_api_key: Optional[str] = Field(None, alias="SMS_API_KEY")
    sms_username: str = Field("sandbox", alias="SMS_USERNAME")
    sms_base_url: str = Field(
        "https://api.sandbox.africastalking.com/version1/messaging", alias="SMS_BASE_URL"
    )
    sms_timeout_seconds: float = Field(10.0, alias="SMS_TIMEOUT_SECONDS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
