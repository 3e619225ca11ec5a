# telerelay/config.py
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "dev"
    APP_NAME: str = "telerelay"
    PORT: int = 1337
    LOG_LEVEL: str = "INFO"

    # Twilio config (API key auth, scoped to the account SID)
    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_API_KEY: Optional[str] = None
    TWILIO_API_KEY_SECRET: Optional[str] = None
    TWILIO_PHONE_NUMBER: Optional[str] = None  # our outbound caller ID

    # Outbound call document
    CALL_PAUSE_SECONDS: int = Field(default=10, ge=0)
    CONFERENCE_ROOM: str = "MyConferenceRoom"

    # Batch fan-out
    BATCH_POLICY: Literal["fail_fast", "best_effort"] = "fail_fast"
    DISPATCH_MAX_WORKERS: int = Field(default=1, ge=1, le=32)

    # Templating
    TEMPLATE_STYLE: Literal["literal", "legacy"] = "literal"
    TEMPLATE_SINGLE_SENDS: bool = False  # /sms and /call send the message as-is by default

    # Error tracking, off unless a DSN is given
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def twilio_missing(self) -> list[str]:
        """Names of the Twilio settings that are still unset."""
        required = {
            "TWILIO_ACCOUNT_SID": self.TWILIO_ACCOUNT_SID,
            "TWILIO_API_KEY": self.TWILIO_API_KEY,
            "TWILIO_API_KEY_SECRET": self.TWILIO_API_KEY_SECRET,
            "TWILIO_PHONE_NUMBER": self.TWILIO_PHONE_NUMBER,
        }
        return [name for name, value in required.items() if not value]


@lru_cache
def get_settings() -> Settings:
    return Settings()
