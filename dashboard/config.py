# dashboard/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    api_base_url: str = Field(
        "https://51fc-102-90-115-22.ngrok-free.app",
        validation_alias="API_BASE_URL",
    )
    request_timeout: float | None = Field(None, validation_alias="REQUEST_TIMEOUT")

    # Stand-in until real sign-in exists; only read through get_doctor_session()
    doctor_id: str = Field("DR001234", validation_alias="DOCTOR_ID")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(["*"], validation_alias="CORS_ALLOW_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
