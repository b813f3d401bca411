"""Token tool settings loaded from environment variables."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXPIRATION_DEFAULT = 2_592_000
MAX_EXPIRATION_DEFAULT = 15_777_000
ID_LENGTH_DEFAULT = 10
TIME_TOLERANCE_DEFAULT = 0

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TokenSettings(BaseSettings):
    """Defaults and limits applied by the command line."""

    model_config = SettingsConfigDict(env_prefix="AMTT_")

    default_expiration: int = DEFAULT_EXPIRATION_DEFAULT
    max_expiration: int = MAX_EXPIRATION_DEFAULT
    id_length: int = ID_LENGTH_DEFAULT
    time_tolerance: int = TIME_TOLERANCE_DEFAULT
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
