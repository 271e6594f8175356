"""Configuration — polling parameters from CLI flags, process settings from env."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

DEFAULT_TIMEOUT = 10  # seconds
DEFAULT_REPEATED_SUCCESSES = 1


class PollConfig(BaseModel):
    """Parameters of a single polling run, built once from the command line."""

    model_config = {"frozen": True}

    timeout: int = Field(DEFAULT_TIMEOUT, ge=0)  # total wait budget, seconds
    repeated_successes: int = DEFAULT_REPEATED_SUCCESSES


class Settings(BaseSettings):
    """Ambient process settings loaded from the environment.

    Nothing here changes how a resource is polled.
    """

    model_config = {
        "env_prefix": "AWFI_",
        "extra": "ignore",
    }

    # Logging (stderr; stdout is reserved for the result)
    log_level: str = "WARNING"


settings = Settings()
