"""Runtime settings for the metadata lookup service."""
from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_API_ENDPOINT = "http://docman.lcpu.dev"


class Settings(BaseModel):
    api_endpoint: str = Field(DEFAULT_API_ENDPOINT, description="Base URL of the lookup service")
    lookup_timeout: float = Field(10.0, description="Per-request timeout in seconds")
    user_agent: str = "docman/0.1"

    @field_validator("api_endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_endpoint must not be empty")
        return value

    @field_validator("lookup_timeout")
    @classmethod
    def ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("lookup_timeout must be positive")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        values = {}
        endpoint = os.getenv("DOCMAN_API_ENDPOINT")
        if endpoint:
            values["api_endpoint"] = endpoint
        timeout = os.getenv("DOCMAN_LOOKUP_TIMEOUT")
        if timeout:
            values["lookup_timeout"] = timeout
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid lookup settings: {exc}") from exc


__all__ = ["Settings", "DEFAULT_API_ENDPOINT"]
